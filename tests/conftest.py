"""Shared fixtures for Headerscope tests."""

import io
import zipfile

import pytest

SAMPLE_IFLW = """<?xml version="1.0" encoding="UTF-8"?>
<bpmn2:definitions xmlns:bpmn2="http://www.omg.org/spec/BPMN/20100524/MODEL"
                   xmlns:ifl="http:///com.sap.ifl.model/Ifl.xsd" id="Definitions_1">
  <bpmn2:process id="Process_1" name="Integration Process">
    <bpmn2:callActivity id="CallActivity_1" name="Set Headers">
      <bpmn2:extensionElements>
        <ifl:property><key>componentVersion</key><value>1.5</value></ifl:property>
        <ifl:property>
          <key>headerTable</key>
          <value>&lt;row&gt;&lt;cell id='Action'&gt;Create&lt;/cell&gt;&lt;cell id='Name'&gt;SAP_Receiver&lt;/cell&gt;&lt;cell id='Value'&gt;{{CallActivity_1_SAP_Receiver}}&lt;/cell&gt;&lt;/row&gt;&lt;row&gt;&lt;cell id='Name'&gt;Retry&lt;/cell&gt;&lt;cell id='Value'&gt;true&lt;/cell&gt;&lt;/row&gt;</value>
        </ifl:property>
      </bpmn2:extensionElements>
    </bpmn2:callActivity>
    <bpmn2:callActivity id="CallActivity_5" name="Empty Headers">
      <bpmn2:extensionElements>
        <ifl:property><key>headerTable</key><value/></ifl:property>
      </bpmn2:extensionElements>
    </bpmn2:callActivity>
    <bpmn2:subProcess id="SubProcess_1" name="Exception Subprocess">
      <bpmn2:callActivity id="CallActivity_9" name="Error Headers">
        <bpmn2:extensionElements>
          <ifl:property>
            <key>headerTable</key>
            <value>&lt;row&gt;&lt;cell id='Name'&gt;ErrorTarget&lt;/cell&gt;&lt;cell id='Value'&gt;{{Missing_Key}}&lt;/cell&gt;&lt;/row&gt;</value>
          </ifl:property>
        </bpmn2:extensionElements>
      </bpmn2:callActivity>
    </bpmn2:subProcess>
  </bpmn2:process>
</bpmn2:definitions>
"""

SAMPLE_PROPS = """# Parameters
CallActivity_1_SAP_Receiver=S4HCLNT100
Unused=value=with=equals
"""

PROP_PATH = "MyFlow/src/main/resources/parameters.prop"
IFLW_PATH = "MyFlow/src/main/resources/scenarioflows/integrationflow/MyFlow.iflw"


def build_archive(files: dict[str, str]) -> bytes:
    """Build an in-memory zip from a path -> text mapping."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in files.items():
            archive.writestr(name, content)
    return buffer.getvalue()


@pytest.fixture
def sample_iflw() -> str:
    return SAMPLE_IFLW


@pytest.fixture
def sample_archive() -> bytes:
    return build_archive({PROP_PATH: SAMPLE_PROPS, IFLW_PATH: SAMPLE_IFLW})


@pytest.fixture
def make_archive():
    """Factory building archives; ``None`` drops the default entry."""

    def _make(
        prop: str | None = SAMPLE_PROPS,
        iflw: str | None = SAMPLE_IFLW,
        extra: dict[str, str] | None = None,
    ) -> bytes:
        files = dict(extra or {})
        if prop is not None:
            files[PROP_PATH] = prop
        if iflw is not None:
            files[IFLW_PATH] = iflw
        return build_archive(files)

    return _make
