"""Parser turning integration-flow XML into a ProcessDocument."""

import logging

from lxml import etree

from headerscope.core.constants import UNKNOWN_CALL_ACTIVITY_ID, UNNAMED_CALL_ACTIVITY
from headerscope.core.errors import MalformedDocumentError
from headerscope.core.models import (
    CallActivity,
    ProcessDocument,
    ProcessNode,
    Property,
    SubProcess,
)

logger = logging.getLogger(__name__)


def _local_name(element: etree._Element) -> str:
    # Comments and processing instructions have no string tag
    if not isinstance(element.tag, str):
        return ""
    return etree.QName(element).localname


def _children(element: etree._Element, name: str) -> list[etree._Element]:
    return [child for child in element if _local_name(child) == name]


def _text(element: etree._Element | None) -> str:
    if element is None:
        return ""
    return (element.text or "").strip()


def _parse_property(element: etree._Element) -> Property:
    keys = _children(element, "key")
    values = _children(element, "value")
    return Property(
        key=_text(keys[0] if keys else None),
        value=_text(values[0] if values else None),
    )


def _parse_call_activity(element: etree._Element) -> CallActivity:
    properties = [
        _parse_property(prop)
        for ext in _children(element, "extensionElements")
        for prop in _children(ext, "property")
    ]
    return CallActivity(
        id=element.get("id", UNKNOWN_CALL_ACTIVITY_ID),
        name=element.get("name", UNNAMED_CALL_ACTIVITY),
        properties=tuple(properties),
    )


def _parse_call_activities(element: etree._Element) -> tuple[CallActivity, ...]:
    return tuple(_parse_call_activity(ca) for ca in _children(element, "callActivity"))


def _parse_process(element: etree._Element) -> ProcessNode:
    sub_processes = tuple(
        SubProcess(id=sp.get("id"), call_activities=_parse_call_activities(sp))
        for sp in _children(element, "subProcess")
    )
    return ProcessNode(
        id=element.get("id"),
        call_activities=_parse_call_activities(element),
        sub_processes=sub_processes,
    )


def parse_iflow(content: str | bytes) -> ProcessDocument:
    """Parse integration-flow (``.iflw``) XML.

    Elements are matched by local name, so the ``bpmn2``/``ifl`` prefixes
    in use do not matter. Only processes that are direct children of the
    ``definitions`` root are considered; a different root yields an empty
    document.

    Args:
        content: The XML document.

    Returns:
        The parsed ProcessDocument.

    Raises:
        MalformedDocumentError: If the XML cannot be parsed.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")

    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
    try:
        root = etree.fromstring(content, parser=parser)
    except etree.XMLSyntaxError as e:
        raise MalformedDocumentError(f"Invalid iflow XML: {e}") from e

    if _local_name(root) != "definitions":
        logger.warning("Unexpected iflow root element: %s", _local_name(root) or root.tag)
        return ProcessDocument()

    processes = tuple(_parse_process(p) for p in _children(root, "process"))
    logger.debug("Parsed %d process node(s)", len(processes))
    return ProcessDocument(processes=processes)
