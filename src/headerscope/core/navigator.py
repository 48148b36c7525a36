"""Traversal of call activities in a process document."""

from collections.abc import Iterator

from headerscope.core.errors import MalformedDocumentError
from headerscope.core.models import CallActivity, ProcessDocument


def iter_call_activities(document: ProcessDocument) -> Iterator[CallActivity]:
    """Yield every call activity in extraction order.

    For each process, its direct call activities come first, followed by
    those of each sub-process. Processes are visited in document order.

    Args:
        document: The parsed process document.

    Yields:
        CallActivity nodes.

    Raises:
        MalformedDocumentError: If the document has no process node.
    """
    if not document.processes:
        raise MalformedDocumentError("No <bpmn2:process> found in the iflow XML.")

    for process in document.processes:
        yield from process.call_activities
        for sub_process in process.sub_processes:
            yield from sub_process.call_activities


def collect_call_activities(document: ProcessDocument) -> list[CallActivity]:
    """Return all call activities of ``document`` as a list.

    Raises:
        MalformedDocumentError: If the document has no process node.
    """
    return list(iter_call_activities(document))
