"""Core domain models and extraction logic."""

from headerscope.core.constants import (
    EMPTY_TABLE_SENTINEL,
    HEADER_TABLE_KEY,
    UNPARSEABLE_TABLE_MARKER,
    ResolutionSource,
)
from headerscope.core.errors import HeaderscopeError, MalformedDocumentError
from headerscope.core.extractor import extract_call_activity, extract_headers
from headerscope.core.header_table import decode_entities, decode_header_table
from headerscope.core.models import (
    CallActivity,
    HeaderRow,
    ProcessDocument,
    ProcessNode,
    Property,
    Resolution,
    ResolvedHeaderRecord,
    SubProcess,
    summarize,
)
from headerscope.core.navigator import iter_call_activities
from headerscope.core.resolver import resolve_value

__all__ = [
    "EMPTY_TABLE_SENTINEL",
    "HEADER_TABLE_KEY",
    "UNPARSEABLE_TABLE_MARKER",
    "ResolutionSource",
    "HeaderscopeError",
    "MalformedDocumentError",
    "extract_call_activity",
    "extract_headers",
    "decode_entities",
    "decode_header_table",
    "CallActivity",
    "HeaderRow",
    "ProcessDocument",
    "ProcessNode",
    "Property",
    "Resolution",
    "ResolvedHeaderRecord",
    "SubProcess",
    "summarize",
    "iter_call_activities",
    "resolve_value",
]
