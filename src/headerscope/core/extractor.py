"""Header extraction: decode, resolve and aggregate per call activity."""

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from functools import partial

from headerscope.core.header_table import decode_header_table
from headerscope.core.models import CallActivity, ProcessDocument, ResolvedHeaderRecord
from headerscope.core.navigator import collect_call_activities
from headerscope.core.resolver import resolve_value

logger = logging.getLogger(__name__)


def extract_call_activity(
    call_activity: CallActivity,
    param_map: Mapping[str, str],
    *,
    mark_unparseable: bool = False,
) -> list[ResolvedHeaderRecord]:
    """Extract the resolved headers of a single call activity.

    Args:
        call_activity: The call activity to extract.
        param_map: Parameter values used to resolve placeholders.
        mark_unparseable: Emit a marker record for a non-blank header table
            that yields no rows, instead of omitting it.

    Returns:
        Records in document order. A blank header table yields exactly one
        sentinel record.
    """
    records: list[ResolvedHeaderRecord] = []

    for raw_text in call_activity.header_tables:
        rows = decode_header_table(raw_text, call_activity_id=call_activity.id)

        for row in rows:
            resolution = resolve_value(row.raw_value, param_map)
            records.append(
                ResolvedHeaderRecord(
                    call_activity_id=call_activity.id,
                    call_activity_name=call_activity.name,
                    header_name=row.name,
                    raw_value=row.raw_value,
                    resolved_value=resolution.resolved_value,
                    is_placeholder=resolution.is_placeholder,
                    resolved_from=resolution.resolved_from,
                )
            )

        if rows:
            continue

        if not raw_text.strip():
            records.append(ResolvedHeaderRecord.empty_table(call_activity))
        elif mark_unparseable:
            records.append(ResolvedHeaderRecord.unparseable_table(call_activity, raw_text))

    return records


def extract_headers(
    document: ProcessDocument,
    param_map: Mapping[str, str],
    *,
    max_workers: int | None = None,
    mark_unparseable: bool = False,
) -> list[ResolvedHeaderRecord]:
    """Extract and resolve every header table in a process document.

    Call activities are independent of each other. With ``max_workers``
    above one they are extracted on a thread pool; results are always
    reassembled in traversal order.

    Args:
        document: The parsed process document.
        param_map: Parameter values used to resolve placeholders.
        max_workers: Thread pool size (None or 1 for sequential).
        mark_unparseable: See ``extract_call_activity``.

    Returns:
        Resolved header records, call activities in traversal order and
        rows in document order.

    Raises:
        MalformedDocumentError: If the document has no process node.
    """
    call_activities = collect_call_activities(document)
    extract_one = partial(
        extract_call_activity,
        param_map=param_map,
        mark_unparseable=mark_unparseable,
    )

    if max_workers is not None and max_workers > 1 and len(call_activities) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            per_activity = list(executor.map(extract_one, call_activities))
    else:
        per_activity = [extract_one(ca) for ca in call_activities]

    records = [record for batch in per_activity for record in batch]
    logger.debug(
        "Extracted %d record(s) from %d call activit(ies)",
        len(records),
        len(call_activities),
    )
    return records
