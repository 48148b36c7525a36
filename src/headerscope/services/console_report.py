"""Plain-text rendering of extraction results."""

from headerscope.core.constants import ResolutionSource
from headerscope.core.models import ResolvedHeaderRecord, summarize

RULE_WIDTH = 72
NAME_WIDTH = 28
VALUE_WIDTH = 30


def _format_row(record: ResolvedHeaderRecord) -> str:
    if record.resolved_from == ResolutionSource.UNRESOLVED:
        value = record.raw_value
        source = "NOT FOUND in parameters.prop"
    elif record.resolved_from == ResolutionSource.FROM_MAP:
        value = record.resolved_value or "<empty>"
        source = "parameters.prop"
    else:
        value = record.resolved_value
        source = "direct value"
    return f"  {record.header_name:<{NAME_WIDTH}}{value:<{VALUE_WIDTH}}  {source}"


def format_results(records: list[ResolvedHeaderRecord], title: str) -> str:
    """Render records grouped by call activity, followed by a summary.

    Args:
        records: Extraction output of one artifact.
        title: Heading, usually the ``.iflw`` file name.

    Returns:
        The report text.
    """
    if not records:
        return f"No header entries found in {title}."

    grouped: dict[str, list[ResolvedHeaderRecord]] = {}
    for record in records:
        grouped.setdefault(record.call_activity_id, []).append(record)

    lines = ["=" * RULE_WIDTH, f"  iFlow File : {title}", "=" * RULE_WIDTH]

    for ca_id, rows in grouped.items():
        lines.append("")
        lines.append(f"  CallActivity: {rows[0].call_activity_name}  ({ca_id})")
        lines.append("  " + "-" * (RULE_WIDTH - 4))
        lines.append(f"  {'Header Name':<{NAME_WIDTH}}{'Value':<{VALUE_WIDTH}}  Source")
        lines.append("  " + "-" * (RULE_WIDTH - 4))

        for record in rows:
            if record.is_sentinel:
                lines.append("  (no header rows defined)")
            elif record.is_synthetic:
                lines.append("  (header table could not be parsed)")
            else:
                lines.append(_format_row(record))

    summary = summarize(records)
    lines.extend([
        "",
        "=" * RULE_WIDTH,
        "  Summary",
        f"     Total headers    : {summary.total}",
        f"     Direct values    : {summary.direct}",
        f"     From prop file   : {summary.from_map}",
        f"     Not resolved     : {summary.unresolved}",
    ])
    return "\n".join(lines)
