"""Decoder for the entity-escaped header tables stored on call activities."""

import logging

from lxml import etree

from headerscope.core.constants import NAME_CELL, VALUE_CELL
from headerscope.core.models import HeaderRow

logger = logging.getLogger(__name__)

# Order matters: &amp; must be undone after the angle brackets
_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&apos;", "'"),
)


def decode_entities(text: str) -> str:
    """Un-escape the five standard markup entities.

    Args:
        text: Entity-escaped markup.

    Returns:
        The literal markup.
    """
    for entity, literal in _ENTITIES:
        text = text.replace(entity, literal)
    return text


def _table_parser() -> etree.XMLParser:
    # Parser instances must not be shared between threads
    return etree.XMLParser(resolve_entities=False, no_network=True)


def _cell_map(row: etree._Element) -> dict[str, str]:
    cells: dict[str, str] = {}
    for cell in row.findall("cell"):
        cells[cell.get("id", "")] = (cell.text or "").strip()
    return cells


def decode_header_table(raw_value: str, *, call_activity_id: str = "") -> list[HeaderRow]:
    """Decode a ``headerTable`` property value into header rows.

    The value is a bare list of ``<row>`` elements, entity-escaped inside
    the surrounding process markup. It is un-escaped, wrapped in a
    synthetic ``<table>`` root and parsed. Rows without a ``Name`` cell are
    skipped.

    Args:
        raw_value: Raw property value.
        call_activity_id: Owning call activity, used in diagnostics.

    Returns:
        Header rows in document order. Empty for a blank value or when the
        embedded markup cannot be parsed.
    """
    trimmed = raw_value.strip()
    if not trimmed:
        return []

    wrapped = f"<table>{decode_entities(trimmed)}</table>"

    try:
        table = etree.fromstring(wrapped.encode("utf-8"), parser=_table_parser())
    except etree.XMLSyntaxError as e:
        logger.warning(
            "Could not parse headerTable XML for %s: %s", call_activity_id or "<unknown>", e
        )
        return []

    rows: list[HeaderRow] = []
    for row in table.findall("row"):
        cells = _cell_map(row)
        if NAME_CELL not in cells:
            continue
        rows.append(HeaderRow(name=cells[NAME_CELL], raw_value=cells.get(VALUE_CELL, "")))

    return rows
