"""Parser for ``parameters.prop`` files."""

import logging
import re
from collections.abc import Mapping
from types import MappingProxyType

logger = logging.getLogger(__name__)

_LINE_SPLIT = re.compile(r"\r?\n")


def parse_properties(content: str) -> Mapping[str, str]:
    """Parse Java-style properties text into a read-only map.

    Blank lines, ``#`` comments and lines without ``=`` are ignored. Each
    remaining line is split on its first ``=``; key and value are trimmed
    and an empty value is kept. Later duplicates win.

    Args:
        content: Raw text of the properties file.

    Returns:
        Read-only mapping of keys to values.
    """
    params: dict[str, str] = {}

    for raw_line in _LINE_SPLIT.split(content):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        key, sep, value = line.partition("=")
        if not sep:
            continue

        params[key.strip()] = value.strip()

    logger.info("parameters.prop: %d key(s) loaded", len(params))
    return MappingProxyType(params)
