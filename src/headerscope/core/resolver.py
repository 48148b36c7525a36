"""Placeholder resolution against the parameter map."""

import re
from collections.abc import Mapping

from headerscope.core.constants import ResolutionSource
from headerscope.core.models import Resolution

# Whole-string {{key}} references only; embedded occurrences are plain values
PLACEHOLDER_PATTERN = re.compile(r"\{\{(.+?)\}\}")


def placeholder_key(raw_value: str) -> str | None:
    """Return the key inside a ``{{key}}`` placeholder, or None."""
    match = PLACEHOLDER_PATTERN.fullmatch(raw_value)
    return match.group(1) if match else None


def resolve_value(raw_value: str, param_map: Mapping[str, str]) -> Resolution:
    """Resolve a header cell value.

    A value is a placeholder only when the entire string has the form
    ``{{key}}``. A placeholder whose key is missing from ``param_map`` keeps
    its raw text so the gap stays visible in reports. Values taken from the
    map are returned as-is and never scanned again.

    Args:
        raw_value: The cell value as written in the header table.
        param_map: Parameter values keyed by name.

    Returns:
        Resolution describing the outcome.
    """
    key = placeholder_key(raw_value)

    if key is None:
        return Resolution(
            is_placeholder=False,
            resolved_value=raw_value,
            resolved_from=ResolutionSource.DIRECT,
        )

    if key in param_map:
        return Resolution(
            is_placeholder=True,
            resolved_value=param_map[key],
            resolved_from=ResolutionSource.FROM_MAP,
        )

    return Resolution(
        is_placeholder=True,
        resolved_value=raw_value,
        resolved_from=ResolutionSource.UNRESOLVED,
    )
