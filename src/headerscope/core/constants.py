"""Constants and enumerations for the Headerscope application."""

from enum import StrEnum


class ResolutionSource(StrEnum):
    """Where a header's resolved value came from."""

    DIRECT = "direct"
    FROM_MAP = "parameters.prop"
    UNRESOLVED = "NOT_FOUND"


# Property key holding the embedded header table
HEADER_TABLE_KEY = "headerTable"

# Cell identifiers inside a header table row
NAME_CELL = "Name"
VALUE_CELL = "Value"

# Reserved header names for synthetic records
EMPTY_TABLE_SENTINEL = "(empty headerTable)"
UNPARSEABLE_TABLE_MARKER = "(unparseable headerTable)"
SYNTHETIC_HEADER_NAMES = frozenset({EMPTY_TABLE_SENTINEL, UNPARSEABLE_TABLE_MARKER})

# Defaults for call activities missing their identity attributes
UNKNOWN_CALL_ACTIVITY_ID = "Unknown_ID"
UNNAMED_CALL_ACTIVITY = "Unnamed"

# Paths inside an exported integration-flow archive
PARAMETERS_PROP_SUFFIX = "src/main/resources/parameters.prop"
IFLW_FOLDER = "src/main/resources/scenarioflows/integrationflow"
IFLW_EXTENSION = ".iflw"

# Display value for unresolved placeholders in reports
NOT_FOUND_DISPLAY = "(NOT FOUND)"
