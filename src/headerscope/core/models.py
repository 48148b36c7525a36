"""Domain models for integration-flow process documents and header records."""

from dataclasses import dataclass, field

from headerscope.core.constants import (
    EMPTY_TABLE_SENTINEL,
    HEADER_TABLE_KEY,
    SYNTHETIC_HEADER_NAMES,
    UNKNOWN_CALL_ACTIVITY_ID,
    UNNAMED_CALL_ACTIVITY,
    UNPARSEABLE_TABLE_MARKER,
    ResolutionSource,
)


@dataclass(frozen=True, slots=True)
class Property:
    """A key/value property attached to a call activity."""

    key: str
    value: str = ""


@dataclass(frozen=True, slots=True)
class CallActivity:
    """Represents an invoked sub-flow step in the process graph.

    Attributes:
        id: Identifier of the call activity.
        name: Display name of the call activity.
        properties: Ordered properties from the extension elements.
    """

    id: str = UNKNOWN_CALL_ACTIVITY_ID
    name: str = UNNAMED_CALL_ACTIVITY
    properties: tuple[Property, ...] = ()

    @property
    def header_tables(self) -> list[str]:
        """Raw values of every ``headerTable`` property, in order."""
        return [prop.value for prop in self.properties if prop.key == HEADER_TABLE_KEY]


@dataclass(frozen=True, slots=True)
class SubProcess:
    """A nested grouping of call activities within a process."""

    id: str | None = None
    call_activities: tuple[CallActivity, ...] = ()


@dataclass(frozen=True, slots=True)
class ProcessNode:
    """A process node of an integration flow.

    Attributes:
        id: Identifier of the process, if present.
        call_activities: Call activities placed directly in the process.
        sub_processes: Sub-processes, each with its own call activities.
    """

    id: str | None = None
    call_activities: tuple[CallActivity, ...] = ()
    sub_processes: tuple[SubProcess, ...] = ()


@dataclass(frozen=True, slots=True)
class ProcessDocument:
    """A parsed integration-flow process definition."""

    processes: tuple[ProcessNode, ...] = ()


@dataclass(frozen=True, slots=True)
class HeaderRow:
    """A decoded header table row before resolution."""

    name: str
    raw_value: str = ""


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of resolving a single cell value."""

    is_placeholder: bool
    resolved_value: str
    resolved_from: ResolutionSource


@dataclass(frozen=True, slots=True)
class ResolvedHeaderRecord:
    """A single resolved header, the unit of extraction output.

    Attributes:
        call_activity_id: Owning call activity identifier.
        call_activity_name: Owning call activity display name.
        header_name: The row's ``Name`` cell, or a reserved marker.
        raw_value: The row's ``Value`` cell before resolution.
        resolved_value: The value after resolution.
        is_placeholder: Whether the raw value is a ``{{key}}`` reference.
        resolved_from: Provenance of the resolved value.
    """

    call_activity_id: str
    call_activity_name: str
    header_name: str
    raw_value: str = ""
    resolved_value: str = ""
    is_placeholder: bool = False
    resolved_from: ResolutionSource = ResolutionSource.DIRECT

    @property
    def is_sentinel(self) -> bool:
        """Check if this record marks an explicitly empty header table."""
        return self.header_name == EMPTY_TABLE_SENTINEL

    @property
    def is_synthetic(self) -> bool:
        """Check if this record is a marker rather than a real header."""
        return self.header_name in SYNTHETIC_HEADER_NAMES

    @classmethod
    def empty_table(cls, call_activity: CallActivity) -> "ResolvedHeaderRecord":
        """Build the sentinel record for an empty header table."""
        return cls(
            call_activity_id=call_activity.id,
            call_activity_name=call_activity.name,
            header_name=EMPTY_TABLE_SENTINEL,
        )

    @classmethod
    def unparseable_table(
        cls, call_activity: CallActivity, raw_text: str
    ) -> "ResolvedHeaderRecord":
        """Build the marker record for a header table that failed to parse."""
        return cls(
            call_activity_id=call_activity.id,
            call_activity_name=call_activity.name,
            header_name=UNPARSEABLE_TABLE_MARKER,
            raw_value=raw_text,
        )


@dataclass(frozen=True, slots=True)
class HeaderSummary:
    """Tally of real (non-marker) header records by provenance."""

    total: int = 0
    direct: int = 0
    from_map: int = 0
    unresolved: int = 0


def summarize(records: list[ResolvedHeaderRecord]) -> HeaderSummary:
    """Count headers by provenance, ignoring sentinel and marker records.

    Args:
        records: Extraction output.

    Returns:
        HeaderSummary with per-source counts.
    """
    real = [r for r in records if not r.is_synthetic]
    return HeaderSummary(
        total=len(real),
        direct=sum(1 for r in real if r.resolved_from == ResolutionSource.DIRECT),
        from_map=sum(1 for r in real if r.resolved_from == ResolutionSource.FROM_MAP),
        unresolved=sum(1 for r in real if r.resolved_from == ResolutionSource.UNRESOLVED),
    )


@dataclass(slots=True)
class ArtifactResult:
    """Extraction output for one integration-flow artifact."""

    artifact_name: str
    iflw_file_name: str = ""
    records: list[ResolvedHeaderRecord] = field(default_factory=list)

    @property
    def header_count(self) -> int:
        """Number of real headers found (sentinel and markers excluded)."""
        return sum(1 for r in self.records if not r.is_synthetic)


@dataclass(frozen=True, slots=True)
class ArtifactFailure:
    """An artifact whose extraction failed."""

    artifact_name: str
    error: str


@dataclass(slots=True)
class BatchResult:
    """Per-artifact successes and failures of a batch run."""

    results: list[ArtifactResult] = field(default_factory=list)
    failures: list[ArtifactFailure] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def total(self) -> int:
        return self.processed + self.failed
