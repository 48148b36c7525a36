"""Excel report export for extracted headers."""

import logging
from pathlib import Path

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from headerscope.core.constants import NOT_FOUND_DISPLAY, ResolutionSource
from headerscope.core.errors import ReportExportError
from headerscope.core.models import ArtifactResult

logger = logging.getLogger(__name__)

SHEET_NAME = "Headers"

# (header, width)
COLUMNS: list[tuple[str, int]] = [
    ("iFlow Name", 48),
    ("CallActivity Name", 28),
    ("CallActivity ID", 22),
    ("Header Name", 28),
    ("Resolved Value", 36),
    ("Raw Value", 40),
    ("Source", 20),
]
COLUMN_NAMES = [name for name, _ in COLUMNS]
SOURCE_COLUMN = "Source"

HEADER_BG = "1F3864"
HEADER_FONT = "FFFFFF"
BORDER_COLOR = "B8CCE4"
SOURCE_BG = {
    ResolutionSource.DIRECT.value: "E2EFDA",
    ResolutionSource.FROM_MAP.value: "FFF2CC",
    ResolutionSource.UNRESOLVED.value: "FFC7CE",
}


def build_rows(results: list[ArtifactResult]) -> pd.DataFrame:
    """Flatten artifact results into report rows.

    Sentinel and marker records are left out.

    Args:
        results: Successful artifact extractions.

    Returns:
        DataFrame with the report columns.
    """
    rows: list[dict[str, str]] = []

    for result in results:
        for record in result.records:
            if record.is_synthetic:
                continue

            if record.resolved_from == ResolutionSource.UNRESOLVED:
                resolved = NOT_FOUND_DISPLAY
            else:
                resolved = record.resolved_value

            rows.append({
                "iFlow Name": result.artifact_name,
                "CallActivity Name": record.call_activity_name,
                "CallActivity ID": record.call_activity_id,
                "Header Name": record.header_name,
                "Resolved Value": resolved,
                "Raw Value": record.raw_value,
                "Source": record.resolved_from.value,
            })

    return pd.DataFrame(rows, columns=COLUMN_NAMES)


def _thin_border() -> Border:
    side = Side(style="thin", color=BORDER_COLOR)
    return Border(top=side, left=side, bottom=side, right=side)


class ExcelExporter:
    """Writes header records to a single ``Headers`` sheet.

    When the workbook already exists, its rows are kept and the new rows
    are appended below them.
    """

    def __init__(self, output_file: Path | str) -> None:
        """Initialize the exporter.

        Args:
            output_file: Path of the workbook to create or extend.
        """
        self.output_file = Path(output_file)

    def _read_existing(self) -> pd.DataFrame | None:
        if not self.output_file.exists():
            return None
        with pd.ExcelFile(self.output_file, engine="openpyxl") as xls:
            if SHEET_NAME not in xls.sheet_names:
                logger.warning(
                    "Sheet '%s' missing in %s, recreating it", SHEET_NAME, self.output_file
                )
                return pd.DataFrame(columns=COLUMN_NAMES)
            existing = pd.read_excel(xls, sheet_name=SHEET_NAME, dtype=str, keep_default_na=False)
        return existing.reindex(columns=COLUMN_NAMES).fillna("")

    def export(self, results: list[ArtifactResult]) -> Path:
        """Write the report.

        Args:
            results: Successful artifact extractions.

        Returns:
            Path of the written workbook.

        Raises:
            ReportExportError: If the workbook cannot be read or written.
        """
        self.output_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            existing = self._read_existing()
            new_rows = build_rows(results)

            if existing is None:
                logger.info("Creating new file: %s", self.output_file)
                frame = new_rows
                writer_args: dict[str, str] = {"mode": "w"}
            else:
                logger.info("Appending to existing: %s", self.output_file)
                frame = pd.concat([existing, new_rows], ignore_index=True)
                writer_args = {"mode": "a", "if_sheet_exists": "replace"}

            with pd.ExcelWriter(self.output_file, engine="openpyxl", **writer_args) as writer:
                frame.to_excel(writer, sheet_name=SHEET_NAME, index=False)
                self._style_sheet(writer.sheets[SHEET_NAME], frame)
        except Exception as e:
            raise ReportExportError(f"Failed to write Excel report {self.output_file}: {e}") from e

        logger.info("Excel saved: %s (%d row(s) added)", self.output_file, len(new_rows))
        return self.output_file

    def _style_sheet(self, ws: Worksheet, frame: pd.DataFrame) -> None:
        """Apply header, row and column formatting.

        Args:
            ws: The worksheet written by pandas.
            frame: The data written to it.
        """
        border = _thin_border()

        for col_idx, (_, width) in enumerate(COLUMNS, start=1):
            ws.column_dimensions[get_column_letter(col_idx)].width = width

            cell = ws.cell(row=1, column=col_idx)
            cell.fill = PatternFill(fill_type="solid", fgColor=HEADER_BG)
            cell.font = Font(bold=True, color=HEADER_FONT, size=11, name="Calibri")
            cell.alignment = Alignment(vertical="center", horizontal="center", wrap_text=True)
            cell.border = border
        ws.row_dimensions[1].height = 28

        data_font = Font(size=10, name="Calibri")
        data_alignment = Alignment(vertical="center", wrap_text=True)

        for row_offset, source in enumerate(frame[SOURCE_COLUMN].tolist(), start=2):
            fill = PatternFill(
                fill_type="solid",
                fgColor=SOURCE_BG.get(source, SOURCE_BG[ResolutionSource.DIRECT.value]),
            )
            for col_idx in range(1, len(COLUMNS) + 1):
                cell = ws.cell(row=row_offset, column=col_idx)
                cell.fill = fill
                cell.font = data_font
                cell.alignment = data_alignment
                cell.border = border
            ws.row_dimensions[row_offset].height = 20

        ws.freeze_panes = "A2"
        ws.auto_filter.ref = f"A1:{get_column_letter(len(COLUMNS))}1"
