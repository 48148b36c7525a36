"""Services for artifact retrieval, parsing, batch extraction and reporting."""

from headerscope.services.archive import ArtifactFiles, find_archives, load_archive
from headerscope.services.auth import TokenProvider
from headerscope.services.console_report import format_results
from headerscope.services.downloader import ArtifactDownloader, artifact_url
from headerscope.services.excel_exporter import ExcelExporter, build_rows
from headerscope.services.iflow_parser import parse_iflow
from headerscope.services.pipeline import HeaderExtractionPipeline
from headerscope.services.properties import parse_properties

__all__ = [
    "ArtifactFiles",
    "find_archives",
    "load_archive",
    "TokenProvider",
    "format_results",
    "ArtifactDownloader",
    "artifact_url",
    "ExcelExporter",
    "build_rows",
    "parse_iflow",
    "HeaderExtractionPipeline",
    "parse_properties",
]
