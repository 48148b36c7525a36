"""Command-line interface for Headerscope."""

import argparse
import sys
from pathlib import Path

from headerscope import __version__
from headerscope.config import Settings, get_settings
from headerscope.core.errors import (
    ArchiveError,
    AuthenticationError,
    ConfigurationError,
    ReportExportError,
)
from headerscope.core.models import BatchResult
from headerscope.services.archive import find_archives
from headerscope.services.console_report import format_results
from headerscope.services.excel_exporter import ExcelExporter
from headerscope.services.pipeline import HeaderExtractionPipeline
from headerscope.utils.logging import setup_logging, get_logger

logger = get_logger("cli")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="headerscope",
        description="Extract and resolve call-activity headers from SAP CPI integration flows",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  headerscope MyFlow.zip
  headerscope ./iflows -o ./reports --print
  headerscope --remote IDM_AM_ContractTable_To_SAPS4_IDD250128_EIC_IBProcessing
        """,
    )

    parser.add_argument(
        "sources",
        nargs="+",
        help="Artifact zip files or directories of zips (artifact ids with --remote)",
    )

    parser.add_argument(
        "--remote",
        action="store_true",
        help="Download the named artifacts from the tenant API",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output directory (default: ./output)",
    )

    parser.add_argument(
        "--print",
        dest="print_results",
        action="store_true",
        help="Print the extracted headers per artifact",
    )

    parser.add_argument(
        "--no-excel",
        action="store_true",
        help="Skip writing the Excel report",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def collect_archives(sources: list[str]) -> list[Path]:
    """Expand CLI sources into archive paths.

    Args:
        sources: Zip files and directories.

    Returns:
        Archive paths in the order given, directories expanded by name.

    Raises:
        ArchiveError: If a source does not exist or is not a zip file.
    """
    archives: list[Path] = []

    for source in sources:
        path = Path(source)
        if path.is_dir():
            found = find_archives(path)
            if not found:
                logger.warning("No .zip files found in: %s", path)
            archives.extend(found)
        elif not path.exists():
            raise ArchiveError(f"Input file not found: {path}")
        elif path.suffix.lower() != ".zip":
            raise ArchiveError(f"Invalid file type. Expected .zip archive: {path}")
        else:
            archives.append(path)

    return archives


def run_extraction(
    sources: list[str],
    settings: Settings,
    *,
    remote: bool = False,
    print_results: bool = False,
    write_excel: bool = True,
) -> int:
    """Run a batch extraction and report it.

    Args:
        sources: Archive paths or, with ``remote``, artifact ids.
        settings: Application settings.
        remote: Download artifacts instead of reading local archives.
        print_results: Print each artifact's headers to stdout.
        write_excel: Write or extend the Excel report.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    if remote and not settings.has_remote_credentials:
        logger.error(
            "Remote mode needs these environment variable(s): %s",
            ", ".join(settings.missing_remote_settings),
        )
        return 1

    pipeline = HeaderExtractionPipeline(settings)

    try:
        if remote:
            batch: BatchResult = pipeline.run_remote(sources)
        else:
            batch = pipeline.run_local(collect_archives(sources))
    except (ConfigurationError, ArchiveError) as e:
        logger.error("%s", e)
        return 1
    except AuthenticationError as e:
        logger.error("Authentication failed: %s", e)
        return 2

    if print_results:
        for result in batch.results:
            print(format_results(result.records, result.iflw_file_name or result.artifact_name))

    for failure in batch.failures:
        logger.error("Failed [%s]: %s", failure.artifact_name, failure.error)

    if not batch.results:
        logger.warning("No data to export - all %d artifact(s) failed.", batch.total)
        return 2

    if write_excel:
        try:
            path = ExcelExporter(settings.output_file).export(batch.results)
        except ReportExportError as e:
            logger.error("%s", e)
            return 3
        logger.info("Excel saved: %s", path)

    logger.info(
        "Summary: %d total, %d processed, %d failed",
        batch.total,
        batch.processed,
        batch.failed,
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    if args.output is not None:
        settings = settings.model_copy(update={"output_dir": args.output.resolve()})

    log_level = "DEBUG" if args.verbose else settings.log_level
    setup_logging(level=log_level, log_file=settings.log_file)

    try:
        return run_extraction(
            args.sources,
            settings,
            remote=args.remote,
            print_results=args.print_results,
            write_excel=not args.no_excel,
        )
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        return 4


if __name__ == "__main__":
    sys.exit(main())
