"""Loading of integration-flow artifact archives."""

import io
import logging
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path

from headerscope.core.constants import IFLW_EXTENSION, IFLW_FOLDER, PARAMETERS_PROP_SUFFIX
from headerscope.core.errors import ArchiveError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ArtifactFiles:
    """The files of an artifact archive needed for extraction."""

    iflw_content: str
    prop_content: str
    iflw_file_name: str


def _open_zip(source: bytes | Path | str, artifact_name: str) -> zipfile.ZipFile:
    if isinstance(source, bytes):
        if not source:
            raise ArchiveError(f"Invalid or empty zip buffer received for iflow: {artifact_name}")
        target: io.BytesIO | Path = io.BytesIO(source)
    else:
        target = Path(source)
        if not target.exists():
            raise ArchiveError(f"Zip file not found: {target}")

    try:
        return zipfile.ZipFile(target)
    except (zipfile.BadZipFile, OSError) as e:
        raise ArchiveError(f"Invalid zip archive for iflow {artifact_name}: {e}") from e


def load_archive(source: bytes | Path | str, artifact_name: str = "") -> ArtifactFiles:
    """Read the ``.iflw`` flow and ``parameters.prop`` from an archive.

    Args:
        source: Archive contents, or a path to the archive.
        artifact_name: Artifact name used in error messages.

    Returns:
        ArtifactFiles with both file contents.

    Raises:
        ArchiveError: If the archive is empty, unreadable, corrupt or incomplete.
    """
    artifact_name = artifact_name or (str(source) if not isinstance(source, bytes) else "")

    with _open_zip(source, artifact_name) as archive:
        prop_entry: str | None = None
        iflw_entry: str | None = None

        for entry_name in archive.namelist():
            entry_path = entry_name.replace("\\", "/")

            if entry_path.endswith(PARAMETERS_PROP_SUFFIX):
                prop_entry = entry_name

            if IFLW_FOLDER in entry_path and entry_path.endswith(IFLW_EXTENSION):
                iflw_entry = entry_name

        if prop_entry is None:
            raise ArchiveError(
                f"parameters.prop not found inside zip. "
                f"Expected path ending with: {PARAMETERS_PROP_SUFFIX}"
            )
        if iflw_entry is None:
            raise ArchiveError(
                f"*{IFLW_EXTENSION} file not found inside zip. "
                f"Expected inside folder: {IFLW_FOLDER}"
            )

        try:
            prop_content = archive.read(prop_entry).decode("utf-8", errors="replace")
            iflw_content = archive.read(iflw_entry).decode("utf-8", errors="replace")
        except (zipfile.BadZipFile, zlib.error, NotImplementedError, OSError) as e:
            raise ArchiveError(f"Corrupt zip entry for iflow {artifact_name}: {e}") from e

    iflw_file_name = iflw_entry.replace("\\", "/").rsplit("/", 1)[-1]
    logger.info("iflow file: %s", iflw_file_name)

    return ArtifactFiles(
        iflw_content=iflw_content,
        prop_content=prop_content,
        iflw_file_name=iflw_file_name,
    )


def find_archives(directory: Path | str) -> list[Path]:
    """List the ``.zip`` files in a directory, sorted by name.

    Raises:
        ArchiveError: If the directory does not exist.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise ArchiveError(f"ZIP directory not found: {directory}")
    return sorted(p for p in directory.iterdir() if p.suffix.lower() == ".zip")
