"""Batch extraction pipeline over integration-flow artifacts."""

import logging
from collections.abc import Iterable
from pathlib import Path

from headerscope.config import Settings, get_settings
from headerscope.core.errors import HeaderscopeError
from headerscope.core.extractor import extract_headers
from headerscope.core.models import ArtifactFailure, ArtifactResult, BatchResult
from headerscope.services.archive import load_archive
from headerscope.services.auth import TokenProvider
from headerscope.services.downloader import ArtifactDownloader
from headerscope.services.iflow_parser import parse_iflow
from headerscope.services.properties import parse_properties

logger = logging.getLogger(__name__)


def artifact_name_for(path: Path) -> str:
    """Derive an artifact name from an archive path."""
    return path.stem


class HeaderExtractionPipeline:
    """Runs header extraction over one or many artifacts.

    Each artifact goes through archive loading, parameter parsing, process
    parsing and header extraction. A failing artifact is recorded and the
    batch continues with the next one.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        token_provider: TokenProvider | None = None,
        downloader: ArtifactDownloader | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            settings: Application settings.
            token_provider: Token provider for remote runs (lazy by default).
            downloader: Artifact downloader for remote runs (lazy by default).
        """
        self._settings = settings or get_settings()
        self._token_provider = token_provider
        self._downloader = downloader

    @property
    def token_provider(self) -> TokenProvider:
        """Lazy-load the token provider only when needed."""
        if self._token_provider is None:
            self._token_provider = TokenProvider(self._settings)
        return self._token_provider

    @property
    def downloader(self) -> ArtifactDownloader:
        """Lazy-load the downloader only when needed."""
        if self._downloader is None:
            self._downloader = ArtifactDownloader(self._settings)
        return self._downloader

    def extract_archive(self, artifact_name: str, source: bytes | Path | str) -> ArtifactResult:
        """Extract the headers of a single artifact archive.

        Args:
            artifact_name: Name reported for the artifact.
            source: Archive contents or path.

        Returns:
            ArtifactResult with the resolved records.

        Raises:
            HeaderscopeError: If the archive or process definition is unusable.
        """
        logger.info("Processing: %s", artifact_name)

        files = load_archive(source, artifact_name)
        param_map = parse_properties(files.prop_content)
        document = parse_iflow(files.iflw_content)

        records = extract_headers(
            document,
            param_map,
            max_workers=self._settings.max_workers,
            mark_unparseable=self._settings.mark_unparseable_tables,
        )

        result = ArtifactResult(
            artifact_name=artifact_name,
            iflw_file_name=files.iflw_file_name,
            records=records,
        )
        logger.info("Done - %d header(s) found in %s", result.header_count, artifact_name)
        return result

    def run_local(self, paths: Iterable[Path | str]) -> BatchResult:
        """Extract headers from archive files on disk.

        Args:
            paths: Archive file paths.

        Returns:
            BatchResult with per-artifact successes and failures.
        """
        batch = BatchResult()

        for path in paths:
            path = Path(path)
            name = artifact_name_for(path)
            try:
                batch.results.append(self.extract_archive(name, path))
            except HeaderscopeError as e:
                logger.error("Failed [%s]: %s", name, e)
                batch.failures.append(ArtifactFailure(artifact_name=name, error=str(e)))

        return batch

    def run_remote(self, artifact_names: Iterable[str]) -> BatchResult:
        """Download artifacts from the tenant and extract their headers.

        One token is fetched for the whole batch.

        Args:
            artifact_names: Artifact ids.

        Returns:
            BatchResult with per-artifact successes and failures.

        Raises:
            ConfigurationError: If remote settings are missing.
            AuthenticationError: If no token can be obtained.
        """
        self._settings.require_remote()
        token = self.token_provider.get_token()
        batch = BatchResult()

        for name in artifact_names:
            try:
                content = self.downloader.download(name, token)
                batch.results.append(self.extract_archive(name, content))
            except HeaderscopeError as e:
                logger.error("Failed [%s]: %s", name, e)
                batch.failures.append(ArtifactFailure(artifact_name=name, error=str(e)))

        return batch
