"""Download of integration-flow artifacts from the tenant API."""

import logging

import httpx

from headerscope.config import Settings, get_settings
from headerscope.core.errors import DownloadError

logger = logging.getLogger(__name__)

ERROR_BODY_LIMIT = 300


def artifact_url(base_url: str, artifact_name: str) -> str:
    """Build the design-time artifact download URL.

    The single quotes are OData syntax and stay unencoded.
    """
    return (
        f"{base_url.rstrip('/')}/api/v1/IntegrationDesigntimeArtifacts"
        f"(Id='{artifact_name}',Version='active')/$value"
    )


class ArtifactDownloader:
    """Downloads artifact archives as bytes."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = client or httpx.Client(timeout=self._settings.request_timeout)

    def download(self, artifact_name: str, token: str) -> bytes:
        """Download the active version of an artifact.

        Args:
            artifact_name: The artifact id.
            token: Bearer token.

        Returns:
            The archive contents.

        Raises:
            DownloadError: On HTTP failure or an empty response.
        """
        url = artifact_url(self._settings.api_base_url, artifact_name)
        logger.info("Downloading: %s", artifact_name)
        logger.debug("URL: %s", url)

        try:
            response = self._client.get(
                url,
                headers={
                    "Authorization": f"Bearer {token}",
                    "Accept": "application/zip, application/octet-stream",
                },
                timeout=self._settings.request_timeout,
            )
        except httpx.HTTPError as e:
            raise DownloadError(f"Download of {artifact_name} failed: {e}") from e

        if response.is_error:
            body = response.content.decode("utf-8", errors="replace")
            raise DownloadError(
                f"HTTP {response.status_code} - {body[:ERROR_BODY_LIMIT]}"
            )

        content = response.content
        if not content:
            raise DownloadError(f"Empty response received for iflow: {artifact_name}")

        logger.info("Downloaded %.1f KB", len(content) / 1024)
        return content
