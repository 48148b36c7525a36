"""OAuth2 client-credentials token provider."""

import logging
import threading
import time

import httpx

from headerscope.config import Settings, get_settings
from headerscope.core.errors import AuthenticationError

logger = logging.getLogger(__name__)

DEFAULT_EXPIRES_IN = 3600


class TokenProvider:
    """Fetches and caches a bearer token for the tenant API.

    The token is reused until it is within ``token_expiry_margin`` seconds
    of expiry, then fetched again.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the token provider.

        Args:
            settings: Application settings.
            client: HTTP client to use (one is created if omitted).
        """
        self._settings = settings or get_settings()
        self._client = client or httpx.Client(timeout=self._settings.token_timeout)
        self._lock = threading.Lock()
        self._token: str | None = None
        self._expires_at = 0.0

    def get_token(self) -> str:
        """Return a valid access token, fetching a new one if needed.

        Raises:
            AuthenticationError: If the token request fails.
        """
        with self._lock:
            now = time.monotonic()
            if self._token and now < self._expires_at - self._settings.token_expiry_margin:
                return self._token

            logger.info("Fetching new OAuth2 token...")
            token, expires_in = self._request_token()

            self._token = token
            self._expires_at = now + expires_in
            logger.info("Token acquired (expires in %ds)", expires_in)
            return token

    def clear(self) -> None:
        """Drop the cached token."""
        with self._lock:
            self._token = None
            self._expires_at = 0.0

    def _request_token(self) -> tuple[str, int]:
        settings = self._settings
        data = {
            "grant_type": "client_credentials",
            "client_id": settings.client_id,
            "client_secret": settings.client_secret.get_secret_value(),
        }

        try:
            response = self._client.post(
                settings.token_url,
                data=data,
                timeout=settings.token_timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise AuthenticationError(
                f"Token request failed: HTTP {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise AuthenticationError(f"Token request failed: {e}") from e

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise AuthenticationError("OAuth2 response did not contain an access_token.")

        expires_in = payload.get("expires_in") or DEFAULT_EXPIRES_IN
        return token, int(expires_in)
