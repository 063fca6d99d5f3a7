"""JSON feed HTTP client.

Fetches result feeds published as JSON (league sites, aggregator APIs).
Retries transient failures and returns None when a feed stays unreachable;
the fetcher on top turns that into a source failure.
"""

import logging
import threading

import httpx

logger = logging.getLogger(__name__)


class JsonFeedClient:
    """Low-level JSON-over-HTTP client shared by feed fetchers."""

    def __init__(
        self,
        timeout: float = 10.0,
        retry_count: int = 3,
        headers: dict[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self._timeout = timeout
        self._retry_count = max(1, retry_count)
        self._headers = headers or {}
        self._transport = transport
        self._client: httpx.Client | None = None
        self._client_lock = threading.Lock()

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client (thread-safe)."""
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    self._client = httpx.Client(
                        timeout=self._timeout,
                        headers=self._headers,
                        transport=self._transport,
                        follow_redirects=True,
                        limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
                    )
        return self._client

    def get_json(self, url: str, params: dict | None = None) -> dict | list | None:
        """GET a URL and parse the body as JSON.

        Args:
            url: Feed URL
            params: Query parameters

        Returns:
            Parsed JSON or None on error
        """
        for attempt in range(self._retry_count):
            try:
                client = self._get_client()
                response = client.get(url, params=params)
                response.raise_for_status()
                return response.json()
            except httpx.HTTPStatusError as e:
                logger.warning(
                    "[JSONFEED] HTTP %d for %s (attempt %d/%d)",
                    e.response.status_code,
                    url,
                    attempt + 1,
                    self._retry_count,
                )
                # Client errors will not fix themselves
                if e.response.status_code < 500:
                    return None
            except (httpx.RequestError, RuntimeError, OSError) as e:
                logger.warning(
                    "[JSONFEED] Request failed for %s: %s (attempt %d/%d)",
                    url,
                    e,
                    attempt + 1,
                    self._retry_count,
                )
            except ValueError as e:
                logger.warning("[JSONFEED] Invalid JSON from %s: %s", url, e)
                return None

        return None

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "JsonFeedClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
