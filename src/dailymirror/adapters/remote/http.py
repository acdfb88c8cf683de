"""HTTP remote adapter using httpx."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from dailymirror.core.exceptions import ListingParseError, RemoteTransportError


if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from dailymirror.core.ports import ProgressCallback


# Chunk size for streaming downloads (64KB)
_CHUNK_SIZE = 64 * 1024

DEFAULT_USER_AGENT = "dailymirror/0.1"


class HttpRemote:
    """RemotePort implementation over a shared httpx.Client.

    httpx clients are thread-safe, so one instance serves every concurrent
    download. Failures are translated into RemoteTransportError and
    ListingParseError; nothing is retried.

    Example:
        with HttpRemote(timeout=30) as remote:
            payload = remote.get_json(url, {"path": "cdn/..."})
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        """Initialize the adapter.

        Args:
            client: Optional preconfigured client (tests pass one with a
                MockTransport). If not provided, a default client is created.
            timeout: Request timeout in seconds for the default client.
            user_agent: User-Agent header for the default client.
        """
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            headers={"User-Agent": user_agent},
        )

    def __enter__(self) -> HttpRemote:
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying client if this adapter created it."""
        if self._owns_client:
            self._client.close()

    def get_json(self, url: str, params: Mapping[str, str]) -> Any:
        """Fetch and decode a JSON document.

        Raises:
            RemoteTransportError: On network failure or non-success status.
            ListingParseError: If the body is not valid JSON.
        """
        try:
            response = self._client.get(url, params=dict(params))
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RemoteTransportError(
                f"{url} returned HTTP {e.response.status_code}", url=url, cause=e
            ) from e
        except httpx.HTTPError as e:
            raise RemoteTransportError(f"Request to {url} failed: {e}", url=url, cause=e) from e

        try:
            return response.json()
        except ValueError as e:
            raise ListingParseError(f"Invalid JSON from {url}", url=url, cause=e) from e

    def download(
        self, url: str, dest: Path, progress: ProgressCallback | None = None
    ) -> int:
        """Stream the body at url into dest.

        Args:
            url: File URL.
            dest: Local path, overwritten if present.
            progress: Optional callback function(bytes_downloaded, total_bytes).

        Returns:
            Number of bytes written.

        Raises:
            RemoteTransportError: On network failure or non-success status.
            OSError: If dest cannot be written.
        """
        written = 0
        try:
            with self._client.stream("GET", url) as response:
                response.raise_for_status()
                total = _content_length(response)
                with dest.open("wb") as f:
                    for chunk in response.iter_bytes(chunk_size=_CHUNK_SIZE):
                        f.write(chunk)
                        written += len(chunk)
                        if progress:
                            progress(written, total)
        except httpx.HTTPStatusError as e:
            raise RemoteTransportError(
                f"{url} returned HTTP {e.response.status_code}", url=url, cause=e
            ) from e
        except httpx.HTTPError as e:
            raise RemoteTransportError(f"Download of {url} failed: {e}", url=url, cause=e) from e
        return written


def _content_length(response: httpx.Response) -> int:
    """Declared body size, or 0 when the header is absent or malformed."""
    try:
        return max(int(response.headers.get("content-length", 0)), 0)
    except ValueError:
        return 0
