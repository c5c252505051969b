"""HTTP client for the spreadsheet-backed store.

The store exposes one endpoint with two actions:

- ``GET <endpoint>?action=list`` returns the whole collection as a JSON array
- ``POST <endpoint>`` with ``{"action": "update", "data": [...]}`` replaces it
"""

import json
import logging
from typing import Any
from urllib.parse import urlparse

import httpx

from pievote.config import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class RemoteStoreError(Exception):
    """A request to the store failed or returned something unreadable."""
    pass


class RemoteStore:
    """Async client for the store's ``list`` and ``update`` actions.

    Use as an async context manager, or pass in an existing
    ``httpx.AsyncClient`` whose lifetime the caller manages.
    """

    def __init__(self, endpoint: str, timeout: float = DEFAULT_TIMEOUT,
                 client: httpx.AsyncClient | None = None):
        parsed = urlparse(endpoint)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"Invalid URL scheme: {parsed.scheme}")
        self.endpoint = endpoint
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            follow_redirects=True, timeout=timeout
        )

    async def __aenter__(self) -> "RemoteStore":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_list(self) -> Any:
        """Fetch the collection. Returns the decoded JSON as-is.

        The status code is not checked: a body that is not JSON is what
        signals a broken response.

        Raises:
            RemoteStoreError: On transport failure or a non-JSON body
        """
        try:
            response = await self._client.get(self.endpoint, params={"action": "list"})
        except httpx.RequestError as e:
            raise RemoteStoreError(f"Error fetching list: {e}") from e

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise RemoteStoreError(
                f"Store returned non-JSON response (HTTP {response.status_code})"
            ) from e

    async def push(self, records: list[dict[str, Any]]) -> httpx.Response:
        """Replace the whole collection in the store.

        Any response counts as success once the request completes.

        Raises:
            RemoteStoreError: On transport failure
        """
        try:
            response = await self._client.post(
                self.endpoint,
                json={"action": "update", "data": records},
                headers={"Content-Type": "application/json"},
            )
        except httpx.RequestError as e:
            raise RemoteStoreError(f"Error pushing update: {e}") from e
        logger.debug("Pushed %d records, store answered HTTP %d",
                     len(records), response.status_code)
        return response
