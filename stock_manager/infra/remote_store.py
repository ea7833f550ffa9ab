"""Remote table store client.

Talks to a Supabase/PostgREST REST endpoint (``{url}/rest/v1/{table}``)
supporting select-all, upsert-by-primary-key and delete-by-primary-key.
Every failure is raised as RemoteOperationFailed; the persistence gateway
decides what to do with it.
"""

from typing import Any

import httpx

from stock_manager.config import settings
from stock_manager.core.errors import RemoteOperationFailed, RemoteUnavailable
from stock_manager.infra.logging import get_logger

logger = get_logger(__name__)

REST_PREFIX = "/rest/v1"


class RemoteTableStore:
    """HTTP client for a remote table store."""

    def __init__(
        self,
        url: str,
        key: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize remote store client.

        Args:
            url: Project URL (http or https)
            key: Access key, sent as ``apikey`` and bearer token
            timeout: Request timeout in seconds (defaults to settings)
            transport: Optional httpx transport (used by tests)

        Raises:
            RemoteUnavailable: If the URL or key cannot be used
        """
        if not key:
            raise RemoteUnavailable("Remote access key is empty")
        try:
            parsed = httpx.URL(url.strip())
        except (httpx.InvalidURL, TypeError) as e:
            raise RemoteUnavailable(f"Invalid remote URL: {url!r}") from e
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise RemoteUnavailable(f"Invalid remote URL: {url!r}")

        self.url = str(parsed).rstrip("/")
        self.timeout = timeout or settings.remote_timeout
        self._client = httpx.AsyncClient(
            base_url=f"{self.url}{REST_PREFIX}",
            timeout=self.timeout,
            transport=transport,
            headers={
                "apikey": key,
                "Authorization": f"Bearer {key}",
                "Content-Type": "application/json",
            },
        )
        logger.info("Remote store client initialized", url=self.url)

    async def close(self) -> None:
        """Close HTTP client."""
        await self._client.aclose()

    async def _request(
        self,
        operation: str,
        table: str,
        method: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        try:
            response = await self._client.request(
                method,
                f"/{table}",
                params=params,
                json=json,
                headers=headers,
            )
            response.raise_for_status()
            return response

        except httpx.HTTPStatusError as e:
            raise RemoteOperationFailed(
                operation,
                table,
                f"HTTP {e.response.status_code}: {e.response.text[:500]}",
            ) from e

        except httpx.HTTPError as e:
            raise RemoteOperationFailed(operation, table, str(e) or type(e).__name__) from e

    async def select(self, table: str, columns: str = "*") -> list[dict[str, Any]]:
        """Fetch every row of a table.

        Raises:
            RemoteOperationFailed: On transport/HTTP errors or a non-list body
        """
        response = await self._request("select", table, "GET", params={"select": columns})
        try:
            rows = response.json()
        except ValueError as e:
            raise RemoteOperationFailed("select", table, "Response is not JSON") from e
        if not isinstance(rows, list):
            raise RemoteOperationFailed("select", table, "Response is not a list of rows")
        return rows

    async def upsert(
        self,
        table: str,
        rows: dict[str, Any] | list[dict[str, Any]],
        on_conflict: str | None = None,
    ) -> None:
        """Insert rows, replacing any existing row with the same key."""
        params = {"on_conflict": on_conflict} if on_conflict else None
        await self._request(
            "upsert",
            table,
            "POST",
            params=params,
            json=rows,
            headers={"Prefer": "resolution=merge-duplicates,return=minimal"},
        )

    async def delete(self, table: str, column: str, value: str) -> None:
        """Delete rows whose ``column`` equals ``value``."""
        await self._request(
            "delete",
            table,
            "DELETE",
            params={column: f"eq.{value}"},
            headers={"Prefer": "return=minimal"},
        )
