"""Thin async client for the hosted data service holding package definitions.

The service exposes a PostgREST-style REST interface:

- ``GET    /rest/v1/<table>?select=*&order=sort_order.asc``
- ``POST   /rest/v1/<table>``                 (insert, returns the new row)
- ``PATCH  /rest/v1/<table>?id=eq.<id>``      (update matching rows)
- ``DELETE /rest/v1/<table>?id=eq.<id>``

Every request carries the ``apikey`` header and a bearer token. Transport
failures and non-2xx responses are raised as DataServiceError.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from package_assignment.core.errors import DataServiceError

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "shipping_packages"


class DataServiceClient:
    """
    Async REST client for one table of the data service.

    Usage:
        async with DataServiceClient(url, key) as client:
            rows = await client.list_rows(order="sort_order")
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = DEFAULT_TABLE,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url:  Service root, e.g. ``https://project.example.co``.
            api_key:   Service key sent as ``apikey`` and bearer token.
            table:     Table holding the package definitions.
            timeout:   Per-request timeout in seconds.
            transport: Optional httpx transport (tests inject a mock).
        """
        self.table = table
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "DataServiceClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        params: dict[str, str] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> Any:
        headers = {"Prefer": prefer} if prefer else None
        try:
            resp = await self._http.request(method, f"/{self.table}", params=params, json=json, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, self.table, exc)
            raise DataServiceError(f"Data service unreachable: {exc}") from exc

        if resp.status_code >= 400:
            try:
                body = resp.json()
            except ValueError:
                body = None
            detail = (body.get("message") if isinstance(body, dict) else None) or resp.text
            logger.error("%s %s returned %d: %s", method, self.table, resp.status_code, detail)
            raise DataServiceError(detail or f"HTTP {resp.status_code}", status_code=resp.status_code)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            logger.error("%s %s returned a non-JSON body: %.200s", method, self.table, resp.text)
            raise DataServiceError(
                "Data service returned an invalid response", status_code=resp.status_code
            ) from exc

    async def list_rows(self, order: str = "sort_order", filters: dict[str, str] | None = None) -> list[dict[str, Any]]:
        """Fetch all rows ordered ascending by ``order``."""
        params = {"select": "*", "order": f"{order}.asc"}
        params.update(filters or {})
        return await self._request("GET", params=params) or []

    async def insert_row(self, row: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored."""
        data = await self._request("POST", json=row, prefer="return=representation")
        if not data:
            raise DataServiceError("Insert returned no row")
        return data[0] if isinstance(data, list) else data

    async def update_rows(self, filters: dict[str, str], changes: dict[str, Any]) -> list[dict[str, Any]]:
        """Apply ``changes`` to every row matching ``filters``; return the updated rows."""
        return await self._request("PATCH", params=filters, json=changes, prefer="return=representation") or []

    async def delete_rows(self, filters: dict[str, str]) -> None:
        await self._request("DELETE", params=filters)


def eq(value: Any) -> str:
    """PostgREST equality filter value."""
    return f"eq.{value}"


def neq(value: Any) -> str:
    return f"neq.{value}"


def is_true() -> str:
    return "is.true"
