"""Airtable REST client (records API and metadata API)."""
from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Mapping
from urllib.parse import quote

import httpx

from tools.airtable.schemas import SERVICE, AirtableAuth, AirtableRecord
from tools.exceptions import ServiceError
from tools.http import ServiceClient

AIRTABLE_API_URL = "https://api.airtable.com/v0"


def to_record(raw: Mapping[str, Any]) -> AirtableRecord:
    return {
        "id": raw["id"],
        "createdTime": raw.get("createdTime", ""),
        "fields": dict(raw.get("fields") or {}),
    }


class AirtableClient(ServiceClient):
    """Bearer-token client for ``api.airtable.com``.

    Error bodies look like ``{"error": {"type": "NOT_FOUND", "message": "..."}}``
    or ``{"error": "NOT_FOUND"}``; both are rendered as ``"TYPE: message"`` so
    tools can map known error types by substring.
    """

    service = SERVICE

    def __init__(
        self,
        auth: AirtableAuth,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        abort_signal: asyncio.Event | None = None,
    ) -> None:
        super().__init__(
            base_url=AIRTABLE_API_URL,
            headers={"Authorization": f"Bearer {auth.access_token.get_secret_value()}"},
            transport=transport,
            abort_signal=abort_signal,
        )

    def error_from_response(self, response: httpx.Response) -> ServiceError:
        error = self._json_body(response).get("error")
        if isinstance(error, dict):
            error_type, detail = error.get("type"), error.get("message")
        elif isinstance(error, str):
            error_type, detail = error, None
        else:
            error_type, detail = None, None

        message = ": ".join(part for part in (error_type, detail) if part)
        return ServiceError(
            message or f"API Error: {response.reason_phrase}",
            service=self.service,
            status_code=response.status_code,
            error_type=error_type,
        )

    @staticmethod
    def _table_path(base_id: str, table_id: str) -> str:
        return f"/{quote(base_id, safe='')}/{quote(table_id, safe='')}"

    async def list_records(self, base_id: str, table_id: str, params: Mapping[str, Any]) -> Dict[str, Any]:
        """Fetch a single page of records."""
        return await self.get(self._table_path(base_id, table_id), params=params)

    async def select_all(self, base_id: str, table_id: str, params: Mapping[str, Any]) -> List[Dict[str, Any]]:
        """Fetch every page of records matching ``params``."""
        records: List[Dict[str, Any]] = []
        query = dict(params)
        while True:
            page = await self.list_records(base_id, table_id, query)
            records.extend(page.get("records", []))
            offset = page.get("offset")
            if not offset:
                return records
            query["offset"] = offset

    async def create_records(
        self, base_id: str, table_id: str, records: List[Mapping[str, Any]]
    ) -> List[Dict[str, Any]]:
        data = await self.post(self._table_path(base_id, table_id), json={"records": list(records)})
        return data.get("records", [])

    async def list_bases(self) -> List[Dict[str, Any]]:
        bases: List[Dict[str, Any]] = []
        params: Dict[str, Any] = {}
        while True:
            page = await self.get("/meta/bases", params=params)
            bases.extend(page.get("bases", []))
            offset = page.get("offset")
            if not offset:
                return bases
            params["offset"] = offset

    async def get_base_tables(self, base_id: str) -> List[Dict[str, Any]]:
        data = await self.get(f"/meta/bases/{quote(base_id, safe='')}/tables")
        return data.get("tables", [])
