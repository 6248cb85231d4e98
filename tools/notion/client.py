"""Notion REST client."""
from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Mapping
from urllib.parse import quote

import httpx

from tools.exceptions import ServiceError
from tools.http import ServiceClient
from tools.notion.schemas import SERVICE, NotionAuth

NOTION_API_URL = "https://api.notion.com/v1"


class NotionClient(ServiceClient):
    """Integration-token client for ``api.notion.com``.

    Error bodies look like ``{"object": "error", "status": 404, "code": "object_not_found",
    "message": "..."}`` and are rendered as ``"404 object_not_found: ..."``.
    """

    service = SERVICE

    def __init__(
        self,
        auth: NotionAuth,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        abort_signal: asyncio.Event | None = None,
    ) -> None:
        super().__init__(
            base_url=NOTION_API_URL,
            headers={
                "Authorization": f"Bearer {auth.token.get_secret_value()}",
                "Notion-Version": auth.version,
            },
            transport=transport,
            abort_signal=abort_signal,
        )

    def error_from_response(self, response: httpx.Response) -> ServiceError:
        body = self._json_body(response)
        status = body.get("status", response.status_code)
        code = body.get("code")
        detail = body.get("message") or response.reason_phrase

        prefix = f"{status} {code}" if code else f"{status}"
        return ServiceError(
            f"{prefix}: {detail}",
            service=self.service,
            status_code=response.status_code,
            error_type=code,
        )

    async def search(self, query: str, *, page_size: int | None = None, start_cursor: str | None = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {"query": query}
        if page_size is not None:
            body["page_size"] = page_size
        if start_cursor:
            body["start_cursor"] = start_cursor
        return await self.post("/search", json=body)

    async def create_page(self, body: Mapping[str, Any]) -> Dict[str, Any]:
        return await self.post("/pages", json=dict(body))

    async def retrieve_page(self, page_id: str) -> Dict[str, Any]:
        return await self.get(f"/pages/{quote(page_id, safe='')}")

    async def retrieve_block(self, block_id: str) -> Dict[str, Any]:
        return await self.get(f"/blocks/{quote(block_id, safe='')}")

    async def append_block_children(self, block_id: str, children: List[Mapping[str, Any]]) -> Dict[str, Any]:
        return await self.patch(f"/blocks/{quote(block_id, safe='')}/children", json={"children": list(children)})
