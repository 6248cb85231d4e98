from __future__ import annotations

from typing import Any, Dict, Mapping

from tools.adapters import RuntimeConfig
from tools.exceptions import ServiceError
from tools.notion.base import NotionTool
from tools.notion.schemas import SearchInput

_RESULT_KEYS = ("type", "page_or_database", "object", "results", "next_cursor", "has_more")


class NotionSearchTool(NotionTool[Dict[str, Any]]):
    NAME = "notion_search"
    DESCRIPTION = "Searches all parent or child pages and databases that have been shared with an integration."
    INPUT_MODEL = SearchInput

    async def execute(self, input: Mapping[str, Any], config: RuntimeConfig = None) -> Dict[str, Any]:
        try:
            async with self.client(config) as notion:
                response = await notion.search(
                    input.get("query", ""),
                    page_size=input.get("page_size"),
                    start_cursor=input.get("start_cursor"),
                )
        except ServiceError as exc:
            raise self.service_error(exc, (), "Notion search failed") from exc

        return {key: response.get(key) for key in _RESULT_KEYS}
