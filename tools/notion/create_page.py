from __future__ import annotations

from typing import Any, Dict, Mapping

from tools.adapters import RuntimeConfig
from tools.exceptions import ServiceError
from tools.notion.base import NotionTool
from tools.notion.schemas import CreatePageInput
from utils.logger import get_logger

logger = get_logger(__name__)


def _rich_text(content: str) -> Dict[str, Any]:
    return {"text": {"content": content}}


def build_properties(title: str, properties: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Translate the tool's simplified property map into Notion page properties."""
    result: Dict[str, Any] = {"title": {"title": [_rich_text(title)]}}
    for key, value in (properties or {}).items():
        if value.get("type") == "text":
            content = (value.get("text") or {}).get("content") or ""
            result[key] = {"rich_text": [_rich_text(content)]}
        elif value.get("type") == "rich_text":
            result[key] = {"rich_text": list(value.get("rich_text") or [])}
    return result


class NotionCreatePageTool(NotionTool[Dict[str, Any]]):
    """Create a page under an existing page; usually the parent is pinned as a predefined parameter."""

    NAME = "notion_create_page"
    DESCRIPTION = "Creates a new page in Notion as a child of an existing page or database."
    INPUT_MODEL = CreatePageInput

    async def execute(self, input: Mapping[str, Any], config: RuntimeConfig = None) -> Dict[str, Any]:
        self.require(input, "parent_id", "title")
        body = {
            "parent": {"page_id": input["parent_id"]},
            "properties": build_properties(input["title"], input.get("properties")),
        }
        logger.debug("notion_create_page_body", body=body)

        try:
            async with self.client(config) as notion:
                response = await notion.create_page(body)
        except ServiceError as exc:
            raise self.service_error(exc, (), "Failed to create Notion page") from exc

        return {"id": response.get("id"), "object": response.get("object")}
