from __future__ import annotations

from typing import Any, Dict, Mapping

from tools.adapters import RuntimeConfig
from tools.exceptions import ServiceError, ToolInputError
from tools.notion.base import NotionTool
from tools.notion.schemas import BLOCK_TYPES, AddPageContentInput


def to_block_request(block: Mapping[str, Any]) -> Dict[str, Any]:
    """Expand a simplified ``{type, <type>: {text: {content}}}`` block into a Notion block object."""
    block_type = block.get("type")
    if block_type not in BLOCK_TYPES:
        raise ToolInputError(f"Unsupported block type: {block_type}")

    content = block[block_type]["text"]["content"]
    return {
        "object": "block",
        "type": block_type,
        block_type: {"rich_text": [{"type": "text", "text": {"content": content}}]},
    }


class NotionAddPageContentTool(NotionTool[Dict[str, Any]]):
    NAME = "notion_add_page_content"
    DESCRIPTION = (
        "Adds new content blocks to a Notion page, supporting various content types like "
        "paragraphs, headings, and lists."
    )
    INPUT_MODEL = AddPageContentInput

    async def execute(self, input: Mapping[str, Any], config: RuntimeConfig = None) -> Dict[str, Any]:
        self.require(input, "block_id")
        block_id = input["block_id"]
        children = [to_block_request(block) for block in input.get("children") or []]

        try:
            async with self.client(config) as notion:
                try:
                    await notion.retrieve_block(block_id)
                except ServiceError as exc:
                    raise ServiceError(
                        f"Block with ID {block_id} not found or not accessible",
                        service=self.service,
                        status_code=exc.status_code,
                        error_type=exc.error_type,
                    ) from exc
                response = await notion.append_block_children(block_id, children)
        except ServiceError as exc:
            raise self.service_error(exc, (), "Failed to add content to Notion page") from exc

        return {"results": response.get("results", [])}
