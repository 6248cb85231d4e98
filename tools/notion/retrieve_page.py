from __future__ import annotations

from typing import Any, Dict, Mapping

from pydantic import ValidationError

from tools.adapters import RuntimeConfig
from tools.exceptions import ServiceError, ToolInputError
from tools.notion.base import NotionTool
from tools.notion.schemas import RetrievePageInput


class NotionRetrievePageTool(NotionTool[Dict[str, Any]]):
    """Return a page's properties (not its block content)."""

    NAME = "notion_retrieve_page"
    DESCRIPTION = (
        "Retrieves a Page object using the ID specified. Returns page properties, not page content. "
        "Note: Properties with more than 25 references might not be fully returned."
    )
    INPUT_MODEL = RetrievePageInput

    async def execute(self, input: Mapping[str, Any], config: RuntimeConfig = None) -> Dict[str, Any]:
        page_id = input.get("page_id")
        if not page_id:
            raise ToolInputError("Page ID is required", tool_name=self.name)
        try:
            RetrievePageInput.model_validate(dict(input))
        except ValidationError as exc:
            raise ToolInputError(exc.errors()[0]["msg"], tool_name=self.name) from exc

        try:
            async with self.client(config) as notion:
                return await notion.retrieve_page(page_id)
        except ServiceError as exc:
            if exc.status_code == 404:
                message = f"Page not found with ID: {page_id}"
            elif exc.status_code == 403:
                message = f"Access denied to page with ID: {page_id}"
            else:
                raise self.service_error(exc, (), "Failed to retrieve page") from exc
            raise ServiceError(
                message,
                service=self.service,
                status_code=exc.status_code,
                error_type=exc.error_type,
                tool_name=self.name,
            ) from exc
