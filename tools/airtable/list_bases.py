from __future__ import annotations

from typing import Any, Mapping

from tools.adapters import RuntimeConfig
from tools.airtable.base import AirtableTool
from tools.airtable.schemas import ListBasesInput, ListBasesResponse
from tools.exceptions import ServiceError


class ListBasesTool(AirtableTool[ListBasesResponse]):
    NAME = "list-bases"
    DESCRIPTION = "List all Airtable bases accessible with the provided access token"
    INPUT_MODEL = ListBasesInput

    async def execute(self, input: Mapping[str, Any], config: RuntimeConfig = None) -> ListBasesResponse:
        try:
            async with self.client(config) as airtable:
                bases = await airtable.list_bases()
        except ServiceError as exc:
            raise self.service_error(exc, (), "Failed to list bases") from exc

        return {
            "bases": [
                {"id": base["id"], "name": base["name"], "permissionLevel": base.get("permissionLevel", "")}
                for base in bases
            ]
        }
