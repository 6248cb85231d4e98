from __future__ import annotations

from typing import Any, Mapping

from tools.adapters import RuntimeConfig
from tools.airtable.base import AirtableTool
from tools.airtable.schemas import AirtableField, AirtableTable, BaseSchemaResponse, GetBaseSchemaInput
from tools.exceptions import ServiceError


def _to_field(raw: Mapping[str, Any]) -> AirtableField:
    field: AirtableField = {"id": raw["id"], "name": raw["name"], "type": raw["type"]}
    if raw.get("options") is not None:
        field["options"] = raw["options"]
    return field


def _to_table(raw: Mapping[str, Any]) -> AirtableTable:
    return {
        "id": raw["id"],
        "name": raw["name"],
        "primaryFieldId": raw.get("primaryFieldId", ""),
        "fields": [_to_field(field) for field in raw.get("fields", [])],
    }


class GetBaseSchemaTool(AirtableTool[BaseSchemaResponse]):
    NAME = "get-base-schema"
    DESCRIPTION = "Retrieves the schema of an Airtable base, including tables and fields."
    INPUT_MODEL = GetBaseSchemaInput

    async def execute(self, input: Mapping[str, Any], config: RuntimeConfig = None) -> BaseSchemaResponse:
        self.require(input, "base_id")
        try:
            async with self.client(config) as airtable:
                tables = await airtable.get_base_tables(input["base_id"])
        except ServiceError as exc:
            raise self.service_error(exc, (), "Failed to retrieve base schema") from exc

        return {"tables": [_to_table(table) for table in tables]}
