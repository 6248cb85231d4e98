from __future__ import annotations

from typing import Any, Dict, Mapping

from tools.adapters import RuntimeConfig
from tools.airtable.base import AirtableTool
from tools.airtable.client import to_record
from tools.airtable.schemas import ListRecordsInput, ListRecordsResponse
from tools.exceptions import ServiceError


class ListRecordsTool(AirtableTool[ListRecordsResponse]):
    """List one page of records; the returned ``offset`` fetches the next page."""

    NAME = "list-records"
    DESCRIPTION = (
        "List records from a specified Airtable table with optional pagination. Returns records "
        "with their IDs, creation times, and field values."
    )
    INPUT_MODEL = ListRecordsInput

    async def execute(self, input: Mapping[str, Any], config: RuntimeConfig = None) -> ListRecordsResponse:
        self.require(input, "base_id", "table_id")

        params: Dict[str, Any] = {}
        if input.get("page_size"):
            params["pageSize"] = input["page_size"]
        if input.get("max_records"):
            params["maxRecords"] = input["max_records"]
        if input.get("offset"):
            params["offset"] = input["offset"]

        try:
            async with self.client(config) as airtable:
                page = await airtable.list_records(input["base_id"], input["table_id"], params)
        except ServiceError as exc:
            raise self.service_error(exc, (), "Failed to list records") from exc

        result: ListRecordsResponse = {"records": [to_record(raw) for raw in page.get("records", [])]}
        if page.get("offset"):
            result["offset"] = page["offset"]
        return result
