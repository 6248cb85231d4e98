from __future__ import annotations

from typing import Any, Mapping

from tools.adapters import RuntimeConfig
from tools.airtable.base import AirtableTool
from tools.airtable.client import to_record
from tools.airtable.schemas import CreateRecordInput, CreateRecordResponse
from tools.exceptions import ServiceError
from utils.logger import get_logger

logger = get_logger(__name__)

# Any "NOT_FOUND" signature, permissions variant included, reads as a missing base or table.
_KNOWN_ERRORS = (
    ("NOT_FOUND", "Base or table not found"),
    ("INVALID_VALUE_FOR_COLUMN", "Invalid value for column"),
)


class CreateRecordTool(AirtableTool[CreateRecordResponse]):
    """Create a single record in an Airtable table."""

    NAME = "create-record"
    DESCRIPTION = (
        "Create a new record in a specified Airtable table. Returns the created record "
        "with its ID, creation time, and field values."
    )
    INPUT_MODEL = CreateRecordInput

    async def execute(self, input: Mapping[str, Any], config: RuntimeConfig = None) -> CreateRecordResponse:
        self.require(input, "base_id", "table_id")
        fields = dict(input.get("fields") or {})

        try:
            async with self.client(config) as airtable:
                records = await airtable.create_records(input["base_id"], input["table_id"], [{"fields": fields}])
        except ServiceError as exc:
            raise self.service_error(exc, _KNOWN_ERRORS, "Failed to create record") from exc

        if not records:
            raise ServiceError("Failed to create record: no record returned", service=self.service, tool_name=self.name)

        record = to_record(records[0])
        logger.info("record_created", tool=self.name, record_id=record["id"])
        return record
