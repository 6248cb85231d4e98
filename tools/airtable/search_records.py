from __future__ import annotations

from typing import Any, Callable, Dict, Mapping

from tools.adapters import RuntimeConfig
from tools.airtable.base import AirtableTool
from tools.airtable.client import to_record
from tools.airtable.schemas import SearchRecordsInput, SearchRecordsResponse
from tools.exceptions import ServiceError, ToolInputError
from utils.logger import get_logger

logger = get_logger(__name__)


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


SEARCH_FORMULAS: Dict[str, Callable[[str, str], str]] = {
    "equals": lambda field, value: f"{{{field}}} = {_quote(value)}",
    "notEquals": lambda field, value: f"{{{field}}} != {_quote(value)}",
    "contains": lambda field, value: f"FIND({_quote(value)}, {{{field}}}) > 0",
    "notContains": lambda field, value: f"FIND({_quote(value)}, {{{field}}}) = 0",
}


def build_formula(search_type: str, field: str, value: str) -> str:
    """Airtable ``filterByFormula`` expression for a single field comparison."""
    try:
        return SEARCH_FORMULAS[search_type](field, value)
    except KeyError:
        raise ToolInputError(f"Unsupported search type: {search_type}") from None


class SearchRecordsTool(AirtableTool[SearchRecordsResponse]):
    """Search a table with a single field comparison, following every result page."""

    NAME = "search-records"
    DESCRIPTION = (
        "Search records in a specified Airtable table using simple field comparisons. Returns "
        "matching records with their IDs, creation times, and field values."
    )
    INPUT_MODEL = SearchRecordsInput

    async def execute(self, input: Mapping[str, Any], config: RuntimeConfig = None) -> SearchRecordsResponse:
        self.require(input, "base_id", "table_id", "search_field", "search_type")

        search_field = input["search_field"]
        formula = build_formula(input["search_type"], search_field, str(input.get("search_value", "")))
        params: Dict[str, Any] = {"filterByFormula": formula}
        if isinstance(input.get("page_size"), int):
            params["pageSize"] = input["page_size"]

        logger.debug(
            "airtable_search",
            base_id=input["base_id"],
            table_id=input["table_id"],
            formula=formula,
            page_size=params.get("pageSize"),
        )

        known_errors = (
            ("NOT_FOUND", "Base or table not found. Please check the base_id and table_id."),
            ("AUTHENTICATION_REQUIRED", "Invalid access token. Please check your credentials."),
            ("INVALID_FIELD_NAME", f"Invalid field name: {search_field}"),
            ("INVALID_FORMULA", "Invalid formula generated for search criteria"),
        )
        try:
            async with self.client(config) as airtable:
                records = await airtable.select_all(input["base_id"], input["table_id"], params)
        except ServiceError as exc:
            raise self.service_error(exc, known_errors, "Failed to search records") from exc

        logger.debug("airtable_search_done", record_count=len(records))
        return {"records": [to_record(raw) for raw in records]}
