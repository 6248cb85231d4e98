"""Airtable records-database tools."""
from tools.airtable.create_record import CreateRecordTool
from tools.airtable.get_base_schema import GetBaseSchemaTool
from tools.airtable.list_bases import ListBasesTool
from tools.airtable.list_records import ListRecordsTool
from tools.airtable.schemas import AirtableAuth
from tools.airtable.search_records import SearchRecordsTool, build_formula

__all__ = [
    "AirtableAuth",
    "CreateRecordTool",
    "GetBaseSchemaTool",
    "ListBasesTool",
    "ListRecordsTool",
    "SearchRecordsTool",
    "build_formula",
]
