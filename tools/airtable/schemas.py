"""Auth, input and response shapes for the Airtable tools."""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field, SecretStr

SERVICE = "airtable"


class AirtableAuth(BaseModel):
    """Personal access token used as a bearer token against the Airtable API."""

    model_config = ConfigDict(frozen=True)

    access_token: SecretStr = Field(description="Personal access token for Airtable API authentication")


# ----------------------------------------------------------------------
# Inputs
# ----------------------------------------------------------------------
class CreateRecordInput(BaseModel):
    """Identifies the table and the field values of the record to create."""

    base_id: str = Field(description="The ID of the Airtable base")
    table_id: str = Field(description="The ID of the table to create a record in")
    fields: Dict[str, Any] = Field(description="The field values for the new record, keyed by field name")


class ListRecordsInput(BaseModel):
    """Identifies the table and optional pagination."""

    base_id: str = Field(description="The ID of the Airtable base")
    table_id: str = Field(description="The ID of the table to list records from")
    page_size: Optional[int] = Field(
        default=None, ge=1, le=100, description="Number of records to return per page (max 100)"
    )
    max_records: Optional[int] = Field(default=None, ge=1, description="Maximum total number of records to return")
    offset: Optional[str] = Field(default=None, description="Offset for pagination, returned from previous request")


SearchType = Literal["equals", "notEquals", "contains", "notContains"]


class SearchRecordsInput(BaseModel):
    """Identifies the table and a single field comparison."""

    base_id: str = Field(description="The ID of the Airtable base")
    table_id: str = Field(description="The ID of the table to search records in")
    search_field: str = Field(description="The name of the field to search in")
    search_type: SearchType = Field(description="The type of search to perform")
    search_value: str = Field(description="The value to search for")
    page_size: Optional[int] = Field(
        default=None, ge=1, le=100, description="Number of records to return per page (max 100)"
    )


class GetBaseSchemaInput(BaseModel):
    base_id: str = Field(description="The ID of the Airtable base to retrieve schema from")


class ListBasesInput(BaseModel):
    """No parameters: lists every base the token can see."""


# ----------------------------------------------------------------------
# Responses
# ----------------------------------------------------------------------
class AirtableRecord(TypedDict):
    id: str
    createdTime: str
    fields: Dict[str, Any]


class CreateRecordResponse(AirtableRecord):
    pass


class ListRecordsResponse(TypedDict, total=False):
    records: List[AirtableRecord]
    offset: str


class SearchRecordsResponse(TypedDict):
    records: List[AirtableRecord]


class AirtableField(TypedDict, total=False):
    id: str
    name: str
    type: str
    options: Dict[str, Any]


class AirtableTable(TypedDict):
    id: str
    name: str
    primaryFieldId: str
    fields: List[AirtableField]


class BaseSchemaResponse(TypedDict):
    tables: List[AirtableTable]


class AirtableBase(TypedDict):
    id: str
    name: str
    permissionLevel: str


class ListBasesResponse(TypedDict):
    bases: List[AirtableBase]
