from __future__ import annotations

from typing import TypeVar

from tools.airtable.client import AirtableClient
from tools.airtable.schemas import SERVICE, AirtableAuth
from tools.service import ServiceTool

R = TypeVar("R")


class AirtableTool(ServiceTool[AirtableAuth, R]):
    SERVICE = SERVICE
    AUTH_MODEL = AirtableAuth
    CLIENT = AirtableClient
