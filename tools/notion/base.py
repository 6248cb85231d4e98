from __future__ import annotations

from typing import TypeVar

from tools.notion.client import NotionClient
from tools.notion.schemas import SERVICE, NotionAuth
from tools.service import ServiceTool

R = TypeVar("R")


class NotionTool(ServiceTool[NotionAuth, R]):
    SERVICE = SERVICE
    AUTH_MODEL = NotionAuth
    CLIENT = NotionClient
