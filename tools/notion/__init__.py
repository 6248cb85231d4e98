"""Notion workspace tools."""
from tools.notion.add_page_content import NotionAddPageContentTool
from tools.notion.create_page import NotionCreatePageTool
from tools.notion.retrieve_page import NotionRetrievePageTool
from tools.notion.schemas import NotionAuth
from tools.notion.search import NotionSearchTool

__all__ = [
    "NotionAddPageContentTool",
    "NotionAuth",
    "NotionCreatePageTool",
    "NotionRetrievePageTool",
    "NotionSearchTool",
]
