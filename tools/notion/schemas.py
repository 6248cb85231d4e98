"""Auth and input shapes for the Notion tools."""
from __future__ import annotations

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

SERVICE = "notion"
DEFAULT_NOTION_VERSION = "2022-06-28"


class NotionAuth(BaseModel):
    """Integration token plus the API version sent as ``Notion-Version``."""

    model_config = ConfigDict(frozen=True)

    token: SecretStr = Field(
        description="The Notion integration token. This is required to authenticate API requests."
    )
    version: str = Field(
        default=DEFAULT_NOTION_VERSION,
        description=f"The Notion API version to use. Defaults to '{DEFAULT_NOTION_VERSION}' if not specified.",
    )

    @field_validator("token")
    @classmethod
    def _token_not_empty(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("Notion API token is required")
        return value


class TextContent(BaseModel):
    content: str


# ----------------------------------------------------------------------
# notion_search
# ----------------------------------------------------------------------
class SearchInput(BaseModel):
    query: str = Field(description="The search query to find pages and databases")
    page_size: Optional[int] = Field(
        default=None, ge=1, le=100, description="The number of items to return per page (default: 100)"
    )
    start_cursor: Optional[str] = Field(
        default=None, description="The cursor to start the search from (for pagination)"
    )


# ----------------------------------------------------------------------
# notion_create_page
# ----------------------------------------------------------------------
class RichTextItem(BaseModel):
    text: TextContent


class PageProperty(BaseModel):
    type: Literal["text", "rich_text"]
    text: Optional[TextContent] = None
    rich_text: Optional[List[RichTextItem]] = None


class CreatePageInput(BaseModel):
    parent_id: str = Field(
        description="The ID of the parent page or database where the new page will be created"
    )
    title: str = Field(description="The title of the new page")
    properties: Optional[Dict[str, PageProperty]] = Field(
        default=None, description="Optional properties for the page"
    )


# ----------------------------------------------------------------------
# notion_add_page_content
# ----------------------------------------------------------------------
class BlockText(BaseModel):
    text: TextContent


class ParagraphBlock(BaseModel):
    type: Literal["paragraph"]
    paragraph: BlockText


class Heading1Block(BaseModel):
    type: Literal["heading_1"]
    heading_1: BlockText


class Heading2Block(BaseModel):
    type: Literal["heading_2"]
    heading_2: BlockText


class Heading3Block(BaseModel):
    type: Literal["heading_3"]
    heading_3: BlockText


class BulletedListItemBlock(BaseModel):
    type: Literal["bulleted_list_item"]
    bulleted_list_item: BlockText


BlockContent = Annotated[
    Union[ParagraphBlock, Heading1Block, Heading2Block, Heading3Block, BulletedListItemBlock],
    Field(discriminator="type"),
]

BLOCK_TYPES = ("paragraph", "heading_1", "heading_2", "heading_3", "bulleted_list_item")


class AddPageContentInput(BaseModel):
    block_id: str = Field(description="The ID of the block to add content to")
    children: List[BlockContent] = Field(max_length=100, description="Array of content blocks to add (max 100)")


# ----------------------------------------------------------------------
# notion_retrieve_page
# ----------------------------------------------------------------------
class RetrievePageInput(BaseModel):
    page_id: str = Field(
        min_length=1,
        description=(
            "The ID of the page to retrieve. This is a UUID that identifies a specific Notion page. "
            "Example: '123e4567-e89b-12d3-a456-426614174000'"
        ),
    )
