from __future__ import annotations
import dataclasses

from tools.notion.schemas import DEFAULT_NOTION_VERSION


@dataclasses.dataclass
class LLM:
    model: str


@dataclasses.dataclass
class Agent:
    max_steps: int = 10


@dataclasses.dataclass
class Notion:
    version: str = DEFAULT_NOTION_VERSION


@dataclasses.dataclass
class Config:
    llm: LLM
    agent: Agent = dataclasses.field(default_factory=Agent)
    notion: Notion = dataclasses.field(default_factory=Notion)
