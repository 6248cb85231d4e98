#!/usr/bin/env python3

##############################################
#                                            #
#      AIRTABLE + NOTION TERMINAL AGENT      #
#                                            #
##############################################

import asyncio
import os
from typing import List

from agents.llm.litellm import LiteLLM
from agents.step_agent import StepAgent
from tools.adapters import to_step_tools
from tools.airtable import (
    AirtableAuth,
    CreateRecordTool,
    GetBaseSchemaTool,
    ListBasesTool,
    ListRecordsTool,
    SearchRecordsTool,
)
from tools.base import ToolBase
from tools.exceptions import MissingCredentialsError
from tools.notion import (
    NotionAddPageContentTool,
    NotionAuth,
    NotionCreatePageTool,
    NotionRetrievePageTool,
    NotionSearchTool,
)
from utils.cli import print_result, read_user_goal
from utils.config import Config
from utils.env import load_env, optional_env, require_env
from utils.load_config import load_config
from utils.logger import get_logger, init_logger


logger = get_logger(__name__)


def build_airtable_tools() -> List[ToolBase]:
    auth = AirtableAuth(access_token=require_env("AIRTABLE_API_KEY", service="airtable"))
    base_id = optional_env("AIRTABLE_BASE_ID")
    table_id = optional_env("AIRTABLE_TABLE_ID")

    pinned_base = {"base_id": base_id} if base_id else {}
    pinned_table = {**pinned_base, "table_id": table_id} if base_id and table_id else pinned_base
    return [
        CreateRecordTool(auth=auth, predefined_parameters=pinned_table),
        ListRecordsTool(auth=auth, predefined_parameters=pinned_table),
        SearchRecordsTool(auth=auth, predefined_parameters=pinned_table),
        GetBaseSchemaTool(auth=auth, predefined_parameters=pinned_base),
        ListBasesTool(auth=auth),
    ]


def build_notion_tools(config: Config) -> List[ToolBase]:
    auth = NotionAuth(token=require_env("NOTION_API_KEY", service="notion"), version=config.notion.version)
    root_page_id = optional_env("NOTION_ROOT_PAGE_ID")
    return [
        NotionSearchTool(auth=auth),
        NotionCreatePageTool(auth=auth, predefined_parameters={"parent_id": root_page_id} if root_page_id else None),
        NotionAddPageContentTool(auth=auth),
        NotionRetrievePageTool(auth=auth),
    ]


def build_tools(config: Config) -> List[ToolBase]:
    """Every tool whose service has credentials in the environment."""
    tools: List[ToolBase] = []
    for service, build in (("airtable", build_airtable_tools), ("notion", lambda: build_notion_tools(config))):
        try:
            tools.extend(build())
        except MissingCredentialsError as exc:
            logger.warning("service_disabled", service=service, reason=str(exc))
    if not tools:
        raise MissingCredentialsError("AIRTABLE_API_KEY or NOTION_API_KEY")
    return tools


async def run(agent: StepAgent) -> None:
    logger.info("🤖 Agent started. Enter requests to get started…")

    while True:
        goal_text = None
        try:
            goal_text = read_user_goal()
            if not goal_text:  # Skip empty inputs
                continue

            result = await agent.solve(goal_text)
            print_result(result)

        except KeyboardInterrupt:
            logger.info("🤖 Bye!")
            break

        except Exception as exc:
            logger.exception("solve_failed", goal=goal_text, error=str(exc))


def main() -> None:
    init_logger("config.json")
    load_env()
    config = load_config()

    tools = build_tools(config)
    agent = StepAgent(
        llm=LiteLLM(model=os.getenv("LLM_MODEL", config.llm.model)),
        tools=to_step_tools(tools),
        max_steps=config.agent.max_steps,
    )
    asyncio.run(run(agent))


if __name__ == "__main__":
    main()
