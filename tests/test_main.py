import pytest

from main import build_tools
from tools.exceptions import MissingCredentialsError
from utils.config import LLM, Config

ENV_VARS = (
    "AIRTABLE_API_KEY",
    "AIRTABLE_BASE_ID",
    "AIRTABLE_TABLE_ID",
    "NOTION_API_KEY",
    "NOTION_ROOT_PAGE_ID",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def _by_name(tools):
    return {tool.get_tool_name(): tool for tool in tools}


def test_builds_both_services_with_pinned_ids(clean_env):
    clean_env.setenv("AIRTABLE_API_KEY", "pat-123")
    clean_env.setenv("AIRTABLE_BASE_ID", "base123")
    clean_env.setenv("AIRTABLE_TABLE_ID", "tbl1")
    clean_env.setenv("NOTION_API_KEY", "secret_abc")
    clean_env.setenv("NOTION_ROOT_PAGE_ID", "root")

    tools = _by_name(build_tools(Config(llm=LLM(model="gpt-4o"))))

    assert set(tools) == {
        "create-record",
        "list-records",
        "search-records",
        "get-base-schema",
        "list-bases",
        "notion_search",
        "notion_create_page",
        "notion_add_page_content",
        "notion_retrieve_page",
    }
    assert tools["create-record"].get_predefined_parameters() == {"base_id": "base123", "table_id": "tbl1"}
    assert tools["get-base-schema"].get_predefined_parameters() == {"base_id": "base123"}
    assert tools["notion_create_page"].get_predefined_parameters() == {"parent_id": "root"}
    assert tools["list-bases"].get_predefined_parameters() is None


def test_skips_service_without_credentials(clean_env):
    clean_env.setenv("NOTION_API_KEY", "secret_abc")

    tools = _by_name(build_tools(Config(llm=LLM(model="gpt-4o"))))

    assert set(tools) == {"notion_search", "notion_create_page", "notion_add_page_content", "notion_retrieve_page"}
    assert tools["notion_create_page"].get_predefined_parameters() is None


def test_requires_at_least_one_service(clean_env):
    with pytest.raises(MissingCredentialsError):
        build_tools(Config(llm=LLM(model="gpt-4o")))
