"""Tests for the xibo meta-tool, the schema tool and server assembly."""

import json

import httpx
import pytest
from conftest import FakeCms
from fastmcp import Client
from fastmcp.server.middleware.error_handling import ErrorHandlingMiddleware

from xibo_server.main import create_server
from xibo_server.middleware.logging import LoggingMiddleware
from xibo_server.middleware.validation_error_sanitizer import (
    ValidationErrorSanitizerMiddleware,
)
from xibo_server.tools._meta_tools import SchemaInput, XiboInput, xibo, xibo_schema
from xibo_server.tools.registry import TOOL_REGISTRY


class TestXiboMetaTool:
    @pytest.mark.asyncio
    async def test_help_lists_actions_with_params(self) -> None:
        output = json.loads(await xibo(XiboInput(action="help")))

        actions = output["help"]["actions"]
        assert set(TOOL_REGISTRY) <= set(actions), "Every tool must be listed"
        assert actions["edit_layout"]["required_params"] == ["layoutId", "name"]
        assert "description" in actions["edit_layout"]["optional_params"]
        assert actions["help"]["optional_params"] == ["group"]

    @pytest.mark.asyncio
    async def test_help_for_one_group(self) -> None:
        output = json.loads(await xibo(XiboInput(action="help", group="news")))

        assert set(output["help"]["actions"]) == {"help", "get_xibo_news", "get_google_news"}

    @pytest.mark.asyncio
    async def test_help_for_unknown_group(self) -> None:
        output = json.loads(await xibo(XiboInput(action="help", group="rockets")))

        assert "Unknown tool group" in output["error"]

    @pytest.mark.asyncio
    async def test_unknown_action(self) -> None:
        output = json.loads(await xibo(XiboInput(action="launch_rockets")))

        assert "action='help'" in output["error"]
        assert output["result"] is None

    @pytest.mark.asyncio
    async def test_invalid_params_fail_before_any_request(self, fake_cms: FakeCms) -> None:
        output = json.loads(
            await xibo(XiboInput(action="delete_command", params={"commandId": "seven"}))
        )

        assert output["error"] == "Invalid params"
        assert output["result"]["success"] is False
        assert output["result"]["message"].startswith("[VALIDATION_ERROR]")
        assert output["result"]["error"][0]["loc"] == "commandId"
        assert fake_cms.requests == [], "Invalid params must not reach the CMS"
        assert fake_cms.token_requests == 0

    @pytest.mark.asyncio
    async def test_dispatches_to_tool(self, fake_cms: FakeCms) -> None:
        fake_cms.add("GET", "/api/command", json=[{"commandId": 1, "command": "A", "code": "a"}])

        output = json.loads(await xibo(XiboInput(action="get_commands", params={})))

        assert output["result"]["success"] is True
        assert output["result"]["data"][0]["code"] == "a"


class TestXiboSchema:
    def test_action_schema_is_flat(self) -> None:
        output = json.loads(xibo_schema(SchemaInput(model="upload_google_font")))

        schema = output["json_schema"]
        assert "family" in schema["properties"]
        assert "$defs" not in json.dumps(schema)

    def test_envelope_schema(self) -> None:
        output = json.loads(xibo_schema(SchemaInput(model="ToolResult")))

        assert "errorData" in output["json_schema"]["properties"]

    def test_unknown_model(self) -> None:
        output = json.loads(xibo_schema(SchemaInput(model="nope")))

        assert "error" in output["json_schema"]


class TestCreateServer:
    @pytest.mark.asyncio
    async def test_meta_tools_by_default(self) -> None:
        async with Client(create_server()) as client:
            tools = {tool.name for tool in await client.list_tools()}

        assert tools == {"xibo", "xibo_schema"}

    @pytest.mark.asyncio
    async def test_individual_tools(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("USE_INDIVIDUAL_TOOLS", "true")

        async with Client(create_server()) as client:
            tools = {tool.name for tool in await client.list_tools()}

        assert tools == set(TOOL_REGISTRY)

    def test_middleware_stack_has_no_retry_layer(self) -> None:
        server = create_server()

        assert [type(m) for m in server.middleware] == [
            ErrorHandlingMiddleware,
            LoggingMiddleware,
            ValidationErrorSanitizerMiddleware,
        ]

    @pytest.mark.asyncio
    async def test_failed_cms_call_is_sent_once(
        self, fake_cms: FakeCms, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("USE_INDIVIDUAL_TOOLS", "true")

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        fake_cms.routes[("GET", "/api/command")] = refuse

        async with Client(create_server()) as client:
            result = await client.call_tool("get_commands", {"request": {}})

        assert len(fake_cms.requests) == 1, f"Expected one CMS request, got {len(fake_cms.requests)}"
        assert "[NETWORK_ERROR]" in result.content[0].text
