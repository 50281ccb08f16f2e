"""MCP client helpers for agents using LiteLLM."""

import json
from typing import Any

from fastmcp import Client as FastMCPClient
from litellm.experimental_mcp_client import load_mcp_tools
from loguru import logger
from mcp.types import ContentBlock, ImageContent, TextContent
from openai.types.chat.chat_completion_tool_param import ChatCompletionToolParam

from runner.agents.models import LitellmInputMessage, tool_name
from runner.utils.decorators import with_retry
from xibo_server.tools.registry import TOOL_GROUPS

# Meta-tools the xibo server exposes when individual tools are disabled
META_TOOLS = ("xibo", "xibo_schema")
WORKFLOW_TOOLS = frozenset(impl.__name__ for impl in TOOL_GROUPS["workflow"])


def build_xibo_mcp_schema(
    url: str,
    auth_token: str | None,
) -> dict[str, dict[str, dict[str, Any]]]:
    """
    Build the MCP client config for the xibo server's streamable HTTP endpoint.

    Args:
        url: URL of the MCP endpoint (e.g. "http://localhost:4111/mcp/")
        auth_token: Bearer token (None for local/unauthenticated)
    """
    server_config: dict[str, Any] = {
        "transport": "streamable-http",
        "url": url,
    }

    # Only add Authorization header if token is provided
    if auth_token:
        server_config["headers"] = {"Authorization": f"Bearer {auth_token}"}

    return {"mcpServers": {"xibo": server_config}}


def build_external_mcp_schema(
    name: str,
    command: str,
    args: list[str],
) -> dict[str, dict[str, dict[str, Any]]]:
    """MCP client config for an external server launched over stdio."""
    return {
        "mcpServers": {
            name: {"transport": "stdio", "command": command, "args": args},
        }
    }


@with_retry(max_retries=3, base_backoff=2, jitter=0.5)
async def load_tools(mcp_client: FastMCPClient) -> list[ChatCompletionToolParam]:
    """List a server's tools in OpenAI format, retrying while the server starts up."""
    async with mcp_client as client:
        tools: list[ChatCompletionToolParam] = await load_mcp_tools(
            client.session, format="openai"
        )  # pyright: ignore[reportAssignmentType]
    return tools


def select_tools(
    tools: list[ChatCompletionToolParam],
    allowed_tools: list[str],
) -> list[ChatCompletionToolParam]:
    """
    Keep the tools a persona is allowed to call.

    A xibo server running with meta-tools only offers ``xibo`` and ``xibo_schema``;
    when none of the allowed tools is offered directly those two are kept instead,
    since every allowed operation is reachable through them.
    """
    allowed = set(allowed_tools)
    selected = [tool for tool in tools if tool_name(tool) in allowed]
    if selected or not allowed:
        return selected

    meta = [tool for tool in tools if tool_name(tool) in META_TOOLS]
    if meta:
        logger.bind(message_type="configure").warning(
            "Server exposes meta-tools only, falling back to xibo/xibo_schema"
        )
    return meta


def content_blocks_to_messages(
    content_blocks: list[ContentBlock],
    tool_call_id: str,
    name: str,
    model: str,
    deferred_image_messages: list[LitellmInputMessage],
) -> list[LitellmInputMessage]:
    """
    Convert MCP content blocks to a single LiteLLM tool message.

    Each tool call gets exactly one tool result. Models that cannot take images in
    tool results get them as user messages appended to ``deferred_image_messages``,
    which the caller adds after all tool responses of the step.
    """
    # Anthropic supports images directly in tool results
    supports_image_tool_results = model.startswith("anthropic/")

    text_contents: list[str] = []
    image_data_uris: list[str] = []

    for content_block in content_blocks:
        match content_block:
            case TextContent():
                text_contents.append(content_block.text)

            case ImageContent():
                image_data_uris.append(
                    f"data:{content_block.mimeType};base64,{content_block.data}"
                )

            case _:
                logger.warning(f"Content block type {content_block.type} not supported")
                text_contents.append("Unable to parse tool call response")

    content: list[dict[str, Any]] = [{"type": "text", "text": text} for text in text_contents]

    if supports_image_tool_results:
        content.extend(
            {"type": "image_url", "image_url": {"url": data_uri}} for data_uri in image_data_uris
        )
    else:
        if image_data_uris and not content:
            content.append({"type": "text", "text": f"Image(s) returned by {name} tool"})
        deferred_image_messages.extend(
            {
                "role": "user",
                "content": [{"type": "image_url", "image_url": {"url": data_uri}}],
            }  # pyright: ignore[reportArgumentType]
            for data_uri in image_data_uris
        )

    tool_message: LitellmInputMessage = {
        "role": "tool",
        "tool_call_id": tool_call_id,
        "name": name,
        "content": content if content else [{"type": "text", "text": ""}],
    }  # pyright: ignore[reportAssignmentType]
    return [tool_message]


def requested_workflow(name: str, arguments: str | None) -> str | None:
    """
    Return the workflow a tool call targets, or None when it is not a workflow call.

    Workflow tools are reached either directly (``{"request": {"workflowId": ...}}``)
    or through the ``xibo`` meta-tool with the workflow tool as its action.
    """
    try:
        payload = json.loads(arguments or "{}")
    except json.JSONDecodeError:
        return None
    request = payload.get("request") if isinstance(payload, dict) else None
    if not isinstance(request, dict):
        return None

    if name == "xibo":
        name = request.get("action", "")
        request = request.get("params") or {}
    if name not in WORKFLOW_TOOLS or not isinstance(request, dict):
        return None
    return str(request.get("workflowId", ""))
