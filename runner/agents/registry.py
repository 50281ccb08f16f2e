"""
Persona registry and agent configuration wiring.
"""

from collections.abc import Iterable
from typing import Any

from runner.agents.models import AgentConfig, AgentPersona, PersonaIds, ToolSource
from runner.agents.personas.market_research import MARKET_RESEARCH_PERSONA
from runner.agents.personas.mcp_control import MCP_CONTROL_PERSONA
from runner.agents.personas.product_analysis import PRODUCT_ANALYSIS_PERSONA
from runner.agents.personas.xibo_cms import XIBO_CMS_PERSONA
from runner.utils.mcp import WORKFLOW_TOOLS, build_external_mcp_schema, build_xibo_mcp_schema
from runner.utils.settings import get_settings
from xibo_server.tools.registry import TOOL_REGISTRY

PERSONA_REGISTRY: dict[PersonaIds, AgentPersona] = {
    persona.id: persona
    for persona in (
        XIBO_CMS_PERSONA,
        MARKET_RESEARCH_PERSONA,
        PRODUCT_ANALYSIS_PERSONA,
        MCP_CONTROL_PERSONA,
    )
}


def get_persona(persona_id: str) -> AgentPersona:
    """
    Get the persona registered under ``persona_id``.

    Raises:
        ValueError: If the persona ID is not registered
    """
    try:
        return PERSONA_REGISTRY[PersonaIds(persona_id)]
    except ValueError:
        raise ValueError(
            f"Unknown persona: {persona_id}. Available: {', '.join(PERSONA_REGISTRY)}"
        ) from None


def validate_tools(persona: AgentPersona, available: Iterable[str]) -> list[str]:
    """Check every tool the persona declares is offered, returning them in declared order."""
    offered = set(available)
    missing = [name for name in persona.tools if name not in offered]
    if missing:
        raise ValueError(f"Persona {persona.id} references unknown tools: {', '.join(missing)}")
    return list(persona.tools)


def validate_workflows(persona: AgentPersona) -> list[str]:
    """Check a persona that declares workflows can also reach a workflow tool."""
    if persona.workflows and not WORKFLOW_TOOLS & set(persona.tools):
        raise ValueError(f"Persona {persona.id} declares workflows but has no workflow tool")
    return list(persona.workflows)


def build_agent_config(
    persona_id: str,
    prompt: str,
    *,
    model: str | None = None,
    available_tools: Iterable[str] | None = None,
    **config_values: Any,
) -> AgentConfig:
    """
    Wire a persona's prompt and tool references into a runnable agent configuration.

    Xibo tools are validated against the local tool registry. Tools of an external
    MCP server can only be checked against ``available_tools``, the names the
    server reported; when that is None they are taken as declared.

    Raises:
        ValueError: On an unknown persona, a tool reference that does not exist, or
            declared workflows without a workflow tool
    """
    settings = get_settings()
    persona = get_persona(persona_id)

    if persona.tool_source == ToolSource.XIBO:
        allowed_tools = validate_tools(persona, TOOL_REGISTRY)
        mcp_config = build_xibo_mcp_schema(settings.XIBO_MCP_URL, settings.XIBO_MCP_AUTH_TOKEN)
    else:
        allowed_tools = (
            validate_tools(persona, available_tools)
            if available_tools is not None
            else list(persona.tools)
        )
        mcp_config = build_external_mcp_schema(
            settings.EXTERNAL_MCP_NAME,
            settings.EXTERNAL_MCP_COMMAND,
            settings.external_mcp_args,
        )

    return AgentConfig(
        persona_id=persona.id,
        model=model or persona.model or settings.DEFAULT_MODEL,
        messages=[
            {"role": "system", "content": persona.instructions},
            {"role": "user", "content": prompt},
        ],
        mcp_config=mcp_config,
        allowed_tools=allowed_tools,
        allowed_workflows=validate_workflows(persona),
        **config_values,
    )
