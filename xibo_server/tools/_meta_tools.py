"""Meta-tools for LLM agents - consolidated interface with action-based routing."""

from typing import Any

from loguru import logger
from mcp_schema import FlatBaseModel, OutputBaseModel
from pydantic import ConfigDict, Field, ValidationError

from xibo_server.models.envelope import ToolResult
from xibo_server.tools.registry import TOOL_GROUPS, get_tool_defn, list_tools
from xibo_server.utils.cms import validation_details
from xibo_server.utils.errors import ErrorCode


# ============ Help Response ============
class ActionInfo(OutputBaseModel):
    """Information about an action."""

    model_config = ConfigDict(extra="forbid")
    group: str
    description: str
    required_params: list[str]
    optional_params: list[str]


class HelpResponse(OutputBaseModel):
    """Help response listing available actions."""

    model_config = ConfigDict(extra="forbid")
    tool_name: str
    description: str
    actions: dict[str, ActionInfo]


# ============ Input Model ============
class XiboInput(FlatBaseModel):
    """Input for xibo meta-tool."""

    model_config = ConfigDict(extra="forbid")

    action: str = Field(
        ...,
        description="Action to perform. REQUIRED. Either 'help' or a tool name such as 'get_displays', 'add_layout', 'upload_google_font'. Use 'help' to list every action with its parameters.",
    )
    params: dict[str, Any] | None = Field(
        None,
        description="Parameters for the action, keyed exactly as listed by 'help' (e.g., {'layoutId': 12}). Use xibo_schema with the action name for full types.",
    )
    group: str | None = Field(
        None,
        description=f"Only for action='help': restrict the listing to one group. Valid values: {', '.join(repr(g) for g in TOOL_GROUPS)}.",
    )


# ============ Output Model ============
class XiboOutput(OutputBaseModel):
    """Output for xibo meta-tool."""

    model_config = ConfigDict(extra="forbid")

    action: str = Field(
        ...,
        description="The action that was executed (e.g., 'help', 'get_layouts'). Always present.",
    )
    error: str | None = Field(
        None,
        description="Top-level error if the action could not be dispatched. When present, result is null or holds validation details.",
    )
    help: HelpResponse | None = Field(
        None,
        description="Help response when action='help'.",
    )
    result: ToolResult | None = Field(
        None,
        description="Envelope returned by the action: success, message, data, error, errorData.",
    )


# ============ Help Definition ============
def build_help(group: str | None = None) -> HelpResponse:
    actions = {
        "help": ActionInfo(
            group="meta",
            description="List all available actions",
            required_params=[],
            optional_params=["group"],
        )
    }
    for defn in list_tools(group):
        fields = defn.request_model.model_fields
        actions[defn.name] = ActionInfo(
            group=defn.group,
            description=defn.description.split("\n", 1)[0],
            required_params=[name for name, f in fields.items() if f.is_required()],
            optional_params=[name for name, f in fields.items() if not f.is_required()],
        )
    return HelpResponse(
        tool_name="xibo",
        description="Xibo CMS operations: users, displays, layouts, playlists, widgets, commands, sync groups, modules, datasets, fonts, news, workflows and image generation.",
        actions=actions,
    )


# ============ Meta-Tool Implementation ============
async def xibo(request: XiboInput) -> str:
    """Xibo digital signage CMS operations. Call with action='help' first."""
    if request.action == "help":
        try:
            help_response = build_help(request.group)
        except ValueError as exc:
            return XiboOutput(action="help", error=str(exc)).model_dump_json()
        return XiboOutput(action="help", help=help_response).model_dump_json()

    try:
        defn = get_tool_defn(request.action)
    except ValueError as exc:
        return XiboOutput(
            action=request.action, error=f"{exc}. Use action='help' to list actions."
        ).model_dump_json()

    try:
        tool_request = defn.request_model.model_validate(request.params or {})
    except ValidationError as exc:
        logger.debug(f"Rejected params for {defn.name}: {exc.error_count()} error(s)")
        return XiboOutput(
            action=request.action,
            error="Invalid params",
            result=ToolResult.fail(
                ErrorCode.VALIDATION_ERROR,
                f"Invalid params for {defn.name}",
                error=validation_details(exc),
            ),
        ).model_dump_json()

    result = await defn.impl(tool_request)
    return XiboOutput(action=request.action, result=result).model_dump_json()


# ============ Schema Tool ============
class SchemaInput(FlatBaseModel):
    """Input for schema introspection."""

    model_config = ConfigDict(extra="forbid")
    model: str = Field(
        ...,
        description="Model name to get schema for. Valid values: 'input', 'output', 'ToolResult', or any action name (e.g., 'add_layout') for that action's params.",
    )


class SchemaOutput(OutputBaseModel):
    """Output for schema introspection."""

    model_config = ConfigDict(extra="forbid")
    model: str = Field(
        ..., description="The model name that was requested (echoed back)."
    )
    json_schema: dict[str, Any] = Field(
        ...,
        description="JSON Schema object describing the model's structure, types, and constraints. Contains 'error' key with message if model name was invalid.",
    )


SCHEMAS: dict[str, type[FlatBaseModel | OutputBaseModel]] = {
    "input": XiboInput,
    "output": XiboOutput,
    "ToolResult": ToolResult,
}


def xibo_schema(request: SchemaInput) -> str:
    """Get JSON schema for xibo input/output models or any action's params."""
    model = SCHEMAS.get(request.model)
    if model is None:
        try:
            model = get_tool_defn(request.model).request_model
        except ValueError:
            return SchemaOutput(
                model=request.model,
                json_schema={
                    "error": f"Unknown model. Available: {', '.join(sorted(SCHEMAS))} or an action name"
                },
            ).model_dump_json()
    return SchemaOutput(
        model=request.model,
        json_schema=model.model_json_schema(),
    ).model_dump_json()
