from xibo_server.models.command import (
    AddCommandRequest,
    Command,
    DeleteCommandRequest,
    EditCommandRequest,
    GetCommandsRequest,
)
from xibo_server.models.envelope import ToolResult
from xibo_server.utils.cms import CmsEndpoint, Encoding, call_cms

GET_COMMANDS = CmsEndpoint("GET", "/api/command", response=list[Command])
ADD_COMMAND = CmsEndpoint("POST", "/api/command", Encoding.FORM, Command, "Command added")
EDIT_COMMAND = CmsEndpoint(
    "PUT", "/api/command/{commandId}", Encoding.FORM, Command, "Command updated"
)
DELETE_COMMAND = CmsEndpoint(
    "DELETE", "/api/command/{commandId}", Encoding.NONE, success_message="Command deleted"
)


async def get_commands(request: GetCommandsRequest) -> ToolResult:
    """List display commands, optionally filtered by ID, name or code."""
    return await call_cms(GET_COMMANDS, request)


async def add_command(request: AddCommandRequest) -> ToolResult:
    """Create a display command (name, unique code, command string) players can execute."""
    return await call_cms(ADD_COMMAND, request)


async def edit_command(request: EditCommandRequest) -> ToolResult:
    """Edit a display command by commandId."""
    return await call_cms(EDIT_COMMAND, request)


async def delete_command(request: DeleteCommandRequest) -> ToolResult:
    """Delete a display command by commandId."""
    return await call_cms(DELETE_COMMAND, request)


TOOLS = [get_commands, add_command, edit_command, delete_command]
