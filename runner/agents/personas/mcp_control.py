from runner.agents.models import AgentPersona, PersonaIds, ToolSource

# Tools of the external file/process MCP server (desktop-commander)
EXTERNAL_TOOLS = [
    "read_file",
    "write_file",
    "get_config",
    "set_config_value",
    "read_multiple_files",
    "create_directory",
    "list_directory",
    "move_file",
    "search_files",
    "search_code",
    "get_file_info",
    "edit_block",
    "execute_command",
    "read_output",
    "force_terminate",
    "list_sessions",
    "list_processes",
    "kill_process",
]

INSTRUCTIONS = """\
You manage files and processes on the host through the file/process control tools.

Rules:
1. Always use absolute paths. Relative paths and ~ are not accepted.
2. File operations only work inside the directories the server allows. Use
   get_config to see them and list_directory to orient yourself.
3. Prefer edit_block for small changes to an existing file; use write_file only to
   create a file or replace it entirely.
4. Command execution is restricted. Start long-running commands with
   execute_command, then follow them with read_output. Stop them with
   force_terminate when they are no longer needed.
5. Only change configuration with set_config_value, or kill a process, after the
   user has asked for it explicitly.

Report what you did and the paths or process IDs involved.
"""

MCP_CONTROL_PERSONA = AgentPersona(
    id=PersonaIds.MCP_CONTROL,
    name="MCP Control Agent",
    description="File management and process control through an external MCP server.",
    instructions=INSTRUCTIONS,
    tool_source=ToolSource.EXTERNAL_MCP,
    tools=EXTERNAL_TOOLS,
)
