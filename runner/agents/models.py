"""
Models for agent personas and agent runs.
"""

from enum import StrEnum
from typing import Any

from litellm.types.llms.openai import AllMessageValues
from litellm.types.utils import Message
from openai.types.chat.chat_completion_tool_param import ChatCompletionToolParam
from pydantic import BaseModel, ConfigDict, Field

# LiteLLM message types for agent execution:
# - InputMessage (AllMessageValues): TypedDict for API requests, used for initial_messages
# - OutputMessage (Message): Pydantic model from API responses, used for new messages
# - AnyMessage: Union of both, used for trajectory output (includes input + generated)
LitellmInputMessage = AllMessageValues
LitellmOutputMessage = Message
LitellmAnyMessage = LitellmInputMessage | LitellmOutputMessage


class PersonaIds(StrEnum):
    """Registry of available agent personas."""

    XIBO_CMS = "xibo_cms"
    MARKET_RESEARCH = "market_research"
    PRODUCT_ANALYSIS = "product_analysis"
    MCP_CONTROL = "mcp_control"


class ToolSource(StrEnum):
    """Where a persona's tools come from."""

    XIBO = "xibo"  # the xibo-server MCP server in this repo
    EXTERNAL_MCP = "external_mcp"  # a third-party MCP server (file/process control)


class AgentStatus(StrEnum):
    """Status of an agent run."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"
    ERROR = "error"


class AgentPersona(BaseModel):
    """Declarative definition of an agent: prompt plus the tools and workflows it may use."""

    model_config = ConfigDict(frozen=True)

    id: PersonaIds
    name: str
    description: str
    instructions: str
    model: str | None = Field(None, description="LiteLLM model id; None uses the runner default.")
    tool_source: ToolSource = ToolSource.XIBO
    tools: list[str] = []
    workflows: list[str] = []


class AgentConfig(BaseModel):
    """Everything a loop agent needs to execute a persona."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    persona_id: PersonaIds
    model: str
    messages: list[Any]
    mcp_config: dict[str, Any]
    allowed_tools: list[str]
    allowed_workflows: list[str] = []
    max_steps: int = 50
    tool_call_timeout: int = 600
    llm_response_timeout: int = 300
    extra_args: dict[str, Any] = {}


class AgentTrajectoryOutput(BaseModel):
    """Output from an agent run"""

    persona_id: PersonaIds
    messages: list[LitellmAnyMessage]
    final_answer: str | None = None
    status: AgentStatus
    time_elapsed: float
    steps: int = 0


def tool_name(tool: ChatCompletionToolParam) -> str:
    return tool["function"]["name"]
