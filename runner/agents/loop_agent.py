"""
Loop Agent implementation.

Runs a persona in a loop: call the LLM, execute the tool calls it asks for against
the persona's MCP server, and stop once the LLM answers without tool calls.
"""

import asyncio
import time

from fastmcp import Client as FastMCPClient
from litellm import Choices
from litellm.exceptions import Timeout
from litellm.experimental_mcp_client import call_openai_tool
from litellm.files.main import ModelResponse
from loguru import logger
from openai.types.chat.chat_completion_tool_param import ChatCompletionToolParam

from runner.agents.models import (
    AgentConfig,
    AgentStatus,
    AgentTrajectoryOutput,
    LitellmAnyMessage,
    LitellmInputMessage,
    LitellmOutputMessage,
    tool_name,
)
from runner.utils.llm import generate_response
from runner.utils.mcp import (
    content_blocks_to_messages,
    load_tools,
    requested_workflow,
    select_tools,
)


def finalize_answer(final_answer: str | None = None) -> str | None:
    logger.bind(message_type="final_answer").info(final_answer)
    return final_answer


class LoopAgent:
    """
    A simple loop-based agent that calls the LLM and executes tool calls
    until the task is complete.
    """

    def __init__(self, config: AgentConfig):
        self.persona_id = config.persona_id
        self.model: str = config.model
        self.messages: list[LitellmAnyMessage] = list(config.messages)
        self.allowed_tools: list[str] = config.allowed_tools
        self.allowed_workflows: list[str] = config.allowed_workflows
        self.mcp_client = FastMCPClient(config.mcp_config)

        self.tool_call_timeout: int = config.tool_call_timeout
        self.llm_response_timeout: int = config.llm_response_timeout
        self.max_steps: int = config.max_steps
        self.extra_args = config.extra_args

        self.tools: list[ChatCompletionToolParam] = []
        self.final_answer: str | None = None
        self._finalized: bool = False
        self.current_step: int = 0
        self.start_time: float | None = None
        self.status: AgentStatus = AgentStatus.PENDING

    async def _initialize_tools(self) -> None:
        """Load the MCP server's tools and keep the ones the persona may call."""
        tools = await load_tools(self.mcp_client)
        self.tools = select_tools(tools, self.allowed_tools)

        offered = {tool_name(tool) for tool in tools}
        missing = [name for name in self.allowed_tools if name not in offered]
        if missing and self.tools:
            logger.bind(message_type="configure", payload=missing).warning(
                f"{len(missing)} declared tools are not offered by the server"
            )

        logger.bind(
            message_type="configure",
            payload=[tool_name(tool) for tool in self.tools],
        ).info(f"Loaded {len(self.tools)} of {len(tools)} MCP tools")

    def _tool_message(self, tool_call, content: str) -> LitellmOutputMessage:
        return LitellmOutputMessage(
            role="tool",
            tool_call_id=tool_call.id,
            name=tool_call.function.name,
            content=content,
        )

    async def _call_tools(self, tool_calls) -> None:
        deferred_image_messages: list[LitellmInputMessage] = []
        async with self.mcp_client as client:
            for tool_call in tool_calls:
                name = tool_call.function.name
                tool_logger = logger.bind(ref=tool_call.id, name=name)
                tool_logger.bind(
                    message_type="tool_call", payload=tool_call.function.arguments
                ).info(f"Calling tool {name}")
                result_logger = tool_logger.bind(message_type="tool_result")

                if self.tools and name not in {tool_name(tool) for tool in self.tools}:
                    result_logger.warning(f"Model called undeclared tool {name}")
                    self.messages.append(
                        self._tool_message(tool_call, f"Tool {name} is not available")
                    )
                    continue

                workflow_id = requested_workflow(name, tool_call.function.arguments)
                if workflow_id is not None and workflow_id not in self.allowed_workflows:
                    result_logger.warning(f"Model requested undeclared workflow {workflow_id}")
                    self.messages.append(
                        self._tool_message(tool_call, f"Workflow {workflow_id} is not available")
                    )
                    continue

                try:
                    call_result = await asyncio.wait_for(
                        call_openai_tool(client.session, tool_call),
                        timeout=self.tool_call_timeout,
                    )
                except TimeoutError:
                    result_logger.error(f"Tool call {name} timed out")
                    self.messages.append(self._tool_message(tool_call, "Tool call timed out"))
                    continue
                except Exception as e:
                    result_logger.error(f"Error calling tool {name}: {e!r}")
                    self.messages.append(
                        self._tool_message(tool_call, f"Error calling tool: {e!r}")
                    )
                    continue

                if not call_result.content:
                    result_logger.error(f"Call result for {name} is empty")
                    self.messages.append(
                        self._tool_message(tool_call, "Tool returned no content")
                    )
                    continue

                self.messages.extend(
                    content_blocks_to_messages(
                        call_result.content,
                        tool_call.id,
                        name or "unknown",
                        self.model,
                        deferred_image_messages=deferred_image_messages,
                    )
                )
                result_logger.bind(
                    payload=[block.model_dump() for block in call_result.content],
                ).info(f"Tool {name} called successfully")

        self.messages.extend(deferred_image_messages)

    async def step(self) -> None:
        """Execute a single step of the agent loop."""
        self.current_step += 1

        try:
            response: ModelResponse = await generate_response(
                self.model,
                self.messages,
                self.tools,
                self.llm_response_timeout,
                self.extra_args,
                persona_id=self.persona_id,
            )
        except Timeout:
            logger.bind(message_type="response").error(
                "Response timed out, continuing with next step"
            )
            return

        choices = response.choices
        if not choices or not isinstance(choices[0], Choices):
            logger.bind(message_type="step").warning(
                "LLM returned invalid/empty choices, prompting to continue"
            )
            self.messages.append(LitellmOutputMessage(role="user", content="continue"))
            return

        response_message = LitellmOutputMessage.model_validate(choices[0].message)
        tool_calls = getattr(response_message, "tool_calls", None)

        if getattr(response_message, "reasoning_content", None):
            logger.bind(message_type="reasoning").info(response_message.reasoning_content)

        if response_message.content and tool_calls:
            logger.bind(message_type="response").info(response_message.content)

        self.messages.append(response_message)

        if tool_calls:
            await self._call_tools(tool_calls)
        else:
            # No tool calls = task complete
            self._finalized = True
            self.final_answer = finalize_answer(response_message.content or "No content")

    def _build_output(self) -> AgentTrajectoryOutput:
        return AgentTrajectoryOutput(
            persona_id=self.persona_id,
            messages=list(self.messages),
            final_answer=self.final_answer,
            status=self.status,
            time_elapsed=time.time() - self.start_time if self.start_time else 0,
            steps=self.current_step,
        )

    async def run(self) -> AgentTrajectoryOutput:
        """Run the agent loop until completion or max steps."""
        with logger.contextualize(persona=self.persona_id, model=self.model):
            try:
                logger.bind(message_type="configure").info(
                    f"Starting agent loop with model {self.model}"
                )
                await self._initialize_tools()

                self.start_time = time.time()
                self.status = AgentStatus.RUNNING

                for i in range(self.max_steps):
                    if self._finalized:
                        break
                    logger.bind(message_type="step").info(f"Starting step {i + 1}")
                    await self.step()

                if self._finalized:
                    logger.info(f"Agent loop was finalized after {self.current_step} steps")
                    self.status = AgentStatus.COMPLETED
                else:
                    logger.error(f"Agent loop was not finalized after {self.max_steps} steps")
                    self.status = AgentStatus.FAILED

            except asyncio.CancelledError:
                logger.error("Agent run cancelled")
                self.status = AgentStatus.CANCELLED

            except Exception as e:
                logger.error(f"Error running agent: {e!r}")
                self.status = AgentStatus.ERROR

            return self._build_output()


async def run(config: AgentConfig) -> AgentTrajectoryOutput:
    """Entry point for the loop agent."""
    agent = LoopAgent(config)
    return await agent.run()
