"""
Command-line entry point for running an agent persona.
"""

import argparse
import asyncio
import json
import sys

from loguru import logger

from runner.agents.loop_agent import run as loop_agent_run
from runner.agents.models import AgentStatus, AgentTrajectoryOutput, PersonaIds
from runner.agents.registry import build_agent_config
from runner.utils.logging import setup_logger, teardown_logger
from runner.utils.settings import get_settings


async def main(
    persona_id: str,
    prompt: str,
    model: str | None = None,
    max_steps: int = 50,
) -> AgentTrajectoryOutput:
    """
    Run one persona on a prompt.

    Args:
        persona_id: The persona to run (see PersonaIds)
        prompt: The user request
        model: LiteLLM model id overriding the persona and runner defaults
        max_steps: Maximum number of LLM calls before stopping

    Returns:
        AgentTrajectoryOutput with status, messages and the final answer
    """
    settings = get_settings()
    config = build_agent_config(persona_id, prompt, model=model, max_steps=max_steps)

    logger.info(f"Running persona {config.persona_id} with model {config.model}")
    try:
        async with asyncio.timeout(settings.AGENT_TIMEOUT_SECONDS):
            output = await loop_agent_run(config)
    except TimeoutError:
        logger.error(f"Agent timed out after {settings.AGENT_TIMEOUT_SECONDS} seconds")
        output = AgentTrajectoryOutput(
            persona_id=config.persona_id,
            messages=[],
            status=AgentStatus.CANCELLED,
            time_elapsed=float(settings.AGENT_TIMEOUT_SECONDS),
        )

    logger.info(f"Agent run finished with status {output.status}")
    return output


async def _run_cli(args: argparse.Namespace) -> AgentTrajectoryOutput:
    try:
        return await main(args.persona, args.prompt, model=args.model, max_steps=args.max_steps)
    finally:
        await teardown_logger()


def cli() -> None:
    parser = argparse.ArgumentParser(description="Run a Xibo agent persona")
    parser.add_argument("--persona", choices=[p.value for p in PersonaIds], required=True)
    parser.add_argument("--prompt", type=str, required=True, help="User request for the agent")
    parser.add_argument("--model", type=str, help="LiteLLM model id (optional)")
    parser.add_argument("--max-steps", type=int, default=50)
    parser.add_argument("--output", type=str, help="Path to save the trajectory JSON")
    args = parser.parse_args()

    setup_logger()
    result = asyncio.run(_run_cli(args))

    if args.output:
        with open(args.output, "w") as f:
            f.write(result.model_dump_json(indent=2))
    else:
        print(result.final_answer or json.dumps({"status": result.status.value}))

    if result.status != AgentStatus.COMPLETED:
        sys.exit(1)


if __name__ == "__main__":
    cli()
