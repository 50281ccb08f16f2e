"""LLM utilities for agents using LiteLLM."""

from typing import Any

import litellm
from litellm import acompletion
from litellm.exceptions import (
    APIConnectionError,
    BadGatewayError,
    BadRequestError,
    ContextWindowExceededError,
    InternalServerError,
    RateLimitError,
    ServiceUnavailableError,
    Timeout,
)
from litellm.files.main import ModelResponse
from openai.types.chat.chat_completion_tool_param import ChatCompletionToolParam

from runner.agents.models import LitellmAnyMessage
from runner.utils.decorators import with_retry
from runner.utils.settings import get_settings

settings = get_settings()

# Configure LiteLLM proxy routing if configured
if settings.LITELLM_PROXY_API_BASE and settings.LITELLM_PROXY_API_KEY:
    litellm.use_litellm_proxy = True

# Providers report an exhausted context window in different words, some of them
# as a plain BadRequestError
CONTEXT_WINDOW_PATTERNS = (
    "token count exceeds",
    "context_length_exceeded",
    "context length exceeded",
    "maximum context length",
    "maximum number of tokens",
    "prompt is too long",
    "input too long",
)

NON_RETRIABLE_PATTERNS = (
    "tools are supported",
    "too many tools",
    "model not found",
    "does not exist",
    "invalid api key",
    "api key not valid",
    "authentication failed",
    "unauthorized",
)


def is_non_retriable(e: Exception) -> bool:
    """Errors that fail the same way on every attempt."""
    error_str = str(e).lower()
    return any(p in error_str for p in CONTEXT_WINDOW_PATTERNS + NON_RETRIABLE_PATTERNS)


@with_retry(
    max_retries=10,
    base_backoff=5,
    jitter=5,
    retry_on=(
        RateLimitError,
        Timeout,
        BadRequestError,
        ServiceUnavailableError,
        APIConnectionError,
        InternalServerError,
        BadGatewayError,
    ),
    skip_on=(ContextWindowExceededError,),
    skip_if=is_non_retriable,
)
async def generate_response(
    model: str,
    messages: list[LitellmAnyMessage],
    tools: list[ChatCompletionToolParam],
    llm_response_timeout: int,
    extra_args: dict[str, Any],
    persona_id: str | None = None,
) -> ModelResponse:
    """
    Generate a response from the LLM with retry logic.

    Args:
        model: The model identifier to use
        messages: The conversation messages
        tools: Available tools for the model to call
        llm_response_timeout: Timeout in seconds for the LLM response
        extra_args: Additional arguments to pass to the completion call
        persona_id: Persona running the conversation, used to tag proxied requests
    """
    kwargs: dict[str, Any] = {
        "model": model,
        "messages": messages,
        "timeout": llm_response_timeout,
        **extra_args,
    }
    if tools:
        kwargs["tools"] = tools

    if settings.LITELLM_PROXY_API_BASE and settings.LITELLM_PROXY_API_KEY:
        kwargs["api_base"] = settings.LITELLM_PROXY_API_BASE
        kwargs["api_key"] = settings.LITELLM_PROXY_API_KEY
        tags = ["service:xibo-agent"]
        if persona_id:
            tags.append(f"persona:{persona_id}")
        kwargs["extra_body"] = {"tags": tags}

    response = await acompletion(**kwargs)
    return ModelResponse.model_validate(response)
