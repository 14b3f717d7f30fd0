"""Shared agent runner for the advisors.

Every advisor talks to the same OpenAI chat model, named by
settings.advisory_model, and every call is bounded by
settings.llm_timeout_seconds. Any failure, timeout included, is re-raised as
AdvisorError so callers have a single exception type to fall back on.
"""

import asyncio
from typing import TypeVar, cast

from loguru import logger
from pydantic_ai import Agent
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider

from unifit.config.settings import settings
from unifit.core.errors import AdvisorError

OutputT = TypeVar("OutputT")


def get_model(model_name: str | None = None) -> OpenAIChatModel:
    """Build the advisory chat model.

    Args:
        model_name: Overrides settings.advisory_model

    Raises:
        ValueError: If no OpenAI API key is configured
    """
    if not settings.openai_api_key:
        raise ValueError("OPENAI_API_KEY is not set")
    return OpenAIChatModel(
        model_name or settings.advisory_model,
        provider=OpenAIProvider(api_key=settings.openai_api_key),
    )


async def run_agent(
    advisor: str,
    system_prompt: str,
    prompt: str,
    output_type: type[OutputT],
) -> OutputT:
    """Run a one-shot agent and return its typed output.

    Args:
        advisor: Advisor name for logs and errors
        system_prompt: Agent instructions
        prompt: User prompt
        output_type: Expected output type (a pydantic model or str)

    Returns:
        Agent output

    Raises:
        AdvisorError: If model setup, the call or output validation fails,
            or the call times out
    """
    logger.debug(
        f"advisor: Calling {advisor}",
        model=settings.advisory_model,
        timeout_seconds=settings.llm_timeout_seconds,
    )
    try:
        agent = Agent(
            model=get_model(),
            system_prompt=system_prompt,
            output_type=output_type,
        )
        result = await asyncio.wait_for(agent.run(prompt), timeout=settings.llm_timeout_seconds)
    except Exception as e:
        logger.warning(
            f"advisor: {advisor} failed",
            error_type=type(e).__name__,
            error_message=str(e),
        )
        raise AdvisorError(advisor, e) from e

    logger.debug(f"advisor: {advisor} succeeded")
    return cast(OutputT, result.output)
