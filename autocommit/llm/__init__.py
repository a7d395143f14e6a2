"""LLM access for autocommit.

The provider is built from an explicit Settings object; see autocommit.config.
"""

from typing import TypeVar

from pydantic import BaseModel

from autocommit.config import Settings
from autocommit.llm.base import BaseLLMProvider, LLMResult
from autocommit.llm.exceptions import JSONParseError, LLMError, MissingAPIKeyError
from autocommit.llm.parsing import parse_json_response, validate_response

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_provider(settings: Settings) -> BaseLLMProvider:
    """Get an LLM provider instance for the given settings."""
    from autocommit.llm.openai_provider import OpenAIProvider

    return OpenAIProvider(settings)


def request_plan(
    provider: BaseLLMProvider,
    system_prompt: str,
    user_prompt: str,
    model_cls: type[ModelT],
) -> tuple[ModelT, LLMResult]:
    """Ask the model for a plan and validate it.

    Args:
        provider: The LLM provider.
        system_prompt: System instructions.
        user_prompt: User prompt with the git context.
        model_cls: Pydantic schema of the expected plan.

    Returns:
        Tuple of (validated plan, raw LLM result).

    Raises:
        MissingAPIKeyError: If the API key is not set.
        JSONParseError: If the response cannot be parsed or validated.
        LLMError: For other LLM-related errors.
    """
    result = provider.complete(system_prompt, user_prompt)
    parsed = parse_json_response(result.raw_response)
    return validate_response(parsed, model_cls), result


__all__ = [
    "BaseLLMProvider",
    "LLMError",
    "MissingAPIKeyError",
    "JSONParseError",
    "LLMResult",
    "get_provider",
    "request_plan",
    "parse_json_response",
    "validate_response",
]
