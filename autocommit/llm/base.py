"""Base classes shared by LLM providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class LLMResult:
    """Result from an LLM call, including token usage."""

    raw_response: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers."""

    model: str

    @abstractmethod
    def complete(self, system_prompt: str, user_prompt: str) -> LLMResult:
        """Send one system + user prompt pair and return the raw reply.

        Args:
            system_prompt: Instructions for the model.
            user_prompt: The task, including the git context.

        Returns:
            An LLMResult with the raw response text and metadata.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            LLMError: For other LLM-related errors.
        """
        pass
