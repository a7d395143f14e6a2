"""OpenAI-compatible chat completions provider."""

from openai import OpenAI

from autocommit.config import API_KEY_ENV_VAR, Settings
from autocommit.global_config import get_credentials_file_path
from autocommit.llm.base import BaseLLMProvider, LLMResult
from autocommit.llm.exceptions import LLMError, MissingAPIKeyError


class OpenAIProvider(BaseLLMProvider):
    """Provider for OpenAI and any endpoint speaking the same API."""

    def __init__(self, settings: Settings):
        """Initialize the provider.

        Args:
            settings: Resolved settings (key, endpoint, model, limits).
        """
        self.settings = settings
        self.model = settings.model

    def get_api_key(self) -> str:
        """Get the API key from the resolved settings.

        Raises:
            MissingAPIKeyError: If no key was found.
        """
        if not self.settings.api_key:
            raise MissingAPIKeyError(
                f"OpenAI API key not found. Set it using:\n"
                f"  1. Environment variable: export {API_KEY_ENV_VAR}=your_key_here\n"
                f"  2. A .env file in the repository root\n"
                f"  3. {API_KEY_ENV_VAR}=your_key_here in {get_credentials_file_path()}"
            )
        return self.settings.api_key

    def complete(self, system_prompt: str, user_prompt: str) -> LLMResult:
        """Call the chat completions endpoint.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            LLMError: If the API call fails.
        """
        api_key = self.get_api_key()

        client = OpenAI(api_key=api_key, base_url=self.settings.base_url)

        try:
            response = client.chat.completions.create(
                model=self.model,
                max_tokens=self.settings.max_tokens,
                temperature=self.settings.temperature,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )

            raw_response = response.choices[0].message.content or ""

            input_tokens = response.usage.prompt_tokens if response.usage else 0
            output_tokens = response.usage.completion_tokens if response.usage else 0

        except Exception as e:
            raise LLMError(f"OpenAI API call failed: {e}")

        return LLMResult(
            raw_response=raw_response,
            model=self.model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )
