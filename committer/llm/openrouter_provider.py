"""OpenRouter provider implementation.

OpenRouter provides unified access to many models through a single API.
It uses an OpenAI-compatible API format.
"""

from typing import Optional

from openai import OpenAI, OpenAIError

from committer.config import API_KEY_ENV_VAR, DEFAULT_MODEL, MAX_TOKENS, TEMPERATURE
from committer.llm.base import BaseLLMProvider
from committer.llm.exceptions import ServiceError

# OpenRouter API base URL
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


class OpenRouterProvider(BaseLLMProvider):
    """OpenRouter completion service."""

    def __init__(self, model: Optional[str] = None):
        """Initialize the OpenRouter provider.

        Args:
            model: The model to use, as provider/model-name
                   (e.g., google/gemini-3-flash-preview).
        """
        self.model = model or DEFAULT_MODEL
        self.api_key_env_var = API_KEY_ENV_VAR
        self._client: Optional[OpenAI] = None

    def get_api_key(self) -> str:
        """Get the OpenRouter API key from environment or credentials file.

        Raises:
            MissingAPIKeyError: If OPENROUTER_API_KEY is not found.
        """
        return self._get_api_key_with_fallback(self.api_key_env_var, "OpenRouter")

    def _get_client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(
                api_key=self.get_api_key(),
                base_url=OPENROUTER_BASE_URL,
            )
        return self._client

    def complete(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """Send a prompt to OpenRouter and return the completion text.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            ServiceError: If the API call fails.
        """
        client = self._get_client()

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        try:
            response = client.chat.completions.create(
                model=self.model,
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
                messages=messages,
                extra_headers={
                    "HTTP-Referer": "https://github.com/committer",
                    "X-Title": "Committer",
                },
            )
        except OpenAIError as e:
            raise ServiceError(f"OpenRouter API call failed: {e}")

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
