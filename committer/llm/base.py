"""Base class and shared utilities for completion service providers."""

import os
from abc import ABC, abstractmethod
from typing import Optional

from committer.llm.exceptions import MissingAPIKeyError


class BaseLLMProvider(ABC):
    """Abstract text-completion service.

    Callers only rely on request/response and error propagation: a
    provider either returns the completion text or raises an LLMError.
    """

    model: str

    @abstractmethod
    def complete(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """Send a prompt and return the completion text.

        Args:
            prompt: The user prompt.
            system_prompt: Optional system prompt.

        Returns:
            The raw completion text (may be empty).

        Raises:
            MissingAPIKeyError: If the API key is not set.
            ServiceError: If the service is unreachable or returns an error status.
        """
        pass

    @abstractmethod
    def get_api_key(self) -> str:
        """Get the API key from environment or credentials file.

        Checks in order:
        1. Environment variable (including a repo-level .env file, if loaded)
        2. ~/.committer/credentials file

        Returns:
            The API key string.

        Raises:
            MissingAPIKeyError: If the API key is not found.
        """
        pass

    def _get_api_key_with_fallback(self, env_var_name: str, provider_name: str) -> str:
        """Helper to get API key with fallback to credentials file.

        Args:
            env_var_name: Environment variable name to check.
            provider_name: Human-readable provider name for error messages.

        Returns:
            The API key string.

        Raises:
            MissingAPIKeyError: If the API key is not found.
        """
        api_key = os.getenv(env_var_name)
        if api_key:
            return api_key

        from committer.global_config import get_credential

        api_key = get_credential(env_var_name)
        if api_key:
            return api_key

        raise MissingAPIKeyError(
            f"{provider_name} API key not found. Set it using:\n"
            f"  1. Environment variable: export {env_var_name}=your_key_here\n"
            f"  2. Run: committer config set-key\n"
            f"  3. Manually add to ~/.committer/credentials"
        )
