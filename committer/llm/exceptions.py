"""LLM-related exception classes.

Contains all exception classes for completion service operations:
- LLMError: Base exception for LLM-related errors
- MissingAPIKeyError: Raised when the API key is not set
- ServiceError: Raised when the service is unreachable or returns a non-success status
- MalformedResponseError: Raised when a response does not have the expected shape
- EmptyResultError: Raised when the service returns a blank commit message
"""


class LLMError(Exception):
    """Base exception for LLM-related errors."""

    pass


class MissingAPIKeyError(LLMError):
    """Raised when the required API key is not set."""

    pass


class ServiceError(LLMError):
    """Raised when the completion service cannot be reached or rejects the request."""

    pass


class MalformedResponseError(LLMError):
    """Raised when the completion service returns text of an unexpected shape."""

    pass


class EmptyResultError(LLMError):
    """Raised when the completion service returns a blank commit message."""

    pass
