"""Errors raised by the OpenAI provider.

All of them derive from ``OpenAIError`` so callers can catch provider
failures in one place. ``code`` carries the API error code when the
Responses API reported one (for example ``rate_limit_exceeded``).
"""


class OpenAIError(Exception):
    """A request to the OpenAI API did not produce a usable response."""

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        code: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.code = code


class OpenAIAuthenticationError(OpenAIError):
    """The client could not be built, usually a missing or rejected API key."""


class OpenAIContentGenerationError(OpenAIError):
    """The stream failed, or the model reported a failed or errored response."""
