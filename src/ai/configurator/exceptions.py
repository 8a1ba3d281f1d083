"""Configurator exceptions."""


class ConfiguratorError(Exception):
    """Base exception for configurator errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SelectionValidationError(ConfiguratorError):
    """Raised when selectHouses arguments fail validation."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        super().__init__(message)
        self.errors = errors or []


class InvalidHistoryError(ConfiguratorError):
    """Raised when a caller-supplied conversation cannot be sent to the model."""

    pass


class SessionStateError(ConfiguratorError):
    """Raised when a session event arrives in the wrong state."""

    pass
