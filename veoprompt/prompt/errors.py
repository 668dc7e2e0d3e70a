class PromptGenerationError(Exception):
    """Base class; ``str(err)`` is the single message shown to the user."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(PromptGenerationError):
    status_code = 500


class InputError(PromptGenerationError):
    status_code = 400


class TransportError(PromptGenerationError):
    status_code = 502


class SchemaViolationError(PromptGenerationError):
    status_code = 502


class UnknownError(PromptGenerationError):
    status_code = 500
