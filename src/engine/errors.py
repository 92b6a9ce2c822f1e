"""Error kinds raised by the session engine."""

from __future__ import annotations


class EngineError(Exception):
    """Base class for engine errors."""
    code = "ENGINE_ERROR"


class ValidationError(EngineError):
    """Setup or eligibility failure. Blocks game start, never fatal."""
    code = "VALIDATION_ERROR"

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors if errors is not None else [message]


class InvalidOperation(EngineError):
    """A command was rejected. The session is left untouched."""
    code = "INVALID_OPERATION"


class PersistenceError(EngineError):
    """The result snapshot could not be handed to the history recorder."""
    code = "PERSISTENCE_ERROR"

    def __init__(self, message: str, session_id: str | None = None):
        super().__init__(message)
        self.session_id = session_id
