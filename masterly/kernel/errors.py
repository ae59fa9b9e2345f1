"""
Error taxonomy for the mastery and recommendation engines.

Engines raise these; main.py maps them to HTTP responses via `status_code`.
"""

from typing import Optional


class EngineError(Exception):
    """Base class for expected, user-facing engine failures."""

    status_code: int = 500
    code: str = "engine_error"

    def __init__(self, message: str, *, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code


class NotFoundError(EngineError):
    """Goal or start concept (or a progress record) is absent."""

    status_code = 404
    code = "not_found"


class NoPathError(EngineError):
    """No route exists from the start (or any root) to the goal."""

    status_code = 404
    code = "no_path"


class ValidationError(EngineError):
    """Missing or out-of-range request parameters."""

    status_code = 400
    code = "validation_error"


class ConcurrencyConflictError(EngineError):
    """Optimistic retries exhausted for a mastery record update."""

    status_code = 409
    code = "concurrency_conflict"
