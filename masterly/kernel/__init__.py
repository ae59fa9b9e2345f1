"""
Kernel Layer

Foundational pieces shared by the engines and the API:
- Data models (concept catalog, concept progress)
- Repositories (SQL and in-memory stores behind one interface)
- Identity (bearer token verification)
- Error taxonomy
"""

from masterly.kernel.errors import (
    ConcurrencyConflictError,
    EngineError,
    NoPathError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "EngineError",
    "NotFoundError",
    "NoPathError",
    "ValidationError",
    "ConcurrencyConflictError",
]
