"""
Repositories - catalog and mastery persistence behind one interface.
"""

from masterly.kernel.repositories.base import (
    ConceptNode,
    ConceptRepository,
    MasteryRecord,
    MasteryRepository,
)
from masterly.kernel.repositories.memory import (
    InMemoryConceptRepository,
    InMemoryMasteryRepository,
)
from masterly.kernel.repositories.sql import SqlConceptRepository, SqlMasteryRepository

__all__ = [
    "ConceptNode",
    "ConceptRepository",
    "MasteryRecord",
    "MasteryRepository",
    "InMemoryConceptRepository",
    "InMemoryMasteryRepository",
    "SqlConceptRepository",
    "SqlMasteryRepository",
]
