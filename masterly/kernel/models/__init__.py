"""
Kernel Data Models

SQLAlchemy models for the concept catalog and per-user mastery records.
"""

from masterly.kernel.models.base import Base, TimestampMixin, generate_uuid
from masterly.kernel.models.concept import Concept
from masterly.kernel.models.concept_progress import ConceptProgress, ProgressStatus

__all__ = [
    "Base",
    "TimestampMixin",
    "generate_uuid",
    "Concept",
    "ConceptProgress",
    "ProgressStatus",
]
