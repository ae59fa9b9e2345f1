"""
Pydantic schemas for the read-only concept catalog.
"""

from typing import List, Optional

from masterly.schemas.common import CamelModel


class ConceptSchema(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    prerequisites: List[str] = []
