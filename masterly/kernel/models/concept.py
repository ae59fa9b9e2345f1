"""
Concept catalog model.

Concepts are authored elsewhere; this service only reads them.
"""

from typing import List, Optional

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from masterly.kernel.models.base import Base, TimestampMixin


class Concept(Base, TimestampMixin):
    """
    A single learning concept.

    `prerequisites` holds concept ids (dependent -> prerequisite). Ids are not
    foreign keys: dangling references are tolerated and treated as unmastered.
    """

    __tablename__ = "concepts"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    prerequisites: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    # Catalog order; enumeration order (and therefore tie-breaking) follows it
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
