"""
Read-only concept catalog endpoints.
"""

from typing import List

from fastapi import APIRouter

from masterly.api.deps import CurrentUser, DbSession
from masterly.kernel.repositories.sql import SqlConceptRepository
from masterly.schemas.concept import ConceptSchema

router = APIRouter()


@router.get("", response_model=List[ConceptSchema])
async def list_concepts(user: CurrentUser, db: DbSession):
    """List the concept catalog in catalog order."""
    concepts = await SqlConceptRepository(db).list_concepts()
    return [ConceptSchema.model_validate(c) for c in concepts]
