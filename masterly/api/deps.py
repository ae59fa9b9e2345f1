"""
FastAPI dependencies for authentication, database sessions and engine services.
"""

import uuid
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from masterly.config import get_settings
from masterly.database import get_db
from masterly.engines.mastery.mastery_store import MasteryStore
from masterly.engines.mastery.progress_tracker import ProgressTracker
from masterly.engines.mastery.unlock_propagator import UnlockPropagator
from masterly.engines.pathing.recommendation_service import RecommendationService
from masterly.kernel.identity.jwt import verify_access_token
from masterly.kernel.repositories.sql import SqlConceptRepository, SqlMasteryRepository
from masterly.logging_config import user_id_var

# Security scheme
security = HTTPBearer(auto_error=False)

DbSession = Annotated[AsyncSession, Depends(get_db)]


class AuthenticatedUser(BaseModel):
    """Caller identity taken from a verified access token."""

    id: uuid.UUID
    role: str


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> AuthenticatedUser:
    """Get current authenticated user or raise 401."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_access_token(credentials.credentials)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = AuthenticatedUser(id=uuid.UUID(payload.sub), role=payload.role)
    user_id_var.set(str(user.id))
    return user


CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]


def get_mastery_store(db: DbSession) -> MasteryStore:
    concepts = SqlConceptRepository(db)
    mastery = SqlMasteryRepository(db)
    return MasteryStore(
        mastery,
        UnlockPropagator(concepts, mastery),
        max_retries=get_settings().mastery_update_max_retries,
    )


MasteryStoreDep = Annotated[MasteryStore, Depends(get_mastery_store)]


def get_progress_tracker(db: DbSession, store: MasteryStoreDep) -> ProgressTracker:
    return ProgressTracker(
        SqlConceptRepository(db),
        store,
        failure_reset_threshold=get_settings().quiz_failure_reset_threshold,
    )


def get_recommendation_service(db: DbSession, store: MasteryStoreDep) -> RecommendationService:
    return RecommendationService(SqlConceptRepository(db), store)


ProgressTrackerDep = Annotated[ProgressTracker, Depends(get_progress_tracker)]
RecommendationServiceDep = Annotated[RecommendationService, Depends(get_recommendation_service)]
