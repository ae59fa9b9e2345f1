"""
Pytest fixtures for Masterly tests.
"""

import uuid
from typing import Iterable, List, Sequence, Tuple

import pytest

from masterly.engines.mastery.mastery_store import MasteryStore
from masterly.engines.mastery.progress_tracker import ProgressTracker
from masterly.engines.mastery.unlock_propagator import UnlockPropagator
from masterly.engines.pathing.recommendation_service import RecommendationService
from masterly.kernel.identity.jwt import JWTManager
from masterly.kernel.repositories import (
    ConceptNode,
    InMemoryConceptRepository,
    InMemoryMasteryRepository,
    MasteryRecord,
)


def make_catalog(entries: Iterable[Tuple[str, Sequence[str]]]) -> List[ConceptNode]:
    """Build catalog nodes from (id, prerequisites) pairs."""
    return [
        ConceptNode(id=concept_id, title=f"Concept {concept_id}", prerequisites=list(prereqs))
        for concept_id, prereqs in entries
    ]


def make_record(user_id: uuid.UUID, concept_id: str, score: float = 0.0, **fields) -> MasteryRecord:
    """A stored record with the given 0-100 score."""
    return MasteryRecord(user_id=user_id, concept_id=concept_id, mastery_score=score, **fields)


class Engine:
    """In-memory wiring of repositories, store, tracker and recommender."""

    def __init__(self, catalog: List[ConceptNode], records: Iterable[MasteryRecord] = ()):
        self.concepts = InMemoryConceptRepository(catalog)
        self.mastery = InMemoryMasteryRepository(records)
        self.propagator = UnlockPropagator(self.concepts, self.mastery)
        self.store = MasteryStore(self.mastery, self.propagator, max_retries=5)
        self.tracker = ProgressTracker(self.concepts, self.store, failure_reset_threshold=3)
        self.recommender = RecommendationService(self.concepts, self.store)


@pytest.fixture
def user_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def chain_catalog() -> List[ConceptNode]:
    """A -> B -> C."""
    return make_catalog([("A", []), ("B", ["A"]), ("C", ["B"])])


@pytest.fixture
def diamond_catalog() -> List[ConceptNode]:
    """A -> B -> D and A -> C -> D."""
    return make_catalog([("A", []), ("B", ["A"]), ("C", ["A"]), ("D", ["B", "C"])])


@pytest.fixture
def chain_engine(chain_catalog) -> Engine:
    return Engine(chain_catalog)


@pytest.fixture
def jwt_manager() -> JWTManager:
    """Create a JWT manager for tests."""
    return JWTManager(
        secret_key="test-secret-key-for-testing-only",
        algorithm="HS256",
        access_token_expire_minutes=30,
    )
