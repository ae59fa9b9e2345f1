"""Unit tests for MasteryStore: monotonic merge, thresholds, concurrency, propagation."""

import pytest

from conftest import Engine, make_record
from masterly.engines.mastery.mastery_store import MASTERY_THRESHOLD, MasteryStore
from masterly.engines.mastery.unlock_propagator import UnlockPropagator
from masterly.kernel.errors import ConcurrencyConflictError, ValidationError
from masterly.kernel.models.concept_progress import ProgressStatus
from masterly.kernel.repositories import InMemoryMasteryRepository


class RacingMasteryRepository(InMemoryMasteryRepository):
    """Simulates another writer landing a score just before each of our saves."""

    def __init__(self, races: int, racing_score: float):
        super().__init__()
        self.races = races
        self.racing_score = racing_score
        self.save_calls = 0

    async def save_if_version(self, record, expected_version):
        self.save_calls += 1
        if self.races > 0:
            self.races -= 1
            current = await self.get(record.user_id, record.concept_id)
            current.mastery_score = max(current.mastery_score, self.racing_score)
            await super().save_if_version(current, expected_version)
        return await super().save_if_version(record, expected_version)


class FailingPropagator(UnlockPropagator):
    async def unlock_reachable(self, user_id, course_id=None):
        raise RuntimeError("catalog unavailable")


class TestMonotonicMastery:
    """The stored score only ever increases."""

    @pytest.mark.asyncio
    async def test_running_maximum(self, chain_engine, user_id):
        stored = []
        for score in [60, 40, 90, 70]:
            result = await chain_engine.store.update_mastery(user_id, "A", score)
            stored.append(result.record.mastery_score)
        assert stored == [60, 60, 90, 90]

        record = await chain_engine.store.get_record(user_id, "A")
        assert record.mastery_score == 90
        assert record.attempts == 4

    @pytest.mark.asyncio
    async def test_get_mastery_normalizes(self, chain_engine, user_id):
        assert await chain_engine.store.get_mastery(user_id, "A") == 0.0
        await chain_engine.store.update_mastery(user_id, "A", 45)
        assert await chain_engine.store.get_mastery(user_id, "A") == pytest.approx(0.45)
        assert await chain_engine.store.mastery_map(user_id) == {"A": pytest.approx(0.45)}


class TestMasteryThreshold:
    """Mastered at 75 and above, sticky afterwards."""

    def test_threshold_value(self):
        assert MASTERY_THRESHOLD == 75.0

    @pytest.mark.asyncio
    async def test_74_is_not_mastered(self, chain_engine, user_id):
        result = await chain_engine.store.update_mastery(user_id, "A", 74)
        assert result.mastered is False
        assert result.record.status == ProgressStatus.IN_PROGRESS
        assert result.record.mastered_at is None

    @pytest.mark.asyncio
    async def test_75_is_mastered(self, chain_engine, user_id):
        result = await chain_engine.store.update_mastery(user_id, "A", 75)
        assert result.mastered is True
        assert result.record.status == ProgressStatus.COMPLETED
        assert result.record.mastered_at is not None

    @pytest.mark.asyncio
    async def test_mastered_is_sticky_and_timestamp_kept(self, chain_engine, user_id):
        first = await chain_engine.store.update_mastery(user_id, "A", 80)
        second = await chain_engine.store.update_mastery(user_id, "A", 10)
        assert second.mastered is True
        assert second.record.mastered_at == first.record.mastered_at

    @pytest.mark.asyncio
    async def test_mastery_unlocks_dependents(self, chain_engine, user_id):
        result = await chain_engine.store.update_mastery(user_id, "A", 90)
        assert result.unlocked == ["A", "B"]
        assert await chain_engine.store.get_record(user_id, "B") is not None
        assert await chain_engine.store.get_record(user_id, "C") is None

    @pytest.mark.asyncio
    async def test_out_of_range_score_rejected(self, chain_engine, user_id):
        with pytest.raises(ValidationError):
            await chain_engine.store.update_mastery(user_id, "A", 101)
        with pytest.raises(ValidationError):
            await chain_engine.store.update_mastery(user_id, "A", -1)
        assert await chain_engine.store.get_record(user_id, "A") is None


class TestConcurrentUpdates:
    """Optimistic versioning never loses a higher concurrent score."""

    @pytest.mark.asyncio
    async def test_retry_keeps_concurrent_higher_score(self, chain_engine, user_id):
        repo = RacingMasteryRepository(races=1, racing_score=95)
        store = MasteryStore(repo, UnlockPropagator(chain_engine.concepts, repo))

        result = await store.update_mastery(user_id, "A", 60)

        assert result.record.mastery_score == 95
        assert result.mastered is True
        assert repo.save_calls == 2
        stored = await repo.get(user_id, "A")
        assert stored.mastery_score == 95
        assert stored.version == 3

    @pytest.mark.asyncio
    async def test_conflict_after_retries_exhausted(self, chain_engine, user_id):
        repo = RacingMasteryRepository(races=10, racing_score=50)
        store = MasteryStore(repo, UnlockPropagator(chain_engine.concepts, repo), max_retries=3)

        with pytest.raises(ConcurrencyConflictError) as exc:
            await store.update_mastery(user_id, "A", 60)
        assert exc.value.status_code == 409
        assert repo.save_calls == 3


class TestPropagationFailure:
    """A failing unlock pass does not undo the score write."""

    @pytest.mark.asyncio
    async def test_score_kept_when_propagation_fails(self, chain_engine, user_id):
        repo = InMemoryMasteryRepository([make_record(user_id, "A", 10)])
        store = MasteryStore(repo, FailingPropagator(chain_engine.concepts, repo))

        result = await store.update_mastery(user_id, "A", 85)

        assert result.mastered is True
        assert result.unlocked is None
        stored = await repo.get(user_id, "A")
        assert stored.mastery_score == 85
        assert stored.mastered is True


class TestEngineWiring:
    @pytest.mark.asyncio
    async def test_fresh_engine_has_no_records(self, chain_catalog, user_id):
        engine = Engine(chain_catalog)
        assert await engine.store.mastery_map(user_id) == {}
