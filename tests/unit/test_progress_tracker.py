"""Unit tests for ProgressTracker learning steps, quizzes and resets."""

import pytest

from conftest import Engine, make_record
from masterly.engines.mastery.progress_tracker import ProgressAction, score_from_answers
from masterly.kernel.errors import NotFoundError, ValidationError
from masterly.kernel.models.concept_progress import ProgressStatus


class TestScoreFromAnswers:
    def test_percentage_is_rounded(self):
        assert score_from_answers(2, 3) == 67
        assert score_from_answers(3, 4) == 75

    def test_empty_quiz_scores_zero(self):
        assert score_from_answers(0, 0) == 0

    def test_more_correct_than_questions_rejected(self):
        with pytest.raises(ValidationError):
            score_from_answers(5, 4)

    def test_correct_answers_on_empty_quiz_rejected(self):
        with pytest.raises(ValidationError):
            score_from_answers(1, 0)

    def test_negative_correct_answers_rejected(self):
        with pytest.raises(ValidationError):
            score_from_answers(-1, 4)


class TestLearningSteps:
    """Description and video steps."""

    @pytest.mark.asyncio
    async def test_description_read_starts_progress(self, chain_engine, user_id):
        record = await chain_engine.tracker.mark_description_read(user_id, "A")
        assert record.description_read is True
        assert record.status == ProgressStatus.IN_PROGRESS

    @pytest.mark.asyncio
    async def test_video_time_accumulates(self, chain_engine, user_id):
        await chain_engine.tracker.mark_video_watched(user_id, "A", time_spent=30)
        record = await chain_engine.tracker.mark_video_watched(user_id, "A", time_spent=45)
        assert record.video_watched is True
        assert record.time_spent == 75

    @pytest.mark.asyncio
    async def test_unknown_concept(self, chain_engine, user_id):
        with pytest.raises(NotFoundError):
            await chain_engine.tracker.mark_description_read(user_id, "Z")

    @pytest.mark.asyncio
    async def test_apply_action_dispatch(self, chain_engine, user_id):
        tracker = chain_engine.tracker
        record = await tracker.apply_action(user_id, "A", ProgressAction.MARK_VIDEO_WATCHED, time_spent=5)
        assert record.video_watched is True

        record = await tracker.apply_action(user_id, "A", ProgressAction.QUIZ_COMPLETED, score=80)
        assert record.mastered is True

        with pytest.raises(ValidationError):
            await tracker.apply_action(user_id, "A", ProgressAction.QUIZ_COMPLETED)


class TestQuizzes:
    """Quiz outcomes, failure counting and the repeated-failure reset."""

    @pytest.mark.asyncio
    async def test_passing_quiz_masters_and_unlocks(self, chain_engine, user_id):
        outcome = await chain_engine.tracker.submit_quiz(user_id, "A", 8, 10)
        assert outcome.score == 80
        assert outcome.passed is True
        assert outcome.mastered is True
        assert outcome.record.quiz_passed is True
        assert outcome.record.last_quiz_attempt is not None
        assert outcome.unlocked == ["A", "B"]

    @pytest.mark.asyncio
    async def test_failures_reset_gate_flags_after_threshold(self, chain_engine, user_id):
        tracker = chain_engine.tracker
        await tracker.mark_description_read(user_id, "A")
        await tracker.mark_video_watched(user_id, "A")

        first = await tracker.record_quiz(user_id, "A", 40)
        second = await tracker.record_quiz(user_id, "A", 50)
        assert first.reset_applied is False
        assert second.record.failed_attempts == 2
        assert second.record.description_read is True

        third = await tracker.record_quiz(user_id, "A", 30)
        assert third.reset_applied is True
        record = third.record
        assert record.failed_attempts == 0
        assert record.description_read is False
        assert record.video_watched is False
        assert record.quiz_passed is False
        assert record.status == ProgressStatus.IN_PROGRESS
        # History survives the reset
        assert record.mastery_score == 50
        assert record.attempts == 3

    @pytest.mark.asyncio
    async def test_pass_clears_failure_count(self, chain_engine, user_id):
        await chain_engine.tracker.record_quiz(user_id, "A", 40)
        outcome = await chain_engine.tracker.record_quiz(user_id, "A", 90)
        assert outcome.record.failed_attempts == 0

    @pytest.mark.asyncio
    async def test_failure_reset_keeps_mastery(self, chain_catalog, user_id):
        engine = Engine(
            chain_catalog,
            [make_record(user_id, "A", 80, mastered=True, status=ProgressStatus.COMPLETED, failed_attempts=2)],
        )
        outcome = await engine.tracker.record_quiz(user_id, "A", 20)
        assert outcome.reset_applied is True
        assert outcome.mastered is True
        assert outcome.record.status == ProgressStatus.COMPLETED
        assert outcome.record.mastery_score == 80


class TestReset:
    """Explicit reset of the learning steps."""

    @pytest.mark.asyncio
    async def test_reset_without_record(self, chain_engine, user_id):
        with pytest.raises(NotFoundError):
            await chain_engine.tracker.reset_progress(user_id, "A")

    @pytest.mark.asyncio
    async def test_reset_unmastered(self, chain_engine, user_id):
        tracker = chain_engine.tracker
        await tracker.mark_description_read(user_id, "A")
        await tracker.record_quiz(user_id, "A", 60)

        record = await tracker.reset_progress(user_id, "A")
        assert record.description_read is False
        assert record.status == ProgressStatus.NOT_STARTED
        assert record.mastery_score == 60
        assert record.attempts == 1

    @pytest.mark.asyncio
    async def test_reset_mastered_stays_completed(self, chain_engine, user_id):
        await chain_engine.tracker.record_quiz(user_id, "A", 100)
        record = await chain_engine.tracker.reset_progress(user_id, "A")
        assert record.mastered is True
        assert record.status == ProgressStatus.COMPLETED
        assert record.quiz_passed is False


class TestProgressViews:
    """Read-side views of a user's progress."""

    @pytest.mark.asyncio
    async def test_untouched_concept_has_zero_defaults(self, chain_engine, user_id):
        view = await chain_engine.tracker.get_progress(user_id, "B")
        assert view.record.mastery_score == 0
        assert view.record.status == ProgressStatus.NOT_STARTED
        assert view.can_attempt is False

    @pytest.mark.asyncio
    async def test_can_attempt_after_prerequisite_progress(self, chain_engine, user_id):
        await chain_engine.store.update_mastery(user_id, "A", 70)
        view = await chain_engine.tracker.get_progress(user_id, "B")
        assert view.can_attempt is True

    @pytest.mark.asyncio
    async def test_list_progress_unlocks_first(self, chain_catalog, user_id):
        engine = Engine(chain_catalog, [make_record(user_id, "A", 90, mastered=True)])
        entries = await engine.tracker.list_progress(user_id)
        assert [(e.record.concept_id, e.locked) for e in entries] == [("A", False), ("B", False)]

    @pytest.mark.asyncio
    async def test_unlocked_concepts_has_no_side_effects(self, chain_catalog, user_id):
        engine = Engine(chain_catalog, [make_record(user_id, "A", 90, mastered=True)])
        assert await engine.tracker.unlocked_concepts(user_id) == ["A", "B"]
        assert await engine.store.get_record(user_id, "B") is None
