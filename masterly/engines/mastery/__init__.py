"""
Mastery Engine - per-user concept mastery and unlocking.

- MasteryStore: monotonic score merge (max), attempts, mastery at 75/100,
  optimistic-concurrency writes
- UnlockPropagator: concepts whose prerequisites are all mastered, with
  lazily created progress records
- ProgressTracker: learning steps, quiz outcomes, resets
"""

from masterly.engines.mastery.mastery_store import (
    MASTERY_THRESHOLD,
    MasteryStore,
    MasteryUpdateResult,
)
from masterly.engines.mastery.progress_tracker import (
    ConceptProgressView,
    ProgressAction,
    ProgressEntry,
    ProgressTracker,
    QuizOutcome,
)
from masterly.engines.mastery.unlock_propagator import UnlockPropagator, UnlockResult

__all__ = [
    "MASTERY_THRESHOLD",
    "MasteryStore",
    "MasteryUpdateResult",
    "ConceptProgressView",
    "ProgressAction",
    "ProgressEntry",
    "ProgressTracker",
    "QuizOutcome",
    "UnlockPropagator",
    "UnlockResult",
]
