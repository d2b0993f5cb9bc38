"""Models for progress and pronunciation data structures."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from wordbox.config import DEFAULT_EASE_FACTOR


class ProgressStatus(Enum):
    """Learning status of a word, promoted in this order only."""
    NEW = "new"
    LEARNING = "learning"
    LEARNED = "learned"


class PronunciationGrade(Enum):
    """Discrete grade of a pronunciation attempt."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    NEEDS_WORK = "needs-work"
    TRY_AGAIN = "try-again"


@dataclass(frozen=True)
class ProgressRecord:
    """Practice counters and review schedule of one word for one user."""
    next_review_at: datetime
    times_seen: int = 0
    times_correct: int = 0
    times_incorrect: int = 0
    status: ProgressStatus = ProgressStatus.NEW
    mastery_level: int = 0
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval_days: int = 1
    repetitions: int = 0
    last_reviewed_at: Optional[datetime] = None
    version: int = 0  # set by the store, bumped on every successful put


@dataclass(frozen=True)
class PronunciationResult:
    """Outcome of one pronunciation evaluation."""
    score: int
    grade: PronunciationGrade
    feedback: str
    emoji: str
    spoken: str
    target: str
    exact_similarity: int
    phonetic_similarity: int


@dataclass
class PronunciationSummary:
    """Aggregate of a pronunciation practice session."""
    attempts: int = 0
    average_score: int = 0
    grade_counts: Dict[PronunciationGrade, int] = field(
        default_factory=lambda: {grade: 0 for grade in PronunciationGrade}
    )
    best: Optional[PronunciationResult] = None
    worst: Optional[PronunciationResult] = None


@dataclass
class ProgressStats:
    """Aggregate review statistics over a learner's word list."""
    total: int = 0
    due_now: int = 0
    by_status: Dict[ProgressStatus, int] = field(
        default_factory=lambda: {status: 0 for status in ProgressStatus}
    )
    learned: int = 0
    average_accuracy: int = 0
    longest_streak: int = 0


@dataclass(frozen=True)
class QueueItem:
    """Entry of a study queue."""
    word_id: int
    progress: ProgressRecord
    is_new: bool
