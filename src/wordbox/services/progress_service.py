"""Progress service for recording practice outcomes and planning reviews."""
import logging
from dataclasses import replace
from datetime import UTC, datetime
from typing import Callable, Iterable, List, Optional, Tuple

from wordbox.config import settings
from wordbox.exceptions import ProgressConflictError
from wordbox.models.progress_models import (
    ProgressRecord,
    ProgressStats,
    ProgressStatus,
    PronunciationResult,
    QueueItem,
)
from wordbox.monitoring import (
    practice_outcomes,
    progress_conflicts,
    pronunciation_evaluations,
    words_learned,
)
from wordbox.services.progress_store import ProgressStore
from wordbox.services.pronunciation_service import evaluate_pronunciation, is_passing
from wordbox.services.similarity import round_half_up
from wordbox.services.srs_scheduler import SpacedRepetitionScheduler

logger = logging.getLogger(__name__)

STATUS_ORDER = {
    ProgressStatus.NEW: 0,
    ProgressStatus.LEARNING: 1,
    ProgressStatus.LEARNED: 2,
}
NEVER_REVIEWED = datetime.min.replace(tzinfo=UTC)


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class ProgressService:
    """Service for applying practice outcomes and querying review state."""

    def __init__(
        self,
        store: ProgressStore,
        clock: Callable[[], datetime] = utc_now,
        scheduler: Optional[SpacedRepetitionScheduler] = None,
        max_retries: Optional[int] = None,
    ):
        """Initialize the service with a progress store and a clock."""
        self.store = store
        self.clock = clock
        self.scheduler = scheduler or SpacedRepetitionScheduler()
        self.max_retries = settings.progress.max_update_retries if max_retries is None else max_retries

    def get_progress(self, user_id: int, word_id: int) -> ProgressRecord:
        """Get the stored record, or a fresh one for a word never practiced."""
        record = self.store.get(user_id, word_id)
        if record is None:
            return self.scheduler.new_record(self.clock())
        return record

    def apply_practice_outcome(self, user_id: int, word_id: int, is_correct: bool) -> ProgressRecord:
        """Record one practice attempt and return the saved progress."""
        attempts = self.max_retries + 1
        for attempt in range(1, attempts + 1):
            now = self.clock()
            current = self.store.get(user_id, word_id) or self.scheduler.new_record(now)
            updated = self.scheduler.update(current, is_correct, now)

            if self.store.put(user_id, word_id, updated):
                practice_outcomes.labels(result="correct" if is_correct else "incorrect").inc()
                if updated.status == ProgressStatus.LEARNED and current.status != ProgressStatus.LEARNED:
                    words_learned.inc()
                    logger.info(f"User {user_id} learned word {word_id}")
                logger.debug(
                    f"User {user_id}, word {word_id}: correct={is_correct}, "
                    f"interval={updated.interval_days}d, ease={updated.ease_factor}"
                )
                return replace(updated, version=updated.version + 1)

            progress_conflicts.inc()
            logger.warning(
                f"Concurrent update of word {word_id} for user {user_id} "
                f"(attempt {attempt}/{attempts})"
            )

        raise ProgressConflictError(user_id, word_id, attempts)

    def practice_pronunciation(
        self, user_id: int, word_id: int, spoken: str, target: str
    ) -> Tuple[PronunciationResult, ProgressRecord]:
        """Evaluate a spoken attempt and record it as a practice outcome."""
        result = evaluate_pronunciation(spoken, target)
        pronunciation_evaluations.labels(grade=result.grade.value).inc()
        record = self.apply_practice_outcome(user_id, word_id, is_passing(result))
        return result, record

    def get_due_words(self, user_id: int, word_ids: Iterable[int]) -> List[QueueItem]:
        """Get the words of a list that are due for review now."""
        now = self.clock()
        records = self.store.list_for_user(user_id)
        due = []
        for word_id in word_ids:
            record = records.get(word_id)
            if record is None:
                due.append(QueueItem(word_id, self.scheduler.new_record(now), is_new=True))
            elif self.scheduler.is_due(record, now):
                due.append(QueueItem(word_id, record, is_new=False))
        return due

    def get_study_queue(
        self, user_id: int, word_ids: Iterable[int], limit: Optional[int] = None
    ) -> List[QueueItem]:
        """Get due words ordered by status, then by the oldest review first."""
        if limit is None:
            limit = settings.progress.study_queue_limit
        due = self.get_due_words(user_id, word_ids)
        due.sort(
            key=lambda item: (
                STATUS_ORDER[item.progress.status],
                item.progress.last_reviewed_at or NEVER_REVIEWED,
            )
        )
        return due[:limit]

    def get_stats(self, user_id: int, word_ids: Iterable[int]) -> ProgressStats:
        """Get review statistics over a user's word list."""
        now = self.clock()
        records = self.store.list_for_user(user_id)
        stats = ProgressStats()
        total_seen = 0
        total_correct = 0

        for word_id in word_ids:
            stats.total += 1
            record = records.get(word_id)
            if record is None:
                stats.by_status[ProgressStatus.NEW] += 1
                stats.due_now += 1
                continue

            stats.by_status[record.status] += 1
            if self.scheduler.is_due(record, now):
                stats.due_now += 1
            total_seen += record.times_seen
            total_correct += record.times_correct
            stats.longest_streak = max(stats.longest_streak, record.repetitions)

        stats.learned = stats.by_status[ProgressStatus.LEARNED]
        if total_seen:
            stats.average_accuracy = round_half_up(total_correct / total_seen * 100)
        return stats

    def reset_word(self, user_id: int, word_id: int) -> bool:
        """Forget all progress on a word."""
        deleted = self.store.delete(user_id, word_id)
        if deleted:
            logger.info(f"Reset progress of word {word_id} for user {user_id}")
        return deleted

    def reset_all(self, user_id: int) -> int:
        """Forget all progress of a user."""
        count = self.store.delete_for_user(user_id)
        logger.info(f"Reset progress of {count} words for user {user_id}")
        return count
