"""Spaced repetition scheduling for practiced words.

A simplified two-tier SM-2 variant: the first two correct answers in a row
schedule fixed intervals, later ones grow the interval by the ease factor.
A miss restarts the streak and makes the word slightly harder.
"""
import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

from wordbox.config import SchedulerSettings, settings
from wordbox.models.progress_models import ProgressRecord, ProgressStatus
from wordbox.services.similarity import round_half_up

logger = logging.getLogger(__name__)


class SpacedRepetitionScheduler:
    """Computes the next state of a progress record after a practice attempt."""

    def __init__(self, scheduler_settings: Optional[SchedulerSettings] = None):
        """Initialize the scheduler with spaced repetition settings."""
        self.settings = scheduler_settings or settings.scheduler

    def new_record(self, now: datetime) -> ProgressRecord:
        """Create a zeroed record for a word entering the learner's list."""
        return ProgressRecord(
            next_review_at=now,
            ease_factor=self.settings.default_ease_factor,
        )

    def update(self, record: ProgressRecord, is_correct: bool, now: datetime) -> ProgressRecord:
        """Return the record that follows record after one attempt at time now."""
        times_seen = record.times_seen + 1
        times_correct = record.times_correct + (1 if is_correct else 0)
        times_incorrect = record.times_incorrect + (0 if is_correct else 1)

        status = self._next_status(record.status, times_seen, times_correct)
        mastery_level = min(100, max(0, 100 * times_correct // max(1, times_seen)))

        if is_correct:
            repetitions = record.repetitions + 1
            ease_factor = record.ease_factor
            if repetitions == 1:
                interval_days = self.settings.first_interval_days
            elif repetitions == 2:
                interval_days = self.settings.second_interval_days
            else:
                interval_days = round_half_up(record.interval_days * ease_factor)
        else:
            repetitions = 0
            interval_days = self.settings.first_interval_days
            ease_factor = max(
                self.settings.min_ease_factor,
                round(record.ease_factor - self.settings.ease_penalty, 6),
            )
        interval_days = max(1, interval_days)

        if status != record.status:
            logger.debug(f"Status promoted from {record.status.value} to {status.value}")

        return replace(
            record,
            times_seen=times_seen,
            times_correct=times_correct,
            times_incorrect=times_incorrect,
            status=status,
            mastery_level=mastery_level,
            ease_factor=ease_factor,
            interval_days=interval_days,
            repetitions=repetitions,
            next_review_at=now + timedelta(days=interval_days),
            last_reviewed_at=now,
        )

    def _next_status(
        self, current: ProgressStatus, times_seen: int, times_correct: int
    ) -> ProgressStatus:
        # Learned is sticky: later misses never demote a word
        if current == ProgressStatus.LEARNED or times_correct >= self.settings.learned_threshold:
            return ProgressStatus.LEARNED
        if times_seen >= 1:
            return ProgressStatus.LEARNING
        return ProgressStatus.NEW

    @staticmethod
    def is_due(record: ProgressRecord, now: datetime) -> bool:
        """Check if the word should be reviewed at time now."""
        return record.next_review_at <= now


def update_progress(record: ProgressRecord, is_correct: bool, now: datetime) -> ProgressRecord:
    """Apply one practice outcome with the configured scheduler."""
    return SpacedRepetitionScheduler().update(record, is_correct, now)
