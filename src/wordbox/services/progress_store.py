"""Storage of per user-word progress records."""
import logging
import threading
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any, Dict, Optional, Protocol, Tuple

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from wordbox.models.models import WordProgress
from wordbox.models.progress_models import ProgressRecord, ProgressStatus
from wordbox.monitoring import store_errors, store_operations

logger = logging.getLogger(__name__)


class ProgressStore(Protocol):
    """Storage contract used by the progress service.

    put is a compare-and-set: it succeeds only when record.version still
    matches the stored version (0 for a record that does not exist yet).
    """

    def get(self, user_id: int, word_id: int) -> Optional[ProgressRecord]: ...

    def put(self, user_id: int, word_id: int, record: ProgressRecord) -> bool: ...

    def list_for_user(self, user_id: int) -> Dict[int, ProgressRecord]: ...

    def delete(self, user_id: int, word_id: int) -> bool: ...

    def delete_for_user(self, user_id: int) -> int: ...


class InMemoryProgressStore:
    """Thread-safe dictionary backed progress store."""

    def __init__(self) -> None:
        self._records: Dict[Tuple[int, int], ProgressRecord] = {}
        self._lock = threading.Lock()

    def get(self, user_id: int, word_id: int) -> Optional[ProgressRecord]:
        with self._lock:
            return self._records.get((user_id, word_id))

    def put(self, user_id: int, word_id: int, record: ProgressRecord) -> bool:
        key = (user_id, word_id)
        with self._lock:
            current = self._records.get(key)
            expected = current.version if current else 0
            if record.version != expected:
                logger.debug(f"Version conflict for user {user_id}, word {word_id}")
                return False
            self._records[key] = replace(record, version=expected + 1)
            return True

    def list_for_user(self, user_id: int) -> Dict[int, ProgressRecord]:
        with self._lock:
            return {
                word_id: record
                for (owner_id, word_id), record in self._records.items()
                if owner_id == user_id
            }

    def delete(self, user_id: int, word_id: int) -> bool:
        with self._lock:
            return self._records.pop((user_id, word_id), None) is not None

    def delete_for_user(self, user_id: int) -> int:
        with self._lock:
            keys = [key for key in self._records if key[0] == user_id]
            for key in keys:
                del self._records[key]
            return len(keys)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite drops tzinfo on the way back
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


class ProgressMapper:
    """Converts between WordProgress rows and ProgressRecord values."""

    @staticmethod
    def to_record(row: WordProgress) -> ProgressRecord:
        return ProgressRecord(
            next_review_at=_as_utc(row.next_review_at),
            times_seen=row.times_seen,
            times_correct=row.times_correct,
            times_incorrect=row.times_incorrect,
            status=ProgressStatus(row.status),
            mastery_level=row.mastery_level,
            ease_factor=row.ease_factor,
            interval_days=row.interval_days,
            repetitions=row.repetitions,
            last_reviewed_at=_as_utc(row.last_reviewed_at),
            version=row.version,
        )

    @staticmethod
    def to_values(record: ProgressRecord) -> Dict[str, Any]:
        return {
            "times_seen": record.times_seen,
            "times_correct": record.times_correct,
            "times_incorrect": record.times_incorrect,
            "status": record.status.value,
            "mastery_level": record.mastery_level,
            "ease_factor": record.ease_factor,
            "interval_days": record.interval_days,
            "repetitions": record.repetitions,
            "next_review_at": record.next_review_at,
            "last_reviewed_at": record.last_reviewed_at,
        }


class SQLAlchemyProgressStore:
    """Progress store persisting records in the word_progress table."""

    def __init__(self, db: Session):
        """Initialize the store with a database session."""
        self.db = db
        self.mapper = ProgressMapper()

    def _find(self, user_id: int, word_id: int) -> Optional[WordProgress]:
        stmt = select(WordProgress).where(
            WordProgress.user_id == user_id,
            WordProgress.word_id == word_id,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get(self, user_id: int, word_id: int) -> Optional[ProgressRecord]:
        """Get the progress record of a word, or None if it was never practiced."""
        store_operations.labels(operation_type="get").inc()
        row = self._find(user_id, word_id)
        return self.mapper.to_record(row) if row else None

    def put(self, user_id: int, word_id: int, record: ProgressRecord) -> bool:
        """Save a record if nobody else changed it since it was read."""
        store_operations.labels(operation_type="put").inc()
        values = self.mapper.to_values(record)
        try:
            if record.version == 0:
                if self._find(user_id, word_id) is not None:
                    return False
                self.db.add(WordProgress(user_id=user_id, word_id=word_id, version=1, **values))
                self.db.commit()
                return True

            result = self.db.execute(
                update(WordProgress)
                .where(
                    WordProgress.user_id == user_id,
                    WordProgress.word_id == word_id,
                    WordProgress.version == record.version,
                )
                .values(version=record.version + 1, **values)
            )
            self.db.commit()
            return result.rowcount == 1
        except IntegrityError as e:
            self.db.rollback()
            if self._find(user_id, word_id) is None:
                # Not a lost race: the user or word does not exist
                store_errors.labels(error_type=type(e).__name__).inc()
                logger.error(f"Failed to save progress for user {user_id}, word {word_id}: {e}")
                raise
            logger.info(f"Progress row for user {user_id}, word {word_id} created concurrently")
            return False
        except SQLAlchemyError as e:
            self.db.rollback()
            store_errors.labels(error_type=type(e).__name__).inc()
            logger.error(f"Failed to save progress for user {user_id}, word {word_id}: {e}")
            raise

    def list_for_user(self, user_id: int) -> Dict[int, ProgressRecord]:
        """Get all progress records of a user keyed by word id."""
        store_operations.labels(operation_type="list").inc()
        rows = self.db.execute(
            select(WordProgress).where(WordProgress.user_id == user_id)
        ).scalars()
        return {row.word_id: self.mapper.to_record(row) for row in rows}

    def delete(self, user_id: int, word_id: int) -> bool:
        """Delete the progress record of a word."""
        store_operations.labels(operation_type="delete").inc()
        result = self.db.execute(
            delete(WordProgress).where(
                WordProgress.user_id == user_id,
                WordProgress.word_id == word_id,
            )
        )
        self.db.commit()
        return result.rowcount > 0

    def delete_for_user(self, user_id: int) -> int:
        """Delete all progress records of a user."""
        store_operations.labels(operation_type="delete").inc()
        result = self.db.execute(delete(WordProgress).where(WordProgress.user_id == user_id))
        self.db.commit()
        return result.rowcount
