"""Tests for database models."""
from datetime import UTC, datetime

import pytest
from faker import Faker
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from wordbox.models.models import User, Word, WordProgress

fake = Faker()


@pytest.fixture
def user(db: Session) -> User:
    """Create a test user."""
    user = User(username=fake.user_name())
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def word(db: Session) -> Word:
    """Create a test word."""
    word = Word(text="thing", translation="şey")
    db.add(word)
    db.commit()
    db.refresh(word)
    return word


def test_user_creation(user: User) -> None:
    """Test user creation."""
    assert user.id is not None
    assert user.created_at is not None


def test_word_creation(word: Word) -> None:
    """Test word creation."""
    assert word.id is not None
    assert word.text == "thing"
    assert word.translation == "şey"


def test_word_progress_defaults(db: Session, user: User, word: Word) -> None:
    """Test word progress column defaults."""
    progress = WordProgress(
        user_id=user.id,
        word_id=word.id,
        next_review_at=datetime.now(UTC),
    )
    db.add(progress)
    db.commit()
    db.refresh(progress)

    assert progress.times_seen == 0
    assert progress.times_correct == 0
    assert progress.times_incorrect == 0
    assert progress.status == "new"
    assert progress.mastery_level == 0
    assert progress.ease_factor == 2.5
    assert progress.interval_days == 1
    assert progress.repetitions == 0
    assert progress.version == 0
    assert progress.user.id == user.id
    assert progress.word.text == "thing"


def test_word_progress_is_unique_per_user_word(db: Session, user: User, word: Word) -> None:
    """Test the one record per user and word rule."""
    db.add(WordProgress(user_id=user.id, word_id=word.id, next_review_at=datetime.now(UTC)))
    db.commit()

    db.add(WordProgress(user_id=user.id, word_id=word.id, next_review_at=datetime.now(UTC)))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_deleting_user_removes_progress(db: Session, user: User, word: Word) -> None:
    """Test the cascade from users to their progress."""
    db.add(WordProgress(user_id=user.id, word_id=word.id, next_review_at=datetime.now(UTC)))
    db.commit()

    db.delete(user)
    db.commit()
    assert db.query(WordProgress).count() == 0


if __name__ == "__main__":
    pytest.main([__file__])
