"""Database models for learning progress."""
from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from wordbox.config import DEFAULT_EASE_FACTOR
from wordbox.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """Learner account, owned by the surrounding application."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=True)

    # Relationships
    progress = relationship("WordProgress", back_populates="user", cascade="all, delete")


class Word(Base, TimestampMixin):
    """Catalog word, owned by the surrounding application."""

    __tablename__ = "words"

    id = Column(Integer, primary_key=True)
    text = Column(String, nullable=False)
    translation = Column(String, nullable=True)

    # Relationships
    progress = relationship("WordProgress", back_populates="word", cascade="all, delete")


class WordProgress(Base, TimestampMixin):
    """Per user-word practice counters and review schedule."""

    __tablename__ = "word_progress"
    __table_args__ = (UniqueConstraint("user_id", "word_id", name="uq_word_progress_user_word"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    word_id = Column(Integer, ForeignKey("words.id"), nullable=False)
    times_seen = Column(Integer, nullable=False, default=0)
    times_correct = Column(Integer, nullable=False, default=0)
    times_incorrect = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False, default="new")  # new, learning, learned
    mastery_level = Column(Integer, nullable=False, default=0)
    ease_factor = Column(Float, nullable=False, default=DEFAULT_EASE_FACTOR)
    interval_days = Column(Integer, nullable=False, default=1)
    repetitions = Column(Integer, nullable=False, default=0)
    next_review_at = Column(DateTime(timezone=True), nullable=False)
    last_reviewed_at = Column(DateTime(timezone=True), nullable=True)
    version = Column(Integer, nullable=False, default=0)

    # Relationships
    user = relationship("User", back_populates="progress")
    word = relationship("Word", back_populates="progress")
