"""Exceptions raised by the learning progress core."""


class WordBoxError(Exception):
    """Base class for all wordbox errors."""


class ConfigurationError(WordBoxError, ValueError):
    """Raised when settings break a scheduler or service invariant."""


class ProgressConflictError(WordBoxError):
    """Raised when a progress update keeps losing to concurrent writers."""

    def __init__(self, user_id: int, word_id: int, attempts: int):
        super().__init__(
            f"Could not save progress for user {user_id}, word {word_id} "
            f"after {attempts} attempts"
        )
        self.user_id = user_id
        self.word_id = word_id
        self.attempts = attempts
