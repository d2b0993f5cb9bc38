"""Configuration settings for the learning progress core."""
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from wordbox.exceptions import ConfigurationError

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)

# Spaced repetition defaults
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
EASE_PENALTY = 0.2
LEARNED_THRESHOLD = 5  # correct answers needed to mark a word as learned
FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = os.getenv("DATABASE_URL", "sqlite:///wordbox.db")
    echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    rotation: str = os.getenv("LOG_ROTATION", "midnight")
    interval: int = int(os.getenv("LOG_INTERVAL", "1"))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "7"))


@dataclass
class SchedulerSettings:
    """Spaced repetition settings."""
    default_ease_factor: float = float(os.getenv("SRS_DEFAULT_EASE_FACTOR", str(DEFAULT_EASE_FACTOR)))
    min_ease_factor: float = float(os.getenv("SRS_MIN_EASE_FACTOR", str(MIN_EASE_FACTOR)))
    ease_penalty: float = float(os.getenv("SRS_EASE_PENALTY", str(EASE_PENALTY)))
    learned_threshold: int = int(os.getenv("SRS_LEARNED_THRESHOLD", str(LEARNED_THRESHOLD)))
    first_interval_days: int = int(os.getenv("SRS_FIRST_INTERVAL_DAYS", str(FIRST_INTERVAL_DAYS)))
    second_interval_days: int = int(os.getenv("SRS_SECOND_INTERVAL_DAYS", str(SECOND_INTERVAL_DAYS)))


@dataclass
class PronunciationSettings:
    """Pronunciation practice settings."""
    pass_score: int = int(os.getenv("PRONUNCIATION_PASS_SCORE", "70"))


@dataclass
class ProgressSettings:
    """Progress tracking settings."""
    study_queue_limit: int = int(os.getenv("STUDY_QUEUE_LIMIT", "20"))
    max_update_retries: int = int(os.getenv("MAX_UPDATE_RETRIES", "3"))


@dataclass
class MonitoringSettings:
    """Metrics exporter settings."""
    port: int = int(os.getenv("METRICS_PORT", "9090"))


def get_database_settings() -> DatabaseSettings:
    """Get database settings."""
    return DatabaseSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_scheduler_settings() -> SchedulerSettings:
    """Get spaced repetition settings."""
    return SchedulerSettings()


def get_pronunciation_settings() -> PronunciationSettings:
    """Get pronunciation settings."""
    return PronunciationSettings()


def get_progress_settings() -> ProgressSettings:
    """Get progress settings."""
    return ProgressSettings()


def get_monitoring_settings() -> MonitoringSettings:
    """Get monitoring settings."""
    return MonitoringSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    database: DatabaseSettings = field(default_factory=get_database_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    scheduler: SchedulerSettings = field(default_factory=get_scheduler_settings)
    pronunciation: PronunciationSettings = field(default_factory=get_pronunciation_settings)
    progress: ProgressSettings = field(default_factory=get_progress_settings)
    monitoring: MonitoringSettings = field(default_factory=get_monitoring_settings)

    def validate(self) -> None:
        """Validate settings and raise ConfigurationError if invalid."""
        if self.scheduler.min_ease_factor < 1:
            raise ConfigurationError("SRS_MIN_EASE_FACTOR must be at least 1")

        if self.scheduler.default_ease_factor < self.scheduler.min_ease_factor:
            raise ConfigurationError("SRS_DEFAULT_EASE_FACTOR cannot be lower than SRS_MIN_EASE_FACTOR")

        if self.scheduler.ease_penalty < 0:
            raise ConfigurationError("SRS_EASE_PENALTY cannot be negative")

        if self.scheduler.learned_threshold < 1:
            raise ConfigurationError("SRS_LEARNED_THRESHOLD must be positive")

        if self.scheduler.first_interval_days < 1 or self.scheduler.second_interval_days < 1:
            raise ConfigurationError("SRS interval days must be positive")

        if self.pronunciation.pass_score < 0 or self.pronunciation.pass_score > 100:
            raise ConfigurationError("PRONUNCIATION_PASS_SCORE must be between 0 and 100")

        if self.progress.study_queue_limit < 1:
            raise ConfigurationError("STUDY_QUEUE_LIMIT must be positive")

        if self.progress.max_update_retries < 0:
            raise ConfigurationError("MAX_UPDATE_RETRIES cannot be negative")


# Create global settings instance
settings = Settings()
settings.validate()
