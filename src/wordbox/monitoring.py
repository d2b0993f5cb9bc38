"""Monitoring configuration for the learning progress core."""
from prometheus_client import Counter, start_http_server

from wordbox.config import settings

# Pronunciation metrics
pronunciation_evaluations = Counter(
    "wordbox_pronunciation_evaluations_total",
    "Total number of pronunciation attempts evaluated",
    ["grade"],
)

# Learning metrics
practice_outcomes = Counter(
    "wordbox_practice_outcomes_total",
    "Total number of practice outcomes applied",
    ["result"],
)

words_learned = Counter(
    "wordbox_words_learned_total",
    "Total number of words promoted to learned",
)

progress_conflicts = Counter(
    "wordbox_progress_conflicts_total",
    "Total number of progress writes rejected by a concurrent update",
)

# Store metrics
store_operations = Counter(
    "wordbox_store_operations_total",
    "Total number of progress store operations",
    ["operation_type"],
)

store_errors = Counter(
    "wordbox_store_errors_total",
    "Total number of progress store errors",
    ["error_type"],
)


def start_monitoring(port: int = settings.monitoring.port) -> None:
    """Start the Prometheus metrics server."""
    start_http_server(port)
