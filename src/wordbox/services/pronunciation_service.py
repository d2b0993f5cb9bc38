"""Pronunciation scoring and grading."""
import logging
from typing import Any, Iterable, Optional, Tuple

from wordbox.config import settings
from wordbox.models.progress_models import (
    PronunciationGrade,
    PronunciationResult,
    PronunciationSummary,
)
from wordbox.services.phonetics import phonetic_similarity
from wordbox.services.similarity import round_half_up, similarity

logger = logging.getLogger(__name__)

# Recognizers transcribe by sound, so phonetic closeness weighs more than spelling
EXACT_WEIGHT = 0.3
PHONETIC_WEIGHT = 0.7

# (minimum score, grade, feedback, emoji), checked top-down
GRADE_BANDS: Tuple[Tuple[int, PronunciationGrade, str, str], ...] = (
    (95, PronunciationGrade.EXCELLENT, "Excellent pronunciation! 👏", "🌟"),
    (85, PronunciationGrade.GOOD, "Very good! Just a few small improvements.", "✨"),
    (70, PronunciationGrade.FAIR, "Nice try! Keep practicing.", "👍"),
    (50, PronunciationGrade.NEEDS_WORK, "Keep going! Try it again.", "💪"),
    (0, PronunciationGrade.TRY_AGAIN, "Listen once more and repeat.", "🎯"),
)


def grade_for_score(score: int) -> Tuple[PronunciationGrade, str, str]:
    """Map a 0-100 score to its grade, feedback and emoji."""
    for minimum, grade, feedback, emoji in GRADE_BANDS:
        if score >= minimum:
            return grade, feedback, emoji
    _, grade, feedback, emoji = GRADE_BANDS[-1]
    return grade, feedback, emoji


def evaluate_pronunciation(spoken: Any, target: Any) -> PronunciationResult:
    """Score a recognized transcript against the word the learner was asked to say."""
    exact = similarity(spoken, target)
    phonetic = phonetic_similarity(spoken, target)
    score = round_half_up(exact * EXACT_WEIGHT + phonetic * PHONETIC_WEIGHT)
    grade, feedback, emoji = grade_for_score(score)

    return PronunciationResult(
        score=score,
        grade=grade,
        feedback=feedback,
        emoji=emoji,
        spoken=spoken if isinstance(spoken, str) else "",
        target=target if isinstance(target, str) else "",
        exact_similarity=exact,
        phonetic_similarity=phonetic,
    )


def evaluate_alternatives(alternatives: Iterable[Any], target: Any) -> PronunciationResult:
    """Evaluate every recognizer alternative and keep the best scoring one."""
    best: Optional[PronunciationResult] = None
    for alternative in alternatives:
        result = evaluate_pronunciation(alternative, target)
        if best is None or result.score > best.score:
            best = result
    if best is None:
        return evaluate_pronunciation("", target)
    return best


def is_passing(result: PronunciationResult, threshold: Optional[int] = None) -> bool:
    """Whether an attempt counts as a correct practice answer."""
    if threshold is None:
        threshold = settings.pronunciation.pass_score
    return result.score >= threshold


def summarize_results(results: Iterable[PronunciationResult]) -> PronunciationSummary:
    """Summarize a pronunciation practice session."""
    summary = PronunciationSummary()
    total = 0
    for result in results:
        summary.attempts += 1
        total += result.score
        summary.grade_counts[result.grade] += 1
        if summary.best is None or result.score > summary.best.score:
            summary.best = result
        if summary.worst is None or result.score < summary.worst.score:
            summary.worst = result

    if summary.attempts:
        summary.average_score = round_half_up(total / summary.attempts)
    logger.debug(f"Pronunciation session: {summary.attempts} attempts, average {summary.average_score}")
    return summary
