"""Phonetic normalization of spoken transcripts."""
import logging
import re
from functools import reduce
from typing import Any, List, Tuple

from wordbox.services.similarity import normalize_text, similarity

logger = logging.getLogger(__name__)

# Letter sequences English learners commonly confuse. Order matters: each
# rewrite operates on the output of the previous ones.
PHONETIC_EQUIVALENTS: Tuple[Tuple[str, str], ...] = (
    ("th", "d"),
    ("th", "t"),
    ("th", "f"),
    ("th", "v"),
    ("r", "l"),
    ("w", "v"),
    ("sh", "s"),
    ("sh", "ch"),
    ("ch", "j"),
    ("ng", "n"),
    ("ph", "f"),
    ("tion", "shun"),
    ("sion", "zhun"),
)

VOWEL_PAIR = re.compile(r"[aeiou]{2}")


def _rewrite(spoken: str, pair: Tuple[str, str], target: str) -> str:
    a, b = pair
    if b in spoken and a in target:
        spoken = spoken.replace(b, a)
    if a in spoken and b in target:
        spoken = spoken.replace(a, b)
    return spoken


def adjust_spoken(spoken: Any, target: Any) -> str:
    """Rewrite confusable sequences in the transcript towards the target spelling."""
    normalized_target = normalize_text(target)
    return reduce(
        lambda current, pair: _rewrite(current, pair, normalized_target),
        PHONETIC_EQUIVALENTS,
        normalize_text(spoken),
    )


def phonetic_similarity(spoken: Any, target: Any) -> int:
    """Similarity of a transcript to the target after phonetic rewriting."""
    adjusted = adjust_spoken(spoken, target)
    logger.debug(f"Phonetic rewrite: {spoken!r} -> {adjusted!r} (target {target!r})")
    return similarity(adjusted, target)


def pronunciation_tips(word: Any) -> List[str]:
    """Hints for sounds in the word that learners often get wrong."""
    lower_word = normalize_text(word)
    tips = []

    if "th" in lower_word:
        tips.append('💡 For "th", place your tongue lightly between your teeth')
    if "tion" in lower_word:
        tips.append('💡 The "-tion" ending sounds like "shun"')
    if "gh" in lower_word:
        tips.append('💡 "gh" is usually silent or sounds like "f"')
    if "ough" in lower_word:
        tips.append('💡 "ough" changes from word to word (off, oo, oh)')
    if lower_word.endswith("ed"):
        tips.append('💡 "-ed" sounds like "id" after t/d, otherwise like "t" or "d"')
    if "silent" in lower_word:
        tips.append('💡 Keep the "l" in "silent" clear, do not swallow it')
    if VOWEL_PAIR.search(lower_word):
        tips.append("💡 Two vowels side by side usually make a single sound")

    return tips or ["💡 Speak slowly and clearly"]
