"""Edit-distance based string similarity."""
import math
from typing import Any, List


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def normalize_text(text: Any) -> str:
    """Lowercase and trim text; anything that is not a string becomes empty."""
    if not isinstance(text, str):
        return ""
    return text.lower().strip()


def levenshtein_distance(first: str, second: str) -> int:
    """Minimum number of single-character edits turning first into second."""
    rows, cols = len(first), len(second)
    matrix: List[List[int]] = [[0] * (cols + 1) for _ in range(rows + 1)]

    for i in range(rows + 1):
        matrix[i][0] = i
    for j in range(cols + 1):
        matrix[0][j] = j

    for i in range(1, rows + 1):
        for j in range(1, cols + 1):
            if first[i - 1] == second[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = min(
                    matrix[i - 1][j - 1] + 1,  # substitution
                    matrix[i][j - 1] + 1,  # insertion
                    matrix[i - 1][j] + 1,  # deletion
                )

    return matrix[rows][cols]


def similarity(first: Any, second: Any) -> int:
    """Similarity of two strings as a 0-100 score.

    Comparison ignores case and surrounding whitespace. Two empty strings
    score 0, not 100: an empty transcript never counts as a match.
    """
    a = normalize_text(first)
    b = normalize_text(second)

    if not a or not b:
        return 0
    if a == b:
        return 100

    distance = levenshtein_distance(a, b)
    max_length = max(len(a), len(b))
    return round_half_up(((max_length - distance) / max_length) * 100)


def is_approximate_match(answer: Any, expected: Any, max_distance: int = 1) -> bool:
    """Check a typed answer with typo tolerance for longer words."""
    a = normalize_text(answer)
    b = normalize_text(expected)

    if a and a == b:
        return True

    # Short words must be spelled exactly
    if len(a) > 4 and len(b) > 4:
        return levenshtein_distance(a, b) <= max_distance

    return False
