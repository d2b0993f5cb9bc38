"""Tests for string similarity."""
import pytest
from faker import Faker

from wordbox.services.similarity import (
    is_approximate_match,
    levenshtein_distance,
    normalize_text,
    round_half_up,
    similarity,
)

fake = Faker()


def test_identical_words_score_100() -> None:
    """Test that any non-empty word is fully similar to itself."""
    for _ in range(20):
        word = fake.word()
        assert similarity(word, word) == 100


def test_similarity_ignores_case_and_surrounding_whitespace() -> None:
    """Test normalization before comparison."""
    assert similarity("  Cat ", "cAT") == 100


@pytest.mark.parametrize("first, second", [("", ""), ("", "cat"), ("cat", ""), ("   ", "   ")])
def test_empty_input_scores_zero(first: str, second: str) -> None:
    """Test the degenerate empty cases."""
    assert similarity(first, second) == 0


def test_non_string_input_scores_zero() -> None:
    """Test that malformed input does not raise."""
    assert similarity(None, "cat") == 0
    assert similarity("cat", 42) == 0


def test_one_substitution() -> None:
    """Test a single substitution over three characters."""
    assert similarity("kat", "cat") == 67


def test_similarity_is_symmetric() -> None:
    """Test that argument order does not matter."""
    for _ in range(20):
        first, second = fake.word(), fake.word()
        assert similarity(first, second) == similarity(second, first)


def test_similarity_rounds_halves_up() -> None:
    """Test that 62.5 rounds to 63."""
    # distance 3 over 8 characters
    assert similarity("abcdefgh", "abcdexyz") == 63


def test_completely_different_words() -> None:
    """Test that unrelated words of equal length score 0."""
    assert similarity("abc", "xyz") == 0


def test_levenshtein_distance() -> None:
    """Test the classic edit distance examples."""
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("", "abc") == 3
    assert levenshtein_distance("flaw", "lawn") == 2
    assert levenshtein_distance("same", "same") == 0


def test_round_half_up() -> None:
    """Test rounding of halves."""
    assert round_half_up(62.5) == 63
    assert round_half_up(0.5) == 1
    assert round_half_up(2.4) == 2


def test_normalize_text() -> None:
    """Test text normalization."""
    assert normalize_text("  HeLLo ") == "hello"
    assert normalize_text(None) == ""


def test_approximate_match() -> None:
    """Test typo tolerance for typed answers."""
    assert is_approximate_match("Cat ", "cat") is True
    assert is_approximate_match("bananna", "banana") is True
    assert is_approximate_match("cut", "cat") is False
    assert is_approximate_match("appel", "apple") is False
    assert is_approximate_match("appel", "apple", max_distance=2) is True
    assert is_approximate_match("", "") is False


if __name__ == "__main__":
    pytest.main([__file__])
