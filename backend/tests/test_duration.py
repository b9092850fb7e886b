"""
Tests for shortscript.services.duration
"""

import pytest
from pydantic import ValidationError

from shortscript.services.duration import (
    DEFAULT_WORDS_PER_SECOND,
    MAX_TARGET_WORDS,
    MIN_TARGET_WORDS,
    SUPPORTED_LANGUAGES,
    WORDS_PER_SECOND_BY_LANGUAGE,
    WordBudget,
    minimum_words,
    target_words,
    words_per_second,
)


def test_english_one_minute():
    # 60 × 2.7 × 1.05 = 170.1 → 170
    assert target_words(60, "English") == 170
    assert minimum_words(170) == 153


def test_short_malayalam_is_clamped_up():
    # 10 × 2.2 × 1.05 = 23.1 → 23 → 60
    assert target_words(10, "Malayalam") == 60


@pytest.mark.parametrize("language", ["English", "Hindi", "Sanskrit", "Klingon"])
def test_long_duration_is_clamped_down(language):
    assert target_words(1000, language) == 450


def test_unknown_language_uses_default_rate():
    assert words_per_second("Klingon") == DEFAULT_WORDS_PER_SECOND
    # 100 × 2.5 × 1.05 = 262.5 → 263 (halves round up)
    assert target_words(100, "Klingon") == 263
    # 100 × 2.7 × 1.05 = 283.5 → 284
    assert target_words(100, "English") == 284


def test_language_lookup_is_exact_match():
    assert words_per_second("english") == DEFAULT_WORDS_PER_SECOND
    assert words_per_second("English") == 2.7


def test_rate_table_is_read_only():
    with pytest.raises(TypeError):
        WORDS_PER_SECOND_BY_LANGUAGE["English"] = 3.0  # type: ignore[index]


@pytest.mark.parametrize("language", SUPPORTED_LANGUAGES)
def test_target_words_bounded_and_monotonic(language):
    previous = 0
    for duration in range(1, 3601):
        words = target_words(duration, language)
        assert MIN_TARGET_WORDS <= words <= MAX_TARGET_WORDS
        assert words >= previous
        previous = words


def test_target_words_is_deterministic():
    assert {target_words(47, "Tamil") for _ in range(20)} == {target_words(47, "Tamil")}


def test_word_budget_for_duration():
    budget = WordBudget.for_duration(60, "English")

    assert budget.target_words == 170
    assert budget.min_words == 153


def test_word_budget_min_words_at_bounds():
    assert WordBudget.for_duration(1, "English").min_words == 54
    assert WordBudget.for_duration(3600, "English").min_words == 405


def test_word_budget_is_immutable():
    budget = WordBudget.for_duration(30, "Hindi")

    with pytest.raises(ValidationError):
        budget.target_words = 999


@pytest.mark.parametrize("duration", [10**6, 10**400])
def test_huge_duration_stays_at_max(duration):
    assert target_words(duration, "English") == MAX_TARGET_WORDS
    assert WordBudget.for_duration(duration, "Klingon").target_words == MAX_TARGET_WORDS
