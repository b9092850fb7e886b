"""
Tests for shortscript.services.parameters
"""

import pytest

from shortscript.services.duration import MAX_DURATION_SEC
from shortscript.services.parameters import (
    DEFAULT_DURATION_SEC,
    ScriptParameters,
    parse_duration,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (90, 90),
        ("90", 90),
        (" 45s", 45),
        ("12.7", 12),
        (12.7, 12),
        ("-5", -5),
        ("abc", None),
        ("", None),
        (None, None),
        (True, None),
        (float("nan"), None),
        ("-0", 0),
        ("007", 7),
        ("1" + "0" * 400, MAX_DURATION_SEC),
        ("1" * 5000, MAX_DURATION_SEC),
        ("-" + "9" * 5000, -MAX_DURATION_SEC),
        (10**400, MAX_DURATION_SEC),
        (1e300, MAX_DURATION_SEC),
    ],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


def test_from_request_defaults():
    params = ScriptParameters.from_request()

    assert params.url is None
    assert params.duration == DEFAULT_DURATION_SEC
    assert params.language == "English"
    assert params.emotion == "Excited"
    assert params.stance == "Neutral"
    assert params.extra_info == "None"
    assert params.raw_duration == DEFAULT_DURATION_SEC


def test_blank_strings_count_as_absent():
    params = ScriptParameters.from_request(
        url="  ", emotion="", language=" ", stance="", extra_info="\n"
    )

    assert params.url is None
    assert params.language == "English"
    assert params.emotion == "Excited"
    assert params.stance == "Neutral"
    assert params.extra_info == "None"


def test_values_are_kept_and_trimmed():
    params = ScriptParameters.from_request(
        url=" https://example.com/a ",
        emotion="Angry",
        language="Hindi",
        stance="Critical",
        duration="30",
        extra_info="Mention the CEO",
    )

    assert params.url == "https://example.com/a"
    assert params.duration == 30
    assert params.language == "Hindi"
    assert params.emotion == "Angry"
    assert params.stance == "Critical"
    assert params.extra_info == "Mention the CEO"
    assert params.raw_duration == "30"
    assert params.language_supported


@pytest.mark.parametrize("duration", ["abc", 0, -10, "0"])
def test_unusable_duration_falls_back_to_default(duration):
    params = ScriptParameters.from_request(duration=duration)

    assert params.duration == DEFAULT_DURATION_SEC
    # 응답 meta에는 요청 값 그대로
    assert params.raw_duration == duration


def test_unknown_language_is_kept():
    params = ScriptParameters.from_request(language="Klingon")

    assert params.language == "Klingon"
    assert not params.language_supported


@pytest.mark.parametrize("duration", ["1" + "0" * 400, "1" * 5000, 10**400, 1e300])
def test_huge_duration_saturates(duration):
    params = ScriptParameters.from_request(duration=duration)

    assert params.duration == MAX_DURATION_SEC
    assert params.raw_duration == duration
