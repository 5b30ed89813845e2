from __future__ import annotations

from datetime import timedelta

import pytest

from dolphin.utils.durations import format_duration, parse_duration


@pytest.mark.parametrize(
    ("raw", "seconds"),
    [
        ("3s", 3.0),
        ("0s", 0.0),
        ("1m30s", 90.0),
        ("250ms", 0.25),
        ("1h", 3600.0),
        ("1.5s", 1.5),
        ("2", 2.0),
        ("-3s", -3.0),
    ],
)
def test_parse_duration(raw: str, seconds: float) -> None:
    assert parse_duration(raw).total_seconds() == pytest.approx(seconds)


@pytest.mark.parametrize("raw", ["", "abc", "3x", "s", "3s junk", "nan"])
def test_parse_duration_rejects_garbage(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_duration(raw)


def test_format_duration() -> None:
    assert format_duration(timedelta(0)) == "0s"
    assert format_duration(timedelta(seconds=3)) == "3s"
    assert format_duration(timedelta(seconds=90)) == "1m30s"
    assert format_duration(timedelta(hours=1, seconds=0.5)) == "1h0.5s"
