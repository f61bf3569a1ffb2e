from __future__ import annotations

from yarl import URL

from pyapod._redact import REDACTED, redact_for_log, redact_url


def test_redact_for_log_redacts_api_key() -> None:
    params = {"api_key": "SECRET", "date": "2024-03-01", "nested": {"Authorization": "Bearer x"}}

    redacted = redact_for_log(params)

    assert redacted["api_key"] == REDACTED
    assert redacted["date"] == "2024-03-01"
    assert redacted["nested"]["Authorization"] == REDACTED


def test_redact_for_log_truncates_long_strings() -> None:
    redacted = redact_for_log({"explanation": "x" * 600}, max_string=10)
    assert redacted["explanation"].startswith("x" * 10)
    assert "<truncated>" in redacted["explanation"]


def test_redact_url_masks_query_key() -> None:
    url = "https://api.nasa.gov/planetary/apod?api_key=SECRET&date=2024-03-01"
    redacted = redact_url(url)
    assert "SECRET" not in redacted
    assert "date=2024-03-01" in redacted


def test_redact_url_without_key_unchanged() -> None:
    url = URL("https://api.nasa.gov/planetary/apod?date=2024-03-01")
    assert redact_url(url) == str(url)
    assert redact_for_log(url) == str(url)
