import logging

import pytest

from tennis_league.utils import sentry


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 0.0),
        ("", 0.0),
        ("0.25", 0.25),
        ("1", 1.0),
        ("10", 1.0),
        ("-0.5", 0.0),
        ("lots", 0.0),
    ],
    ids=["unset", "blank", "fraction", "one", "clamped", "negative", "not-a-number"],
)
def test_sample_rate(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("SENTRY_TRACES_SAMPLE_RATE", raising=False)
    else:
        monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", raw)
    assert sentry.sample_rate("SENTRY_TRACES_SAMPLE_RATE") == expected


def test_bad_sample_rate_is_logged(monkeypatch, caplog):
    monkeypatch.setenv("SENTRY_PROFILES_SAMPLE_RATE", "lots")
    with caplog.at_level(logging.WARNING, logger="tennis_league.utils.sentry"):
        assert sentry.sample_rate("SENTRY_PROFILES_SAMPLE_RATE", default=0.1) == 0.1
    assert "SENTRY_PROFILES_SAMPLE_RATE" in caplog.text


def test_init_sentry_disabled_without_dsn(monkeypatch):
    calls = []
    monkeypatch.setattr(sentry.sentry_sdk, "init", lambda **kw: calls.append(kw))
    monkeypatch.setenv("SENTRY_DSN", "  ")
    assert sentry.init_sentry() is False
    assert calls == []


def test_init_sentry_passes_configuration(monkeypatch):
    calls = []
    monkeypatch.setattr(sentry.sentry_sdk, "init", lambda **kw: calls.append(kw))
    monkeypatch.setenv("SENTRY_DSN", "https://key@example.invalid/1")
    monkeypatch.setenv("SENTRY_ENVIRONMENT", "staging")
    monkeypatch.delenv("SENTRY_RELEASE", raising=False)
    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", "0.5")
    monkeypatch.delenv("SENTRY_PROFILES_SAMPLE_RATE", raising=False)

    assert sentry.init_sentry() is True
    (kwargs,) = calls
    assert kwargs["dsn"] == "https://key@example.invalid/1"
    assert kwargs["environment"] == "staging"
    assert kwargs["release"] == sentry.DEFAULT_RELEASE
    assert kwargs["traces_sample_rate"] == 0.5
    assert kwargs["profiles_sample_rate"] == 0.0

    monkeypatch.setenv("SENTRY_RELEASE", "abc123")
    sentry.init_sentry()
    assert calls[-1]["release"] == "abc123"
