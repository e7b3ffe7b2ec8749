from __future__ import annotations

import logging

import pytest
from dateutil import tz

from simple_fast.config import AppConfig, configure_logging, load_config


def test_load_config_defaults() -> None:
    config = load_config({})
    assert config == AppConfig()
    assert config.default_duration_hours == 16
    assert config.tick_seconds == 1.0


def test_load_config_from_env() -> None:
    config = load_config(
        {
            "SIMPLE_FAST_TZ": "America/Argentina/Buenos_Aires",
            "SIMPLE_FAST_DURATION": "18",
            "SIMPLE_FAST_TICK_SECONDS": "0.5",
            "SIMPLE_FAST_LOG_LEVEL": "info",
        }
    )
    assert config.default_duration_hours == 18
    assert config.tick_seconds == 0.5
    assert config.log_level == "INFO"
    assert config.tzinfo() == tz.gettz("America/Argentina/Buenos_Aires")


@pytest.mark.parametrize(
    "env",
    [
        {"SIMPLE_FAST_DURATION": "0"},
        {"SIMPLE_FAST_DURATION": "15"},
        {"SIMPLE_FAST_DURATION": "sixteen"},
        {"SIMPLE_FAST_TICK_SECONDS": "0"},
        {"SIMPLE_FAST_LOG_LEVEL": "LOUD"},
        {"SIMPLE_FAST_TZ": "Mars/Olympus_Mons"},
    ],
)
def test_load_config_rejects_bad_values(env: dict[str, str]) -> None:
    with pytest.raises(ValueError):
        load_config(env)


def test_empty_timezone_is_local() -> None:
    assert AppConfig().tzinfo() == tz.tzlocal()


def test_configure_logging_accepts_names(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    configure_logging("DEBUG")
    assert calls[0]["level"] == "DEBUG"
