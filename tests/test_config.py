from __future__ import annotations

import pytest

from text_timeline.config import (
    DEFAULT_EDITOR_NAME,
    DEFAULT_MAX_HISTORY,
    EditorConfig,
    load_config,
    resolve_max_history,
)


def test_zero_and_none_mean_default() -> None:
    assert resolve_max_history(0, environ={}) == DEFAULT_MAX_HISTORY
    assert resolve_max_history(None, environ={}) == DEFAULT_MAX_HISTORY


def test_explicit_capacity_is_kept() -> None:
    assert resolve_max_history(15, environ={"TEXT_TIMELINE_MAX_HISTORY": "3"}) == 15


def test_environment_overrides_default() -> None:
    env = {"TEXT_TIMELINE_MAX_HISTORY": "25"}

    assert resolve_max_history(0, environ=env) == 25


@pytest.mark.parametrize("raw", ["lots", "", "0", "-4"])
def test_malformed_environment_falls_back(raw: str) -> None:
    env = {"TEXT_TIMELINE_MAX_HISTORY": raw}

    assert resolve_max_history(0, environ=env) == DEFAULT_MAX_HISTORY


def test_negative_capacity_raises() -> None:
    with pytest.raises(ValueError):
        resolve_max_history(-2, environ={})


def test_load_config_reads_environment() -> None:
    config = load_config(
        {"TEXT_TIMELINE_MAX_HISTORY": "9", "TEXT_TIMELINE_EDITOR_NAME": "scratch"}
    )

    assert config == EditorConfig(max_history=9, name="scratch")


def test_load_config_defaults() -> None:
    assert load_config({}) == EditorConfig(DEFAULT_MAX_HISTORY, DEFAULT_EDITOR_NAME)
