import logging

import pytest

from leafwalk.config import WalkConfig, configure, default_config, reset_config, resolve_config, set_separator


def test_defaults():
    cfg = default_config()
    assert cfg.separator == "."
    assert cfg.max_nodes is None


def test_set_separator_replaces_default_without_mutating_snapshots():
    before = default_config()
    after = set_separator("/")
    assert after.separator == "/"
    assert default_config() is after
    assert before.separator == "."


def test_configure_and_reset():
    configure(max_nodes=10)
    assert default_config().max_nodes == 10
    reset_config()
    assert default_config() == WalkConfig()


def test_explicit_config_wins():
    explicit = WalkConfig(separator=":")
    set_separator("/")
    assert resolve_config(explicit) is explicit
    assert resolve_config(None).separator == "/"


@pytest.mark.parametrize("kwargs", [{"separator": ""}, {"separator": None}, {"max_nodes": 0}])
def test_invalid_config(kwargs):
    with pytest.raises(ValueError):
        WalkConfig(**kwargs)


def test_from_env(monkeypatch):
    monkeypatch.setenv("LEAFWALK_SEPARATOR", "::")
    monkeypatch.setenv("LEAFWALK_MAX_NODES", "500")
    cfg = reset_config()
    assert cfg == WalkConfig(separator="::", max_nodes=500)


@pytest.mark.parametrize(
    "env",
    [
        {"LEAFWALK_MAX_NODES": "lots"},
        {"LEAFWALK_MAX_NODES": "0"},
        {"LEAFWALK_MAX_NODES": "-3"},
        {"LEAFWALK_SEPARATOR": ""},
    ],
)
def test_from_env_invalid_values_fall_back_to_defaults(monkeypatch, caplog, env):
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    with caplog.at_level(logging.WARNING, logger="leafwalk.config"):
        cfg = reset_config()
    assert cfg == WalkConfig()
    assert default_config() == WalkConfig()
    assert any(name in rec.getMessage() for rec in caplog.records for name in env)


def test_join_and_split():
    cfg = WalkConfig(separator="/")
    assert cfg.join("", "a") == "a"
    assert cfg.join("a", "b") == "a/b"
    assert cfg.split("a/b") == ["a", "b"]
    assert cfg.split("") == []
