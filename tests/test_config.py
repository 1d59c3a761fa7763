from __future__ import annotations

import pytest

from hline import config as config_module
from hline.config import get_config, get_config_path, load_config, reload_config

ENV_KEYS = ("HLINE_MATCH_COLOR", "HLINE_OK_IF_BINARY", "HLINE_LOG_LEVEL")


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "hline.toml"
    monkeypatch.setenv("HLINE_CONFIG", str(path))
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config_module, "_config", None)
    return path


def test_defaults_without_file(config_file) -> None:
    config = load_config()

    assert config.colors.match == "bright_red"
    assert config.input.ok_if_binary is False
    assert config.logging.log_level == "WARNING"


def test_file_values_apply(config_file) -> None:
    config_file.write_text(
        '[colors]\nmatch = "cyan"\n\n'
        "[input]\nok_if_binary = true\n\n"
        '[logging]\nlog_level = "DEBUG"\n',
        encoding="utf-8",
    )

    config = load_config()

    assert config.colors.match == "cyan"
    assert config.input.ok_if_binary is True
    assert config.logging.log_level == "DEBUG"


def test_partial_file_keeps_other_defaults(config_file) -> None:
    config_file.write_text('[colors]\nmatch = "blue"\n', encoding="utf-8")

    config = load_config()

    assert config.colors.match == "blue"
    assert config.input.ok_if_binary is False


def test_env_overrides_file(config_file, monkeypatch) -> None:
    config_file.write_text('[colors]\nmatch = "cyan"\n', encoding="utf-8")
    monkeypatch.setenv("HLINE_MATCH_COLOR", "yellow")
    monkeypatch.setenv("HLINE_OK_IF_BINARY", "yes")
    monkeypatch.setenv("HLINE_LOG_LEVEL", "INFO")

    config = load_config()

    assert config.colors.match == "yellow"
    assert config.input.ok_if_binary is True
    assert config.logging.log_level == "INFO"


@pytest.mark.parametrize("value", ["0", "false", "no", "off", "whatever"])
def test_env_bool_false_values(config_file, monkeypatch, value) -> None:
    config_file.write_text("[input]\nok_if_binary = true\n", encoding="utf-8")
    monkeypatch.setenv("HLINE_OK_IF_BINARY", value)

    assert load_config().input.ok_if_binary is False


def test_empty_env_value_is_ignored(config_file, monkeypatch) -> None:
    monkeypatch.setenv("HLINE_MATCH_COLOR", "")
    assert load_config().colors.match == "bright_red"


def test_malformed_file_falls_back_to_defaults(config_file) -> None:
    config_file.write_text("[colors\nmatch = ", encoding="utf-8")
    assert load_config().colors.match == "bright_red"


def test_config_path_follows_xdg(monkeypatch, tmp_path) -> None:
    monkeypatch.delenv("HLINE_CONFIG", raising=False)
    monkeypatch.setattr(config_module.sys, "platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert get_config_path() == tmp_path / "hline" / "hline.toml"


def test_get_config_caches_until_reload(config_file, monkeypatch) -> None:
    first = get_config()
    monkeypatch.setenv("HLINE_MATCH_COLOR", "green")

    assert get_config() is first
    assert first.colors.match == "bright_red"

    reloaded = reload_config()
    assert reloaded.colors.match == "green"
    assert get_config() is reloaded


def test_non_table_section_is_ignored(config_file) -> None:
    config_file.write_text(
        'colors = "red"\n\n[input]\nok_if_binary = true\n', encoding="utf-8"
    )

    config = load_config()

    assert config.colors.match == "bright_red"
    assert config.input.ok_if_binary is True


@pytest.mark.parametrize(
    "line",
    ['ok_if_binary = "false"', 'ok_if_binary = "true"', "ok_if_binary = 1"],
)
def test_non_boolean_ok_if_binary_is_ignored(config_file, line) -> None:
    config_file.write_text(f"[input]\n{line}\n", encoding="utf-8")
    assert load_config().input.ok_if_binary is False


def test_non_string_color_is_ignored(config_file) -> None:
    config_file.write_text("[colors]\nmatch = 31\n", encoding="utf-8")
    assert load_config().colors.match == "bright_red"
