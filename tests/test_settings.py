import pytest

from turing_simulator.settings import DEFAULT_SETTINGS, load_settings, validate_settings


def test_defaults_without_file():
    settings = load_settings()
    assert settings == DEFAULT_SETTINGS
    assert settings["max_steps"] == 10_000


def test_file_overrides_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("max_steps: 50\nlog_directory: logs\n", encoding="utf-8")
    settings = load_settings(path)
    assert settings["max_steps"] == 50
    assert settings["log_directory"] == "logs"
    assert settings["tape_window"] == DEFAULT_SETTINGS["tape_window"]


def test_empty_file_keeps_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "missing.yaml")


def test_wrong_type(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("max_steps: muchos\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_settings(path)


def test_bool_is_not_an_int():
    settings = dict(DEFAULT_SETTINGS, max_steps=True)
    with pytest.raises(TypeError):
        validate_settings(settings)


def test_negative_budget():
    with pytest.raises(ValueError):
        validate_settings(dict(DEFAULT_SETTINGS, max_steps=-1))


def test_unknown_key():
    with pytest.raises(ValueError, match="desconocidas"):
        validate_settings(dict(DEFAULT_SETTINGS, colour=True))


def test_missing_key():
    settings = dict(DEFAULT_SETTINGS)
    del settings["tape_window"]
    with pytest.raises(ValueError):
        validate_settings(settings)
