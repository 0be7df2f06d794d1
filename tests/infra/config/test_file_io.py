import json

import pytest

from storesearch.infra.config.file_io import (
    _load_by_extension,
    copy_default_config,
    load_config,
)


@pytest.fixture
def no_user_settings(tmp_path, monkeypatch):
    """Point the per-user settings file somewhere empty."""
    fallback = tmp_path / "user" / "settings.toml"
    monkeypatch.setattr("storesearch.infra.config.file_io.SETTING_PATH", fallback)
    return fallback


def test_load_config_user_path_exists(tmp_path, monkeypatch, no_user_settings):
    cfgfile = tmp_path / "custom.toml"
    cfgfile.write_text("[general]\nresult_limit = 50\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert load_config(config_path=cfgfile) == {"general": {"result_limit": 50}}


def test_load_config_local_settings_toml(tmp_path, monkeypatch, no_user_settings):
    (tmp_path / "settings.toml").write_text("a = 1\nb = '2'", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert load_config() == {"a": 1, "b": "2"}


def test_load_config_local_settings_json(tmp_path, monkeypatch, no_user_settings):
    (tmp_path / "settings.json").write_text(json.dumps({"a": 1}), encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert load_config() == {"a": 1}


def test_load_config_toml_preferred_over_json(tmp_path, monkeypatch, no_user_settings):
    (tmp_path / "settings.toml").write_text("src = 'toml'", encoding="utf-8")
    (tmp_path / "settings.json").write_text('{"src": "json"}', encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert load_config() == {"src": "toml"}


def test_load_config_missing_user_path_falls_through(
    tmp_path, monkeypatch, no_user_settings
):
    (tmp_path / "settings.toml").write_text("a = 1", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert load_config(config_path=tmp_path / "nope.toml") == {"a": 1}


def test_load_config_user_settings_fallback(tmp_path, monkeypatch, no_user_settings):
    no_user_settings.parent.mkdir(parents=True)
    no_user_settings.write_text("a = 3", encoding="utf-8")
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)

    assert load_config() == {"a": 3}


def test_load_config_none_found(tmp_path, monkeypatch, no_user_settings):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(FileNotFoundError):
        load_config()


def test_load_by_extension_invalid_toml(tmp_path):
    bad = tmp_path / "bad.toml"
    bad.write_text("a = = 1", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid TOML"):
        _load_by_extension(bad)


def test_load_by_extension_invalid_json(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid JSON"):
        _load_by_extension(bad)


def test_load_by_extension_rejects_non_dict_root(tmp_path):
    bad = tmp_path / "list.json"
    bad.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError, match="root must be a dict"):
        _load_by_extension(bad)


def test_load_by_extension_unsupported(tmp_path):
    bad = tmp_path / "settings.yaml"
    bad.write_text("a: 1", encoding="utf-8")

    with pytest.raises(ValueError, match="Unsupported"):
        _load_by_extension(bad)


def test_copy_default_config_writes_sample(tmp_path):
    target = tmp_path / "cfg" / "settings.toml"

    assert copy_default_config(target) is True
    data = _load_by_extension(target)
    assert data["general"]["result_limit"] == 200
    assert data["general"]["backend"] == "aiohttp"


def test_copy_default_config_keeps_existing(tmp_path):
    target = tmp_path / "settings.toml"
    target.write_text("a = 1", encoding="utf-8")

    assert copy_default_config(target) is False
    assert target.read_text(encoding="utf-8") == "a = 1"

    assert copy_default_config(target, overwrite=True) is True
    assert "base_url" in target.read_text(encoding="utf-8")
