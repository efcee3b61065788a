from __future__ import annotations

import pydantic
import pytest

from core.config import AppSettings, _parse_env_lines, write_user_env_vars
from core.domain.models import ClientConfig


def test_client_config_defaults():
    config = ClientConfig.from_mapping({})

    assert config.username == ""
    assert config.endpoint == "http://api.geonames.org"
    assert config.language == "en"
    assert config.country == "UK"
    assert config.charset == "UTF-8"
    assert config.fuzzy == "0.8"
    assert config.orderby == "relevance"


def test_client_config_falsy_values_fall_back_to_defaults():
    config = ClientConfig.from_mapping({"username": "demo", "language": "", "country": None, "fuzzy": 0})

    assert config.username == "demo"
    assert config.language == "en"
    assert config.country == "UK"
    assert config.fuzzy == "0.8"


def test_client_config_ignores_unknown_keys_and_strips_endpoint():
    config = ClientConfig.from_mapping({"endpoint": "http://api.geonames.org/", "googleapikey": "x"})

    assert config.endpoint == "http://api.geonames.org"
    assert not hasattr(config, "googleapikey")


def test_client_config_is_frozen():
    config = ClientConfig(username="demo")

    with pytest.raises(pydantic.ValidationError):
        config.username = "other"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("GEONAMES_USERNAME", "envuser")
    monkeypatch.setenv("GEONAMES_LANGUAGE", "nl")
    monkeypatch.setenv("GEONAMES_HTTP_TIMEOUT_SECONDS", "5")

    settings = AppSettings(_env_file=None)
    config = settings.client_config()

    assert settings.http_timeout_seconds == 5.0
    assert config.username == "envuser"
    assert config.language == "nl"
    assert config.country == "UK"


def test_settings_reject_non_positive_timeout():
    with pytest.raises(pydantic.ValidationError):
        AppSettings(_env_file=None, http_timeout_seconds=0)


def test_write_user_env_vars_merges_existing(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    write_user_env_vars({"GEONAMES_USERNAME": "demo", "GEONAMES_LANGUAGE": "en"}, env_path)
    write_user_env_vars({"GEONAMES_LANGUAGE": "fr", "GEONAMES_ENDPOINT": None}, env_path)

    data = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    assert data == {"GEONAMES_USERNAME": "demo", "GEONAMES_LANGUAGE": "fr"}


def test_parse_env_lines_skips_comments_and_quotes():
    text = '# comment\nGEONAMES_USERNAME="demo"\n\nbroken line\nGEONAMES_COUNTRY=\'BE\'\n'

    assert _parse_env_lines(text) == {"GEONAMES_USERNAME": "demo", "GEONAMES_COUNTRY": "BE"}


def test_settings_log_level_is_case_insensitive(monkeypatch):
    monkeypatch.setenv("GEONAMES_LOG_LEVEL", "debug")

    assert AppSettings(_env_file=None).log_level == "DEBUG"


def test_settings_reject_unknown_log_level(monkeypatch):
    monkeypatch.setenv("GEONAMES_LOG_LEVEL", "verbose")

    with pytest.raises(pydantic.ValidationError):
        AppSettings(_env_file=None)
