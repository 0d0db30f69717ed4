from __future__ import annotations

import pytest
from pydantic import ValidationError

from podocare_client.core.config import Settings


def test_defaults_target_local_backend() -> None:
    settings = Settings(_env_file=None)
    assert settings.api_base_url == "http://localhost:3000/api"
    assert settings.api_token is None
    assert settings.default_page_size == 15


def test_base_url_is_stripped_of_trailing_slashes() -> None:
    settings = Settings(_env_file=None, api_base_url="  http://clinic.local/api//  ")
    assert settings.api_base_url == "http://clinic.local/api"


def test_blank_token_is_treated_as_missing() -> None:
    settings = Settings(_env_file=None, api_token="   ")
    assert settings.api_token is None


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PODOCARE_API_TOKEN", "env-token")
    monkeypatch.setenv("PODOCARE_DEFAULT_PAGE_SIZE", "25")

    settings = Settings(_env_file=None)

    assert settings.api_token == "env-token"
    assert settings.default_page_size == 25


def test_plain_http_backend_rejected_in_production() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, app_env="production", api_base_url="http://clinic.example/api")


def test_https_backend_allowed_in_production() -> None:
    settings = Settings(_env_file=None, app_env="prod", api_base_url="https://clinic.example/api")
    assert settings.api_base_url == "https://clinic.example/api"


def test_non_positive_page_size_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, default_page_size=0)
