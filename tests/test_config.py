"""Tests for options and environment settings."""

import dataclasses

import pytest

from platformrocks.config import (
    DEFAULT_CONNECTIVITY_TIMEOUT,
    DEFAULT_CONNECTIVITY_URL,
    CreateOptions,
    Settings,
)


class TestCreateOptions:
    """Tests for CreateOptions."""

    def test_defaults(self) -> None:
        options = CreateOptions()
        assert options.template == "web"
        assert options.pm is None
        assert options.git is True
        assert options.install is True
        assert options.force is False
        assert options.dry_run is False
        assert options.verbose is False

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            CreateOptions().force = True  # type: ignore[misc]

    def test_to_dict_excludes_none(self) -> None:
        assert "pm" not in CreateOptions().to_dict()
        assert CreateOptions(pm="pnpm").to_dict()["pm"] == "pnpm"


class TestSettings:
    """Tests for Settings.from_env."""

    def test_defaults(self) -> None:
        settings = Settings.from_env({})
        assert settings == Settings()
        assert settings.connectivity_url == DEFAULT_CONNECTIVITY_URL
        assert settings.connectivity_timeout == DEFAULT_CONNECTIVITY_TIMEOUT
        assert settings.min_node_major == 18
        assert settings.auth_token is None

    def test_overrides(self) -> None:
        settings = Settings.from_env(
            {
                "PLATFORMROCKS_CONNECTIVITY_URL": "https://example.test/ping",
                "PLATFORMROCKS_CONNECTIVITY_TIMEOUT": "1.5",
                "PLATFORMROCKS_MIN_NODE": "20",
                "GITHUB_TOKEN": "ghp_token",
            }
        )
        assert settings.connectivity_url == "https://example.test/ping"
        assert settings.connectivity_timeout == 1.5
        assert settings.min_node_major == 20
        assert settings.auth_token == "ghp_token"

    def test_giget_auth_takes_precedence(self) -> None:
        settings = Settings.from_env({"GIGET_AUTH": "giget", "GITHUB_TOKEN": "gh"})
        assert settings.auth_token == "giget"

    def test_invalid_numbers_fall_back(self) -> None:
        settings = Settings.from_env(
            {
                "PLATFORMROCKS_CONNECTIVITY_TIMEOUT": "soon",
                "PLATFORMROCKS_MIN_NODE": "eighteen",
            }
        )
        assert settings.connectivity_timeout == DEFAULT_CONNECTIVITY_TIMEOUT
        assert settings.min_node_major == 18

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PLATFORMROCKS_MIN_NODE", "21")
        monkeypatch.delenv("GIGET_AUTH", raising=False)
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)

        settings = Settings.from_env()

        assert settings.min_node_major == 21
        assert settings.auth_token is None
