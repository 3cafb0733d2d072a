# tests/unit/core/test_glide_config.py
"""Tests for settings validation and multi-source loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from glide_tables.core.config import DEFAULT_ENDPOINT, MAX_MUTATIONS, GlideSettings, load_settings


class TestGlideSettings:
    def test_defaults(self) -> None:
        settings = GlideSettings(token="t")

        assert settings.endpoint == DEFAULT_ENDPOINT
        assert settings.max_mutations == MAX_MUTATIONS == 500
        assert settings.max_concurrency == 1
        assert settings.client_id is None
        assert settings.timeout == 30.0

    def test_token_required(self) -> None:
        with pytest.raises(ValidationError):
            GlideSettings()  # type: ignore[call-arg]

    def test_empty_token_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GlideSettings(token="")

    @pytest.mark.parametrize("field", ["max_mutations", "max_concurrency"])
    def test_non_positive_limits_rejected(self, field: str) -> None:
        with pytest.raises(ValidationError):
            GlideSettings(token="t", **{field: 0})

    def test_endpoint_without_scheme_gets_https(self) -> None:
        assert GlideSettings(token="t", endpoint="api.example.com").endpoint == "https://api.example.com"

    def test_endpoint_trailing_slash_removed(self) -> None:
        assert GlideSettings(token="t", endpoint="http://localhost:8080/").endpoint == "http://localhost:8080"

    def test_numeric_token_coerced_to_string(self) -> None:
        assert GlideSettings(token=12345).token == "12345"  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        settings = GlideSettings(token="t")

        with pytest.raises(ValidationError):
            settings.token = "other"  # type: ignore[misc]


class TestLoadSettings:
    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GLIDE_TOKEN", "env-token")
        monkeypatch.setenv("GLIDE_MAX_MUTATIONS", "100")

        settings = load_settings()

        assert settings.token == "env-token"
        assert settings.max_mutations == 100

    def test_from_yaml_file(self, tmp_path: Path) -> None:
        config = tmp_path / "glide.yaml"
        config.write_text("token: file-token\nmax_concurrency: 4\nclient_id: my-client\n")

        settings = load_settings(config)

        assert settings.token == "file-token"
        assert settings.max_concurrency == 4
        assert settings.client_id == "my-client"

    def test_yaml_value_formatted_from_other_variable(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config = tmp_path / "glide.yaml"
        config.write_text('token: "@format {env[PROD_API_TOKEN]}"\n')
        monkeypatch.setenv("PROD_API_TOKEN", "prod-secret")

        assert load_settings(config).token == "prod-secret"

    def test_environment_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config = tmp_path / "glide.yaml"
        config.write_text("token: file-token\n")
        monkeypatch.setenv("GLIDE_TOKEN", "env-token")

        assert load_settings(config).token == "env-token"

    def test_explicit_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GLIDE_TOKEN", "env-token")

        settings = load_settings(token="explicit", max_mutations=None)

        assert settings.token == "explicit"
        assert settings.max_mutations == MAX_MUTATIONS

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_settings(tmp_path / "missing.yaml")

    def test_missing_token_fails_validation(self) -> None:
        with pytest.raises(ValidationError):
            load_settings()

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        config = tmp_path / "glide.yaml"
        config.write_text("token: t\nsomething_else: 1\n")

        assert load_settings(config).token == "t"
