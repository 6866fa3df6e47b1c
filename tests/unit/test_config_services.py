"""Tests for service definitions and environment validation."""

import logging

import pytest

from wordgate.config import (
    REQUIRED_ENV_VARS,
    SERVICE_DEFINITIONS,
    ServiceConfig,
    validate_env,
    validate_service_env,
)


class TestServiceConfig:
    def test_strips_trailing_slash_and_defaults_display_name(self):
        config = ServiceConfig(name="grok", base_url="https://api.grok.ai///")
        assert config.base_url == "https://api.grok.ai"
        assert config.display_name == "grok"

    def test_empty_credential_is_not_configured(self):
        assert ServiceConfig(name="grok", base_url="x", credential="").is_configured is False

    def test_to_dict_reports_presence_only(self):
        rendered = ServiceConfig(
            name="grok", base_url="https://api.grok.ai", credential="xai-secret"
        ).to_dict()
        assert rendered["configured"] is True
        assert "xai-secret" not in repr(rendered)


class TestServiceDefinitions:
    def test_known_services(self):
        assert set(SERVICE_DEFINITIONS) == {"replicate", "perplexity", "grok", "anthropic"}
        assert set(REQUIRED_ENV_VARS) == set(SERVICE_DEFINITIONS)

    def test_credential_env_is_required(self):
        for name, definition in SERVICE_DEFINITIONS.items():
            assert definition.credential_env in REQUIRED_ENV_VARS[name]


class TestValidateServiceEnv:
    """Tests for per-service environment checks."""

    def test_valid(self):
        result = validate_service_env("grok", {"GROK_API_KEY": "xai-1"})
        assert result.valid
        assert result.missing == []

    def test_replicate_needs_token_and_model(self):
        result = validate_service_env("replicate", {"REPLICATE_API_TOKEN": "r8_x"})
        assert not result.valid
        assert result.missing == ["REPLICATE_FLUX_MODEL"]

    def test_empty_values_count_as_missing(self):
        result = validate_service_env("anthropic", {"ANTHROPIC_API_KEY": ""})
        assert result.missing == ["ANTHROPIC_API_KEY"]

    def test_unknown_service(self):
        with pytest.raises(KeyError):
            validate_service_env("openai", {})

    def test_reads_process_environment_by_default(self, monkeypatch):
        monkeypatch.setenv("PERPLEXITY_API_KEY", "pplx-1")
        assert validate_service_env("perplexity").valid


class TestValidateEnv:
    """Tests for checking several services at once."""

    def test_all_missing(self):
        report = validate_env(environ={})
        assert not report.valid
        assert set(report.missing) == set(REQUIRED_ENV_VARS)

    def test_subset(self):
        report = validate_env(["grok", "perplexity"], {"GROK_API_KEY": "k"})
        assert report.missing == {"perplexity": ["PERPLEXITY_API_KEY"]}

    def test_all_present(self):
        environ = {name: "set" for names in REQUIRED_ENV_VARS.values() for name in names}
        assert validate_env(environ=environ).valid

    def test_missing_vars_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="wordgate"):
            validate_env(["grok"], {})
        assert any("GROK_API_KEY" in r.getMessage() for r in caplog.records)
