"""Shared fixtures for configuration and CLI tests."""

import pytest

from wordgate.config import SERVICE_DEFINITIONS, set_config

_ENV_VARS = [
    "WORDGATE_CONFIG_FILE",
    "WORDGATE_LOG_LEVEL",
    "WORDGATE_STRUCTURED_LOGGING",
    "WORDGATE_FAILURE_THRESHOLD",
    "WORDGATE_SUCCESS_THRESHOLD",
    "WORDGATE_OPEN_DURATION_MS",
    "WORDGATE_RETRY_COUNT",
    "WORDGATE_BASE_BACKOFF_MS",
    "WORDGATE_METRICS_ENABLED",
    "API_TIMEOUT_MS",
    "ENABLE_FALLBACK_IMAGES",
    "ENABLE_FALLBACK_SUGGESTIONS",
]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run each test with no wordgate env vars and no config files in reach."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    for definition in SERVICE_DEFINITIONS.values():
        for name in (definition.credential_env, definition.url_env, definition.model_env):
            if name:
                monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def write_config(tmp_path):
    """Factory fixture: ``write_config(text, name="wordgate.toml")`` returns the path."""

    def _write(text: str, name: str = "wordgate.toml"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        return path

    return _write
