"""Pytest configuration for StoryClients tests."""

import pytest

from storyclients.clients import CLIENT_SPECS, reset_providers

CREDENTIAL_ENV_VARS = sorted({name for spec in CLIENT_SPECS.values() for name in spec.env_vars})


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio to use asyncio only."""
    return "asyncio"


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Clear real API keys and point configuration at an empty temp location."""
    for name in CREDENTIAL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("STORYCLIENTS_CONFIG", str(tmp_path / "storyclients.ini"))
    monkeypatch.setattr("storyclients.config.user_config_dir", lambda *args: str(tmp_path / "xdg"))
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "home")
    monkeypatch.chdir(tmp_path)
    reset_providers()
    yield
    reset_providers()
