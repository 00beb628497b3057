"""Unit tests for environment-driven settings."""

from __future__ import annotations

import pytest

from nextmfe.scaffold.settings import ScaffoldSettings, get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    settings = ScaffoldSettings()

    assert settings.log_level == "WARNING"
    assert settings.host_port == 3000
    assert settings.remote_base_port == 3001
    assert settings.workspace_name == "nextjs-mfe-workspace"
    assert settings.generator_command[:3] == ["npx", "create-next-app@latest", "{name}"]


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("NEXTMFE_REMOTE_BASE_PORT", "4001")
    monkeypatch.setenv("NEXTMFE_GENERATOR_COMMAND", '["echo", "{name}"]')

    settings = get_settings()

    assert settings.remote_base_port == 4001
    assert settings.generator_command == ["echo", "{name}"]
    assert get_settings() is settings


def test_dotenv_ignores_unrelated_keys(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("PORT=3000\nNEXTMFE_HOST_PORT=8080\n")

    assert ScaffoldSettings().host_port == 8080
