"""Tests for settings and SOPS secrets loading."""
import subprocess

import pytest

from teamhood_mcp import config
from teamhood_mcp.config import (
    DEFAULT_BASE_URL,
    PROJECT_ROOT,
    Settings,
    load_settings,
    read_sops_secrets,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the caller's TEAMHOOD_* variables and .env file.

    The secrets file is pointed at tmp_path so tests control whether it exists.
    """
    for key in ("TEAMHOOD_API_KEY", "TEAMHOOD_BASE_URL", "TEAMHOOD_TIMEOUT"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("TEAMHOOD_SECRETS_FILE", str(tmp_path / "secrets.yaml"))
    monkeypatch.chdir(tmp_path)


def fake_sops(stdout="", returncode=0, missing=False):
    def run(args, **kwargs):
        if missing:
            raise FileNotFoundError("sops")
        if returncode:
            raise subprocess.CalledProcessError(returncode, args, stderr="decrypt failed")
        return subprocess.CompletedProcess(args, 0, stdout=stdout, stderr="")
    return run


class TestSettings:
    """Test environment-based settings."""

    def test_defaults(self):
        settings = Settings()
        assert settings.api_key == ""
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.timeout == 30.0

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("TEAMHOOD_API_KEY", "env-key")
        monkeypatch.setenv("TEAMHOOD_TIMEOUT", "12.5")

        settings = Settings()
        assert settings.api_key == "env-key"
        assert settings.timeout == 12.5

    def test_trailing_slash_stripped(self):
        assert Settings(base_url="https://example.test/api/v1/").base_url == "https://example.test/api/v1"

    def test_default_secrets_file_is_anchored_to_project_root(self, monkeypatch, tmp_path):
        """Test the default does not depend on the working directory."""
        monkeypatch.delenv("TEAMHOOD_SECRETS_FILE")

        settings = Settings()

        assert settings.secrets_file == str(PROJECT_ROOT / "secrets.yaml")
        assert not settings.secrets_file.startswith(str(tmp_path))


class TestSopsSecrets:
    """Test decryption of the optional secrets file."""

    def test_missing_file(self, tmp_path):
        assert read_sops_secrets(tmp_path / "secrets.yaml") == {}

    def test_decrypted_values(self, tmp_path, monkeypatch):
        path = tmp_path / "secrets.yaml"
        path.write_text("encrypted")
        monkeypatch.setattr(
            config.subprocess, "run",
            fake_sops("TEAMHOOD_API_KEY: sops-key\nTEAMHOOD_BASE_URL: https://sops.test/api/v1\n"),
        )

        assert read_sops_secrets(path) == {
            "TEAMHOOD_API_KEY": "sops-key",
            "TEAMHOOD_BASE_URL": "https://sops.test/api/v1",
        }

    def test_sops_not_installed(self, tmp_path, monkeypatch):
        path = tmp_path / "secrets.yaml"
        path.write_text("encrypted")
        monkeypatch.setattr(config.subprocess, "run", fake_sops(missing=True))
        assert read_sops_secrets(path) == {}

    def test_decryption_failure(self, tmp_path, monkeypatch):
        path = tmp_path / "secrets.yaml"
        path.write_text("encrypted")
        monkeypatch.setattr(config.subprocess, "run", fake_sops(returncode=1))
        assert read_sops_secrets(path) == {}

    def test_non_mapping_ignored(self, tmp_path, monkeypatch):
        path = tmp_path / "secrets.yaml"
        path.write_text("encrypted")
        monkeypatch.setattr(config.subprocess, "run", fake_sops("- just\n- a list\n"))
        assert read_sops_secrets(path) == {}


class TestLoadSettings:
    """Test precedence between the secrets file and the environment."""

    def test_secrets_override_env(self, tmp_path, monkeypatch):
        (tmp_path / "secrets.yaml").write_text("encrypted")
        monkeypatch.setenv("TEAMHOOD_API_KEY", "env-key")
        monkeypatch.setattr(config.subprocess, "run", fake_sops("TEAMHOOD_API_KEY: sops-key\n"))

        settings = load_settings()
        assert settings.api_key == "sops-key"
        assert settings.base_url == DEFAULT_BASE_URL

    def test_env_used_without_secrets_file(self, monkeypatch):
        monkeypatch.setenv("TEAMHOOD_API_KEY", "env-key")
        monkeypatch.setenv("TEAMHOOD_BASE_URL", "https://env.test/api/v1/")

        settings = load_settings()
        assert settings.api_key == "env-key"
        assert settings.base_url == "https://env.test/api/v1"

    def test_env_used_when_decryption_fails(self, tmp_path, monkeypatch):
        (tmp_path / "secrets.yaml").write_text("encrypted")
        monkeypatch.setenv("TEAMHOOD_API_KEY", "env-key")
        monkeypatch.setattr(config.subprocess, "run", fake_sops(returncode=1))

        assert load_settings().api_key == "env-key"
