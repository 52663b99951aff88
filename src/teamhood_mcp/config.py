"""Configuration for the Teamhood MCP server.

Values come from ``TEAMHOOD_*`` environment variables (or a ``.env`` file).
When a SOPS-encrypted ``secrets.yaml`` is present (by default at the project
root next to ``pyproject.toml``, or wherever ``TEAMHOOD_SECRETS_FILE`` points)
it is decrypted with the ``sops`` CLI and its ``TEAMHOOD_API_KEY`` /
``TEAMHOOD_BASE_URL`` entries take precedence over the environment.
"""
import logging
import subprocess
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("teamhood-mcp.config")

DEFAULT_BASE_URL = "https://api-lafermedutemple.teamhood.com/api/v1"

# Repository root (src/teamhood_mcp/config.py -> ../..); MCP clients start the
# server from arbitrary working directories
PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_SECRETS_FILE = str(PROJECT_ROOT / "secrets.yaml")

# Keys read from the decrypted secrets file, mapped to settings fields
SECRET_KEYS = {
    "TEAMHOOD_API_KEY": "api_key",
    "TEAMHOOD_BASE_URL": "base_url",
}


class Settings(BaseSettings):
    """Teamhood MCP settings."""

    model_config = SettingsConfigDict(
        env_prefix="TEAMHOOD_",
        env_file=".env",
        extra="ignore",
    )

    # Teamhood API
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0  # seconds, per request

    # Server
    log_level: str = "INFO"
    secrets_file: str = DEFAULT_SECRETS_FILE

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/") or DEFAULT_BASE_URL


def read_sops_secrets(path: Path) -> dict[str, Any]:
    """Decrypt a SOPS secrets file and return its top-level mapping.

    Returns an empty dict when the file does not exist or cannot be
    decrypted/parsed; the caller then falls back to the environment.
    """
    if not path.exists():
        return {}

    try:
        decrypted = subprocess.run(
            ["sops", "-d", str(path)],
            capture_output=True,
            text=True,
            check=True,
        ).stdout
    except FileNotFoundError:
        logger.warning(f"Secrets file {path} found but the sops CLI is not installed")
        return {}
    except subprocess.CalledProcessError as e:
        logger.warning(f"Could not decrypt {path} (exit {e.returncode}): {e.stderr.strip()}")
        return {}

    try:
        secrets = yaml.safe_load(decrypted)
    except yaml.YAMLError as e:
        logger.warning(f"Could not parse decrypted secrets from {path}: {e}")
        return {}

    if not isinstance(secrets, dict):
        logger.warning(f"Decrypted secrets in {path} are not a mapping, ignoring")
        return {}
    return secrets


def load_settings(**overrides: Any) -> Settings:
    """Build settings from the environment, then apply SOPS secrets if present."""
    settings = Settings(**overrides)
    secrets = read_sops_secrets(Path(settings.secrets_file))

    updates = {
        field: str(secrets[key])
        for key, field in SECRET_KEYS.items()
        if secrets.get(key)
    }
    if updates:
        logger.info(f"Loaded {', '.join(sorted(updates))} from {settings.secrets_file}")
        settings = Settings(**{**overrides, **updates})
    return settings


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()
