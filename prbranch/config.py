"""Configuration loading from YAML and environment.

Secrets (tokens) are taken from environment variables or from files
(Docker secrets). Never put real tokens in config files committed to the
repo.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Injected by load_config so secrets and ${VAR} substitution read one snapshot
_current_env: dict[str, str] = {}


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    env = _current_env or dict(os.environ)
    value = env.get(env_key)
    if value:
        return value.strip()
    file_path = env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="Workflow or PAT token; use env or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")


class BranchConfig(BaseSettings):
    """Naming of the contributor branch."""

    model_config = SettingsConfigDict(env_prefix="BRANCH_", extra="ignore")

    base: str = Field(default="main", description="Branch the contributor branch is created from")
    suffix: str = Field(default="ratatui", description="Contributor branch is <login>/<suffix>")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    branch: BranchConfig = Field(default_factory=BranchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, env or Docker secret file."""
        t = self.github.token
        if t and not t.startswith("$"):
            return t
        return _read_secret("GITHUB_TOKEN", "GITHUB_TOKEN_FILE")


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        # Simple $VAR
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    A missing file yields defaults (plus env overrides). Secrets:
    GITHUB_TOKEN or GITHUB_TOKEN_FILE.
    """
    global _current_env

    _current_env = dict(os.environ)

    path = config_path or Path("config.yaml")
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text()) or {}
    raw = _substitute_env(raw)

    return AppConfig(
        github=GitHubConfig(**(raw.get("github") or {})),
        branch=BranchConfig(**(raw.get("branch") or {})),
        logging=LoggingConfig(**(raw.get("logging") or {})),
    )
