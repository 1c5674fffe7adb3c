"""Typed configuration loading and access.

This module provides dataclasses for the config.toml structure with
full type safety and validation. The file is optional; every field has a
default and command-line flags override what the file says.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_float, get_int, get_str, get_table

__all__ = [
    "Config",
    "GitHubConfig",
    "CompareConfig",
    "ConfigError",
    "load_config",
    "load_config_or_default",
    "default_config_path",
    "DEFAULT_API_URL",
    "DEFAULT_TOKEN_ENV",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_RETRY_ATTEMPTS",
]

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TOKEN_ENV = "GITHUB_TOKEN"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_RETRY_ATTEMPTS = 3

CONFIG_PATH_ENV = "RELDIFF_CONFIG"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    """Release API connection settings."""

    api_url: str = DEFAULT_API_URL
    token_env: str = DEFAULT_TOKEN_ENV
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS

    def token(self) -> str | None:
        """Read the API token from the configured environment variable."""
        value = os.environ.get(self.token_env, "").strip()
        return value or None


@dataclass(frozen=True, slots=True)
class CompareConfig:
    """Default comparison options."""

    filter: str = ""
    include_prereleases: bool = False
    include_drafts: bool = False
    verify_release: bool = False


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    github: GitHubConfig = field(default_factory=GitHubConfig)
    compare: CompareConfig = field(default_factory=CompareConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        github: StrDict = get_table(data, "github") or {}
        compare: StrDict = get_table(data, "compare") or {}

        retry_attempts = get_int(github, "retry_attempts")
        if retry_attempts is not None and retry_attempts < 1:
            raise ValueError("github.retry_attempts must be >= 1")
        timeout = get_float(github, "timeout")
        if timeout is not None and timeout <= 0:
            raise ValueError("github.timeout must be > 0")

        return cls(
            github=GitHubConfig(
                api_url=(get_str(github, "api_url") or DEFAULT_API_URL).rstrip("/"),
                token_env=get_str(github, "token_env") or DEFAULT_TOKEN_ENV,
                timeout=timeout or DEFAULT_TIMEOUT_SECONDS,
                retry_attempts=retry_attempts or DEFAULT_RETRY_ATTEMPTS,
            ),
            compare=CompareConfig(
                filter=get_str(compare, "filter") or "",
                include_prereleases=bool(get_bool(compare, "include_prereleases")),
                include_drafts=bool(get_bool(compare, "include_drafts")),
                verify_release=bool(get_bool(compare, "verify_release")),
            ),
        )


def default_config_path() -> Path:
    """Location of the user config, honouring RELDIFF_CONFIG."""
    env = os.environ.get(CONFIG_PATH_ENV)
    if env:
        return Path(env).expanduser()
    return Path.home() / ".config" / "reldiff" / "config.toml"


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to config.toml file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config from path, falling back to defaults if the file is absent.

    A file that exists but cannot be read or parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
