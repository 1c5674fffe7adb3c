from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from reldiff.core.config import Config, default_config_path, load_config, load_config_or_default
from reldiff.core.errors import ErrorCode
from reldiff.core.result import Err
from reldiff.output.console import ConsoleProtocol, RichConsole
from reldiff.transport.github import GitHubReleaseTransport, ReleaseTransport
from reldiff.transport.http import RealHttpClient


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol
    transport: ReleaseTransport


def build_transport(config: Config) -> ReleaseTransport:
    http = RealHttpClient(token=config.github.token(), timeout=config.github.timeout)
    return GitHubReleaseTransport(
        http,
        api_url=config.github.api_url,
        retry_attempts=config.github.retry_attempts,
    )


def build_context(config_path: Path | None = None) -> CLIContext:
    """Load config (explicit path must exist, default path is optional)."""
    if config_path is not None:
        result = load_config(config_path)
    else:
        result = load_config_or_default(default_config_path())
    if isinstance(result, Err):
        typer.echo(f"error: {result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
    config = result.value

    return CLIContext(
        config=config,
        console=RichConsole(),
        transport=build_transport(config),
    )
