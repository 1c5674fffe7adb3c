from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import NoReturn

import typer

from reldiff.cli.context import CLIContext, build_context
from reldiff.core.config import CompareConfig
from reldiff.core.errors import ErrorCode
from reldiff.core.result import Err, Result
from reldiff.output.console import ConsoleProtocol, Style
from reldiff.releases.errors import CompareError, exit_code_for
from reldiff.releases.model import CompareOptions, CompareOutcome
from reldiff.releases.session import compare_releases

BATCH_WORKERS = 4


def merge_options(
    defaults: CompareConfig,
    *,
    to: str,
    filter_pattern: str | None,
    pre: bool | None,
    drafts: bool | None,
    verify: bool | None,
) -> CompareOptions:
    """Command-line flags win over config values; None means "not given"."""
    return CompareOptions(
        secondary_tag=to,
        filter_pattern=defaults.filter if filter_pattern is None else filter_pattern,
        include_prereleases=defaults.include_prereleases if pre is None else pre,
        include_drafts=defaults.include_drafts if drafts is None else drafts,
        verify_release=defaults.verify_release if verify is None else verify,
    )


def exit_compare(error: CompareError) -> NoReturn:
    typer.echo(f"error: {error.pretty()}", err=True)
    raise typer.Exit(code=int(exit_code_for(error)))


def print_outcome(
    console: ConsoleProtocol, full_name: str, outcome: CompareOutcome, *, show_notes: bool
) -> None:
    result = outcome.result
    console.print(
        f"{full_name}: {result.distance} release(s) between "
        f"{result.primary_tag} and {result.secondary_tag}",
        Style.BOLD,
    )
    if show_notes:
        for note in result.notes:
            console.newline()
            console.print(note.tag, Style.INFO)
            console.print(note.body.strip() or "(no release notes)")
    console.print(str(outcome.rate), Style.DIM)


def compare(
    owner: str = typer.Argument(..., help="Repository owner."),
    repo: str = typer.Argument(..., help="Repository name."),
    release: str = typer.Argument(..., help="Tag of the release to check."),
    to: str = typer.Option("", "--to", help="Tag to compare with (default: newest release)."),
    filter_pattern: str | None = typer.Option(
        None, "--filter", help="Regex a tag must match (searched anywhere in the tag)."
    ),
    pre: bool | None = typer.Option(None, "--pre/--no-pre", help="Include pre-releases."),
    drafts: bool | None = typer.Option(None, "--drafts/--no-drafts", help="Include drafts."),
    verify: bool | None = typer.Option(
        None, "--verify/--no-verify", help="Check both tags exist as releases."
    ),
    notes: bool = typer.Option(False, "--notes", help="Print notes of releases in between."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show fetch progress."),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml."),
) -> None:
    """Count releases between RELEASE and another tag."""
    ctx = build_context(config)
    options = merge_options(
        ctx.config.compare,
        to=to,
        filter_pattern=filter_pattern,
        pre=pre,
        drafts=drafts,
        verify=verify,
    )
    outcome = compare_releases(
        ctx.transport,
        owner,
        repo,
        release,
        options,
        console=ctx.console if verbose else None,
    )
    if isinstance(outcome, Err):
        exit_compare(outcome.error)
    print_outcome(ctx.console, f"{owner}/{repo}", outcome.value, show_notes=notes)


def _parse_target(raw: str) -> tuple[str, str] | None:
    repo, sep, tag = raw.partition("=")
    if not sep or not repo.strip() or not tag.strip():
        return None
    return (repo.strip(), tag.strip())


def _run_batch(
    ctx: CLIContext, owner: str, targets: list[tuple[str, str]], options: CompareOptions
) -> list[Result[CompareOutcome, CompareError]]:
    # One independent session per repository; the transport holds no mutable state.
    with ThreadPoolExecutor(max_workers=min(BATCH_WORKERS, len(targets))) as pool:
        futures = [
            pool.submit(compare_releases, ctx.transport, owner, repo, tag, options)
            for repo, tag in targets
        ]
        return [f.result() for f in futures]


def batch(
    owner: str = typer.Argument(..., help="Owner of every repository."),
    targets: list[str] = typer.Argument(..., help="REPO=TAG pairs."),
    filter_pattern: str | None = typer.Option(None, "--filter", help="Regex a tag must match."),
    pre: bool | None = typer.Option(None, "--pre/--no-pre", help="Include pre-releases."),
    drafts: bool | None = typer.Option(None, "--drafts/--no-drafts", help="Include drafts."),
    verify: bool | None = typer.Option(None, "--verify/--no-verify", help="Verify tags."),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml."),
) -> None:
    """Compare several repositories of one owner against their newest release."""
    parsed: list[tuple[str, str]] = []
    for raw in targets:
        target = _parse_target(raw)
        if target is None:
            typer.echo(f"error: expected REPO=TAG, got {raw!r}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        parsed.append(target)

    ctx = build_context(config)
    options = merge_options(
        ctx.config.compare,
        to="",
        filter_pattern=filter_pattern,
        pre=pre,
        drafts=drafts,
        verify=verify,
    )

    worst = ErrorCode.OK
    for (repo, _tag), outcome in zip(parsed, _run_batch(ctx, owner, parsed, options), strict=True):
        if isinstance(outcome, Err):
            ctx.console.error(f"{owner}/{repo}: {outcome.error.pretty()}")
            worst = max(worst, exit_code_for(outcome.error))
            continue
        print_outcome(ctx.console, f"{owner}/{repo}", outcome.value, show_notes=False)

    if not worst.is_success:
        raise typer.Exit(code=int(worst))
