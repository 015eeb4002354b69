"""Command line interface for superclone."""

import logging
from collections.abc import Callable
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from superclone import __version__
from superclone.client import SuperCloneClient
from superclone.config import SuperCloneConfig
from superclone.exceptions import SuperCloneError
from superclone.logging import configure_logging
from superclone.types.repos import CloneStatus, Provider, Repository
from superclone.types.sync import DiscoveryScope, RepoOutcome, SyncSummary

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Clone and manage repositories from GitHub and GitLab.",
)
console = Console()
err_console = Console(stderr=True)


class ExitCode:
    OK = 0
    FAILURE = 1


_STATUS_MARKS = {
    CloneStatus.CLONED: "[green]✓[/green]",
    CloneStatus.NOT_CLONED: "○",
    CloneStatus.ERROR: "[red]✗[/red]",
}

ProviderOption = typer.Option("github", "--provider", "-p", help="github or gitlab")


def build_client(config: SuperCloneConfig) -> SuperCloneClient:
    client = SuperCloneClient(config)
    try:
        client.ensure_git_installed()
    except SuperCloneError:
        client.close()
        raise
    return client


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=ExitCode.OK)


@app.callback()
def _main(
    ctx: typer.Context,
    database: str | None = typer.Option(None, "--database", "-d", help="Database file path"),
    github_token: str | None = typer.Option(None, "--github-token", help="GitHub token (or GITHUB_TOKEN)"),
    gitlab_token: str | None = typer.Option(None, "--gitlab-token", help="GitLab token (or GITLAB_TOKEN)"),
    clone_path: Path | None = typer.Option(None, "--clone-path", help="Base path for clones"),
    ssh: bool = typer.Option(False, "--ssh", help="Clone over SSH instead of HTTPS"),
    workers: int | None = typer.Option(None, "--workers", "-w", help="Concurrent clones/pulls"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    version: bool = typer.Option(
        False, "--version", callback=_show_version, is_eager=True, help="Show version and exit."
    ),
) -> None:
    configure_logging(level=logging.DEBUG if verbose else logging.WARNING)

    try:
        ctx.obj = SuperCloneConfig.from_env(
            database_path=database,
            github_token=github_token,
            gitlab_token=gitlab_token,
            clone_base_path=clone_path,
            use_ssh=ssh or None,
            max_workers=workers,
        )
    except SuperCloneError as e:
        err_console.print(f"[red]{escape(e.message)}[/red]")
        raise typer.Exit(code=ExitCode.FAILURE) from e


def _run(ctx: typer.Context, action: Callable[[SuperCloneClient], SyncSummary]) -> None:
    try:
        with build_client(ctx.obj) as client:
            summary = action(client)
    except SuperCloneError as e:
        err_console.print(f"[red]❌ {escape(e.message)}[/red]")
        raise typer.Exit(code=ExitCode.FAILURE) from e

    _print_summary(summary)
    if not summary.ok:
        raise typer.Exit(code=ExitCode.FAILURE)


def _print_outcome(outcome: RepoOutcome) -> None:
    verb = "Cloned to" if outcome.action.value == "clone" else "Pulled"
    if outcome.success:
        console.print(f"  ✅ {escape(outcome.full_name)}: {verb} {escape(str(outcome.path))}")
    else:
        console.print(f"  ❌ {escape(outcome.full_name)}: [red]{escape(outcome.error or '')}[/red]")


def _print_summary(summary: SyncSummary) -> None:
    if summary.scope is not None:
        console.print(
            f"📦 Found {summary.discovered} repositories ({summary.created} new)"
        )
    for outcome in summary.outcomes:
        _print_outcome(outcome)
    console.print(
        f"✨ Done: {len(summary.succeeded)} succeeded, {len(summary.failed)} failed"
    )


def _provider(value: str) -> Provider:
    try:
        return Provider.parse(value)
    except SuperCloneError as e:
        err_console.print(f"[red]{escape(e.message)}[/red]")
        raise typer.Exit(code=ExitCode.FAILURE) from e


def _require_token(config: SuperCloneConfig, provider: Provider) -> None:
    try:
        config.require_token(provider)
    except SuperCloneError as e:
        err_console.print(f"[red]{escape(e.message)}[/red]")
        raise typer.Exit(code=ExitCode.FAILURE) from e


@app.command("clone-user")
def clone_user(
    ctx: typer.Context,
    username: str = typer.Argument(..., help="User name"),
    provider: str = ProviderOption,
) -> None:
    """Clone all repositories of a user."""
    scope = DiscoveryScope.user(_provider(provider), username)
    _run(ctx, lambda client: client.sync.sync(scope))


@app.command("clone-org")
def clone_org(
    ctx: typer.Context,
    org: str = typer.Argument(..., help="Organization or group name"),
    provider: str = ProviderOption,
) -> None:
    """Clone all repositories of an organization (GitHub) or group (GitLab)."""
    scope = DiscoveryScope.org(_provider(provider), org)
    _run(ctx, lambda client: client.sync.sync(scope))


@app.command("clone-mine")
def clone_mine(ctx: typer.Context, provider: str = ProviderOption) -> None:
    """Clone all repositories of the authenticated user (requires a token)."""
    provider_enum = _provider(provider)
    _require_token(ctx.obj, provider_enum)
    _run(ctx, lambda client: client.sync.sync(DiscoveryScope.self_(provider_enum)))


@app.command("clone-all-orgs")
def clone_all_orgs(ctx: typer.Context, provider: str = ProviderOption) -> None:
    """Clone every repository of every organization/group you can access."""
    provider_enum = _provider(provider)
    _require_token(ctx.obj, provider_enum)
    _run(ctx, lambda client: client.sync.sync(DiscoveryScope.all_orgs(provider_enum)))


@app.command("pull-all")
def pull_all(ctx: typer.Context) -> None:
    """Pull updates for all cloned repositories."""
    _run(ctx, lambda client: client.sync.pull_all())


@app.command("clone")
def clone(
    ctx: typer.Context,
    full_name: str = typer.Argument(..., help="Repository full name, e.g. owner/repo"),
) -> None:
    """Clone one previously discovered repository."""
    _run(
        ctx,
        lambda client: SyncSummary(outcomes=[client.sync.clone_repository(full_name)]),
    )


@app.command("list")
def list_repos(
    ctx: typer.Context,
    provider: str | None = typer.Option(None, "--provider", "-p", help="github or gitlab"),
    cloned: bool = typer.Option(False, "--cloned", "-c", help="Only cloned repositories"),
) -> None:
    """List discovered repositories."""
    try:
        with build_client(ctx.obj) as client:
            repos = _filter(client, provider, cloned)
    except SuperCloneError as e:
        err_console.print(f"[red]{escape(e.message)}[/red]")
        raise typer.Exit(code=ExitCode.FAILURE) from e

    if not repos:
        console.print("No repositories found.")
        return

    console.print(f"📦 Repositories ({len(repos)})")
    for repo in repos:
        mark = _STATUS_MARKS.get(repo.status, "?")
        privacy = "🔒" if repo.is_private else "  "
        console.print(f"{mark} {privacy} \\[{repo.provider.value}] {escape(repo.full_name)}")
        if repo.local_path:
            console.print(f"   📁 {escape(repo.local_path)}")


def _filter(client: SuperCloneClient, provider: str | None, cloned: bool) -> list[Repository]:
    if provider:
        repos = client.store.find_by_provider(_provider(provider))
        if cloned:
            repos = [r for r in repos if r.is_cloned]
        return repos
    if cloned:
        return client.store.find_by_status(CloneStatus.CLONED)
    return client.store.find_all()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
