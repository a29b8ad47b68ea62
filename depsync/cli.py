"""CLI entry point: depsync.

Subcommands:
    depsync check [PATH] [--json]      # Show what would be installed/removed
    depsync sync [PATH] [--secure]     # Install missing, uninstall unused
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from depsync.core.config import SyncConfig
from depsync.core.logging import setup_logging
from depsync.engines.reconciler.models import ActionOutcome, DiffResult, OutcomeStatus
from depsync.engines.reconciler.package_manager import NpmPackageManager
from depsync.engines.reconciler.runner import Reconciler
from depsync.engines.reconciler.trust import NpmDownloadsClient, TrustGate
from depsync.exceptions import DepsyncError

# log-symbols style markers, keyed by outcome
_SYMBOLS = {
    OutcomeStatus.INSTALLED: ("✔", "green"),
    OutcomeStatus.REMOVED: ("✔", "red"),
    OutcomeStatus.UNTRUSTED: ("⚠", "yellow"),
    OutcomeStatus.FAILED: ("✖", "yellow"),
}


def _echo_outcome(outcome: ActionOutcome) -> None:
    symbol, color = _SYMBOLS[outcome.status]
    click.echo(f"{click.style(symbol, fg=color)} {outcome.message}")


def _fail(exc: DepsyncError) -> None:
    click.secho(f"Error: {exc}", fg="red", err=True)
    sys.exit(2)


def _diff_rows(diff: DiffResult) -> dict[str, list[dict[str, object]]]:
    return {
        "install": [{"name": m.name, "dev": m.dev} for m in diff.to_install],
        "remove": [{"name": m.name, "dev": m.dev} for m in diff.to_remove],
    }


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """depsync: keep package.json in step with the modules your code requires."""
    if verbose:
        level = "DEBUG"
    else:
        level = os.environ.get("DEPSYNC_LOG_LEVEL", "WARNING")
    setup_logging(level=level)


@main.command("check")
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def check(path: str, as_json: bool) -> None:
    """Report missing and unused modules without changing anything.

    Exits 1 when the manifest is out of sync.
    """
    try:
        # planning never installs, so the trust gate is not needed
        config = SyncConfig.from_env(Path(path), secure=False)
        reconciler = Reconciler(
            config, NpmPackageManager(config.project_root, config.npm_executable)
        )
        diff = reconciler.plan()
    except DepsyncError as exc:
        _fail(exc)
        return

    if as_json:
        click.echo(json.dumps(_diff_rows(diff), indent=2))
    elif diff.is_empty:
        click.echo("Dependencies are in sync.")
    else:
        for module in diff.to_install:
            section = "devDependencies" if module.dev else "dependencies"
            click.echo(f"  + {module.name} ({section})")
        for module in diff.to_remove:
            section = "devDependencies" if module.dev else "dependencies"
            click.echo(f"  - {module.name} ({section})")

    sys.exit(0 if diff.is_empty else 1)


@main.command("sync")
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--secure/--no-secure",
    default=None,
    help="Only install modules with more than the popularity threshold of monthly downloads",
)
@click.option(
    "--reinstall/--no-reinstall",
    default=None,
    help="Run a plain 'npm install' after changes (default: on)",
)
@click.option("--npm", "npm_executable", default=None, help="npm executable to use")
@click.option("--timeout", type=float, default=None, help="Per-command timeout in seconds")
def sync(
    path: str,
    secure: bool | None,
    reinstall: bool | None,
    npm_executable: str | None,
    timeout: float | None,
) -> None:
    """Install missing modules and uninstall unused ones."""
    oracle: NpmDownloadsClient | None = None
    try:
        config = SyncConfig.from_env(
            Path(path),
            secure=secure,
            reinstall=reinstall,
            npm_executable=npm_executable,
            command_timeout=timeout,
        )
        trust_gate = None
        if config.secure:
            oracle = NpmDownloadsClient(config.registry_downloads_url)
            trust_gate = TrustGate(oracle, config.popularity_threshold)

        reconciler = Reconciler(
            config,
            NpmPackageManager(
                config.project_root, config.npm_executable, config.command_timeout
            ),
            trust_gate=trust_gate,
            on_outcome=_echo_outcome,
        )
        report = reconciler.run()
    except DepsyncError as exc:
        _fail(exc)
        return
    finally:
        if oracle is not None:
            oracle.close()

    if report.diff.is_empty:
        click.echo("Dependencies are in sync.")
    if report.reinstalled is False:
        click.secho("⚠ npm install failed while cleaning up", fg="yellow")

    sys.exit(1 if report.failed else 0)


if __name__ == "__main__":
    main()
