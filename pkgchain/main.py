"""
pkgchain — CLI entrypoint.

Usage:
    pkgchain                       # same as "pkgchain install"
    pkgchain install --dry-run
    pkgchain install --only discord
    pkgchain list
    pkgchain backends
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from pkgchain import __version__
from pkgchain.core.models.outcome import BackendKind, InstallOutcome
from pkgchain.core.observability.logging_config import setup_logging


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="pkgchain")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--show-commands",
    is_flag=True,
    help="Echo every pacman/yay/flatpak command and its stderr.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to packages.yml (default: auto-detect, then the bundled list).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    show_commands: bool,
    config_path: str | None,
) -> None:
    """pkgchain — install desktop apps via pacman, then AUR, then Flatpak."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("PKGCHAIN_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("PKGCHAIN_LOG_FILE"),
        log_file_level=os.environ.get("PKGCHAIN_LOG_FILE_LEVEL"),
        show_commands=show_commands or bool(os.environ.get("PKGCHAIN_SHOW_COMMANDS")),
    )

    if ctx.invoked_subcommand is None:
        ctx.invoke(install)


def _echo_outcome(outcome: InstallOutcome) -> None:
    """One status line per package, printed as soon as it is resolved."""
    if outcome.installed:
        assert outcome.via is not None
        verb = "would install" if outcome.dry_run else "installed"
        detail = ""
        if outcome.dry_run and outcome.attempts and outcome.attempts[-1].detail:
            detail = f" ({outcome.attempts[-1].detail})"
        click.echo(f"   ✅ {outcome.package} — ", nl=False)
        click.secho(f"{verb} via {outcome.via.label}{detail}", fg="green")
    elif outcome.skipped:
        click.echo(f"   ⏭️  {outcome.package} — ", nl=False)
        click.secho(f"skipped ({outcome.reason})", fg="yellow")
    else:
        via = f" via {outcome.via.label}" if outcome.via else ""
        click.echo(f"   ❌ {outcome.package} — ", nl=False)
        click.secho(f"failed{via}: {outcome.reason}", fg="red")


@cli.command()
@click.option("--dry-run", is_flag=True, help="Resolve each package without installing.")
@click.option("--only", "only", default=None, metavar="NAME", help="Install only this registry entry.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(ctx: click.Context, dry_run: bool, only: str | None, as_json: bool) -> None:
    """Install every package in the registry.

    Each package is tried in pacman first, then the AUR, then Flatpak.
    Individual failures never stop the batch.

    Examples:

        pkgchain install

        pkgchain install --dry-run

        pkgchain install --only vlc
    """
    from pkgchain.core.use_cases.install import EXIT_USAGE, run_install

    quiet = ctx.obj.get("quiet", False)
    mode_label = "[dry-run] " if dry_run else ""

    if not as_json and not quiet:
        click.secho(f"\n📦 {mode_label}Installing packages (pacman → AUR → Flatpak)", fg="cyan", bold=True)

    try:
        result = run_install(
            config_path=ctx.obj.get("config_path"),
            only=only,
            dry_run=dry_run,
            on_outcome=None if as_json else _echo_outcome,
        )
    except KeyboardInterrupt:
        click.secho("\n⛔ Interrupted — stopping. Packages already installed are left as-is.", fg="red")
        sys.exit(130)

    if result.error and result.exit_code == EXIT_USAGE:
        raise click.BadParameter(result.error, param_hint="'--only'")

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(result.exit_code)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(result.exit_code)

    report = result.report
    assert report is not None

    for warning in report.bootstrap.warnings:
        click.secho(f"   ⚠️  {warning}", fg="yellow")
    for action in report.bootstrap.actions:
        if dry_run:
            click.secho(f"   ℹ️  {action}", fg="blue")

    click.echo()
    click.secho(
        f"   {report.installed} installed, {report.skipped} skipped, {report.failed} failed"
        f" ({report.total} total)",
        fg="green" if report.failed == 0 else "yellow",
        bold=True,
    )

    if not dry_run and not quiet and report.installed_via(BackendKind.FLATPAK):
        click.echo(
            "   You may need to reboot (or log out and back in) for Flatpak "
            "integration and service changes to take effect."
        )
    click.echo()


from pkgchain.ui.cli.registry import backends, list_packages  # noqa: E402

cli.add_command(list_packages)
cli.add_command(backends)


if __name__ == "__main__":
    cli()
