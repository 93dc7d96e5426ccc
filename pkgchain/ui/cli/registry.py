"""
CLI commands for inspecting the registry and the backend chain.

Thin wrappers over the config loader and ``BackendRegistry``.
"""

from __future__ import annotations

import json
import sys

import click


@click.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_packages(ctx: click.Context, as_json: bool) -> None:
    """Show the packages that would be installed, in order."""
    from pkgchain.core.config.loader import ConfigError, load_registry, resolve_registry_path

    path = resolve_registry_path(ctx.obj.get("config_path"))
    try:
        registry = load_registry(path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(registry.model_dump(mode="json"), indent=2))
        return

    click.secho(f"\n📋 {len(registry.packages)} packages", fg="cyan", bold=True)
    click.echo(f"   {path}")
    click.echo()
    for pkg in registry.packages:
        flatpak = pkg.flatpak or "—"
        marker = "  [flatpak only]" if pkg.force_flatpak else ""
        click.echo(f"     • {pkg.name}  → {flatpak}{marker}")
    click.echo()


@click.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def backends(ctx: click.Context, as_json: bool) -> None:
    """Show which backend tools are present on this host."""
    from pkgchain.adapters.registry import default_registry

    status = default_registry().status()

    if as_json:
        click.echo(json.dumps(status, indent=2))
        return

    click.secho("\n🔌 Backends (priority order):", fg="cyan", bold=True)
    for info in status.values():
        icon = "✅" if info["available"] else "❌"
        click.echo(f"   {icon} {info['label']} ({info['tool']})")
    click.echo()
