"""
CLI commands for rule and compatibility-table introspection.

Thin wrappers over ``tfguard.core.rules`` and
``tfguard.core.services.compatibility``.
"""

from __future__ import annotations

import json
from pathlib import Path

import click


@click.command("rules")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def rules(ctx: click.Context, as_json: bool) -> None:
    """List available rules and whether the config enables them."""
    from tfguard.core.config.loader import ConfigError, load_config
    from tfguard.core.rules.registry import default_registry

    config_path: Path | None = ctx.obj.get("config_path")
    try:
        config = load_config(config_path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        raise SystemExit(2) from e

    entries = []
    for rule in default_registry().list_rules():
        entry = rule.to_dict()
        entry["enabled"] = config.rule_enabled(rule.name, default=rule.enabled)
        entries.append(entry)

    if as_json:
        click.echo(json.dumps(entries, indent=2))
        return

    click.secho(f"📋 Rules ({len(entries)}):", fg="cyan", bold=True)
    for entry in entries:
        marker = click.style("on ", fg="green") if entry["enabled"] else click.style("off", fg="red")
        click.echo(f"   [{marker}] {entry['name']:<28} {entry['severity']}")
        if entry["link"]:
            click.echo(f"         {entry['link']}")


@click.command("compat")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def compat(as_json: bool) -> None:
    """Show the module/provider compatibility table."""
    from tfguard.core.services.compatibility import COMPATIBILITY_TABLE

    if as_json:
        data = {
            source: [entry._asdict() for entry in entries]
            for source, entries in COMPATIBILITY_TABLE.items()
        }
        click.echo(json.dumps(data, indent=2))
        return

    click.secho("🔗 Module compatibility:", fg="cyan", bold=True)
    for source, entries in COMPATIBILITY_TABLE.items():
        click.echo(f"\n   📦 {source}")
        for entry in entries:
            click.echo(f"      AWS provider ~> {entry.provider}.0  →  module ~> {entry.module}.0")
