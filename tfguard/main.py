"""
tfguard — CLI entrypoint.

Usage:
    python -m tfguard.main --help
    python -m tfguard.main check infra/
    python -m tfguard.main rules
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from tfguard import __version__
from tfguard.core.observability.logging_config import resolve_level, setup_from_env

if TYPE_CHECKING:
    from tfguard.core.use_cases.check import CheckResult

# check exit codes
EXIT_OK = 0
EXIT_ISSUES = 1
EXIT_ERROR = 2


@click.group()
@click.version_option(version=__version__, prog_name="tfguard")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to .tfguard.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """tfguard — version-constraint rules for Terraform configurations."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_from_env(resolve_level(debug=debug, verbose=verbose, quiet=quiet))


@cli.command()
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=True, dir_okay=True, path_type=Path),
    default=".",
)
@click.option("--recursive", "-r", is_flag=True, help="Also check subdirectories.")
@click.option("--only", "only", multiple=True, help="Run only this rule (repeatable).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(
    ctx: click.Context,
    path: Path,
    recursive: bool,
    only: tuple[str, ...],
    as_json: bool,
) -> None:
    """Check Terraform version constraints under PATH."""
    from tfguard.core.use_cases.check import run_check

    result = run_check(
        path,
        config_path=ctx.obj.get("config_path"),
        only=list(only) or None,
        recursive=True if recursive else None,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(_exit_code(result))

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(EXIT_ERROR)

    for diag in result.diagnostics:
        rng = diag.range
        click.secho(f"Warning: {diag.message}", fg="yellow", bold=True, nl=False)
        click.echo(f" ({diag.rule})")
        click.echo(f"\n  on {rng.filename} line {rng.start.line}, column {rng.start.column}\n")

    if not ctx.obj.get("quiet", False):
        if result.diagnostics:
            click.secho(
                f"⚠️  {len(result.diagnostics)} issue(s) found in {result.files_checked} file(s)",
                fg="yellow",
            )
        else:
            click.secho(f"✅ No issues in {result.files_checked} file(s)", fg="green")

    sys.exit(_exit_code(result))


def _exit_code(result: CheckResult) -> int:
    if result.error:
        return EXIT_ERROR
    if result.diagnostics:
        return EXIT_ISSUES
    return EXIT_OK


# ── Sub-groups ──────────────────────────────────────────────────

from tfguard.ui.cli.rules import compat, rules  # noqa: E402

cli.add_command(rules)
cli.add_command(compat)


if __name__ == "__main__":
    cli()
