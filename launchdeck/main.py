"""
launchdeck — CLI entrypoint.

Usage:
    launchdeck --help
    launchdeck launch
    launchdeck -f apps.json launch --tags web,backend
    launchdeck check network-up
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from launchdeck import __version__
from launchdeck.core.observability.logging_config import configure_from_env


def _selection_options(func):
    """Options shared by commands that pick a set of apps."""
    func = click.option(
        "--tags", "-t", default=None, help="Comma-separated tags; apps with any of them."
    )(func)
    func = click.option(
        "--group", "-g", "group_tag", default=None, help="Only apps with this tag."
    )(func)
    func = click.option("--app", "-c", "app_name", default=None, help="Only this app.")(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="launchdeck")
@click.option(
    "--config",
    "-f",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to the JSON/YAML config (default: ~/.launchdeck.json).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--debug", "-d", is_flag=True, help="Enable debug logging (implies verbose).")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--dry-run", "-r", is_flag=True, help="Don't run anything; every check passes.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    verbose: bool,
    debug: bool,
    quiet: bool,
    dry_run: bool,
) -> None:
    """launchdeck — launch apps gated by check commands."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config_path).expanduser() if config_path else None
    ctx.obj["verbose"] = verbose or debug
    ctx.obj["debug"] = debug
    ctx.obj["quiet"] = quiet
    ctx.obj["dry_run"] = dry_run

    configure_from_env(verbose=verbose, debug=debug, quiet=quiet)


# ── Launch ──────────────────────────────────────────────────────


@cli.command()
@_selection_options
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def launch(
    ctx: click.Context,
    app_name: str | None,
    group_tag: str | None,
    tags: str | None,
    as_json: bool,
) -> None:
    """Launch apps whose dependencies allow it.

    Examples:

        launchdeck launch

        launchdeck launch --app myapp

        launchdeck launch --group production

        launchdeck -r launch --tags web,backend
    """
    from launchdeck.core.use_cases.launch import launch_apps, parse_tags

    dry_run = ctx.obj.get("dry_run", False)
    result = launch_apps(
        config_path=ctx.obj.get("config_path"),
        app_name=app_name,
        group_tag=group_tag,
        tags=parse_tags(tags),
        dry_run=dry_run,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.ok:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    for warning in result.warnings:
        click.secho(f"⚠️  Warning: {warning}", fg="yellow", err=True)

    report = result.report
    assert report is not None
    verbose = ctx.obj.get("verbose", False)
    quiet = ctx.obj.get("quiet", False)

    for receipt in report.receipts:
        if receipt.ok:
            if receipt.dry_run:
                click.echo(f"[dry-run] Would execute app '{receipt.app}': {receipt.command_line}")
            elif not quiet:
                click.secho(f"✓ {receipt.app}", fg="green", nl=False)
                click.echo(f"  {receipt.command_line} (pid {receipt.pid})")
        elif receipt.failed:
            click.secho(f"✗ {receipt.app}: {receipt.error}", fg="red", err=True)
        elif verbose and receipt.reason != "check app":
            click.secho(f"⊘ {receipt.app} ", fg="yellow", nl=False)
            click.echo(f"({receipt.reason})")

    if verbose or dry_run:
        click.echo()
        click.secho("Execution Summary:", bold=True)
        click.echo(f"  Successfully launched: {report.launched}")
        click.echo(f"  Failed to launch:      {report.failed}")
        click.echo(f"  Skipped:               {report.skipped}")

    if report.failed > 0:
        sys.exit(1)


# ── Check ───────────────────────────────────────────────────────


@cli.command()
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, name: str, as_json: bool) -> None:
    """Execute a check app and print its result."""
    from launchdeck.core.use_cases.check import run_check

    result = run_check(
        name,
        config_path=ctx.obj.get("config_path"),
        dry_run=ctx.obj.get("dry_run", False),
        quiet=as_json,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.success else 1)

    if not result.command_line:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    click.echo(f"Executing check: {result.name}")
    click.echo(f"Command: {result.command_line}")

    if result.success:
        label = "SUCCESS (simulated)" if result.simulated else "SUCCESS (exit code 0)"
        click.secho(f"Result: {label}", fg="green")
        return

    if result.return_code is not None:
        click.secho(f"Result: FAILURE (exit code {result.return_code})", fg="red")
    else:
        click.secho(f"Result: FAILURE ({result.error})", fg="red")
    sys.exit(1)


# ── Resolve / gate ──────────────────────────────────────────────


@cli.command()
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def resolve(ctx: click.Context, name: str, as_json: bool) -> None:
    """Show the command an executable would run."""
    from launchdeck.core.use_cases.inspection import resolve_app

    result = resolve_app(
        name,
        config_path=ctx.obj.get("config_path"),
        dry_run=ctx.obj.get("dry_run", False),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    resolved = result.resolved
    assert resolved is not None
    if resolved.is_default:
        click.echo(f"Command: {resolved.command_line}")
    else:
        click.echo(f"Default Command:  {result.default}")
        click.echo(f"Resolved Command: {resolved.command_line}")
        click.echo(f"  (chosen by dependency '{resolved.source}')")


@cli.command("can-launch")
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def can_launch(ctx: click.Context, name: str, as_json: bool) -> None:
    """Tell whether an executable's dependencies allow launching it."""
    from launchdeck.core.use_cases.inspection import gate_app

    result = gate_app(
        name,
        config_path=ctx.obj.get("config_path"),
        dry_run=ctx.obj.get("dry_run", False),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.allowed else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    decision = result.decision
    assert decision is not None
    if decision.allowed:
        click.secho(f"✓ {name} can be launched", fg="green")
    else:
        click.secho(f"✗ {name} cannot be launched: no dependency satisfied", fg="red")

    if ctx.obj.get("verbose"):
        for check_name, success in decision.outcomes.items():
            marker = "satisfied" if check_name in decision.satisfied else "no action"
            outcome = "succeeded" if success else "failed"
            click.echo(f"   • {check_name}: {outcome} ({marker})")

    if not decision.allowed:
        sys.exit(1)


# ── List ────────────────────────────────────────────────────────


@cli.command("list")
@_selection_options
@click.option("--detailed", "-L", is_flag=True, help="Show tags, commands and dependencies.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_cmd(
    ctx: click.Context,
    app_name: str | None,
    group_tag: str | None,
    tags: str | None,
    detailed: bool,
    as_json: bool,
) -> None:
    """List executable apps (names only, or detailed)."""
    from launchdeck.core.use_cases.inspection import list_apps
    from launchdeck.core.use_cases.launch import parse_tags

    result = list_apps(
        config_path=ctx.obj.get("config_path"),
        app_name=app_name,
        group_tag=group_tag,
        tags=parse_tags(tags),
        detailed=detailed,
        dry_run=ctx.obj.get("dry_run", False),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    if not detailed:
        for listing in result.apps:
            click.echo(listing.name)
        return

    click.echo("Executable Apps:")
    click.echo("================")
    for listing in result.apps:
        click.echo()
        click.secho(f"Name: {listing.name}", bold=True)
        if listing.tags:
            click.echo(f"  Tags: {', '.join(listing.tags)}")

        if listing.resolve_error:
            click.echo(f"  Command: {listing.default} (error: {listing.resolve_error})")
        elif listing.overridden:
            click.echo(f"  Default Command: {listing.default}")
            click.echo(f"  Resolved Command: {listing.resolved}")
        else:
            click.echo(f"  Command: {listing.default}")

        if listing.dependencies:
            click.echo("  Dependencies:")
            for dep in listing.dependencies:
                click.echo(f"    - {dep['check']}")
                if dep["on_success"]:
                    click.echo(f"        on_success: {dep['on_success']}")
                if dep["on_failure"]:
                    click.echo(f"        on_failure: {dep['on_failure']}")

    if not result.apps:
        click.echo("\nNo executable apps found.")
    else:
        click.echo(f"\nTotal: {result.total} executable app(s)")


# ── Config ──────────────────────────────────────────────────────


@cli.group()
def config() -> None:
    """Configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate the config file."""
    from launchdeck.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.config is not None
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   File: {result.config_path}")
        click.echo(f"   Checks: {len(result.config.checks)}")
        click.echo(f"   Executables: {len(result.config.executables)}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        sys.exit(1)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
