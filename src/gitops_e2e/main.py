"""CLI main entry point."""

import json
import sys
from typing import Any

import click
import yaml
from rich.console import Console

from .config import config_keys, get_config_path, load_config, save_config, unset_config
from .errors import FixtureError
from .fixture.services import FixtureServices
from .shared.logging import configure_logging

console = Console(stderr=True)

LOG_LEVELS = ["warning", "info", "debug"]


@click.group()
@click.option("-c", "--config", "config_path", type=click.Path(), help="Config file path")
@click.option("-v", "--verbose", count=True, help="Increase verbosity")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: int, json_output: bool) -> None:
    """End-to-end test fixtures for the GitOps control plane."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose
    ctx.obj["json_output"] = json_output
    configure_logging(LOG_LEVELS[min(verbose, len(LOG_LEVELS) - 1)], json_output=json_output)


@cli.command()
@click.pass_context
def reset(ctx: click.Context) -> None:
    """Reset the cluster and control plane to a clean test baseline."""
    try:
        config = load_config(ctx.obj["config_path"])
    except (ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error:[/red] Invalid configuration: {e}")
        sys.exit(1)

    services = FixtureServices.from_config(config)
    with console.status("Resetting test environment..."):
        try:
            services.environment.ensure_clean_state()
        except FixtureError as e:
            console.print(f"[red]Error:[/red] {e.message}")
            sys.exit(1)

    console.print(
        f"[green]✓[/green] Clean state (deployment namespace: {config.deployment_namespace})"
    )


@cli.group()
def config() -> None:
    """Manage fixture configuration."""
    pass


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show resolved configuration and where each value came from."""
    try:
        loaded = load_config(ctx.obj["config_path"])
    except (ValueError, yaml.YAMLError) as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        sys.exit(1)

    values = loaded.to_dict()
    sources = {key: loaded.get_source(key) for key in values}
    source_file = ctx.obj["config_path"] or str(get_config_path())

    if ctx.obj["json_output"]:
        data: dict[str, Any] = {"file": source_file, "values": values, "sources": sources}
        click.echo(json.dumps(data, indent=2))
        return

    click.echo("gitops-e2e Configuration")
    click.echo(f"File: {source_file}\n")
    for key, value in values.items():
        click.echo(f"  {key}: {value}  ({sources[key]})")


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def config_set(ctx: click.Context, key: str, value: str) -> None:
    """Set a configuration value in the config file."""
    if key not in config_keys():
        click.echo(f"Error: Unknown key '{key}'", err=True)
        click.echo(f"\nValid keys:\n  {', '.join(config_keys())}")
        sys.exit(1)

    # kept verbatim; load_config converts types on read
    save_config(key, value, ctx.obj["config_path"])
    click.echo(f"Set {key} = {value}")


@config.command("unset")
@click.argument("key")
@click.pass_context
def config_unset(ctx: click.Context, key: str) -> None:
    """Remove a configuration value from the config file."""
    if unset_config(key, ctx.obj["config_path"]):
        click.echo(f"Unset {key}")
    else:
        click.echo(f"{key} is not set in the config file")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
