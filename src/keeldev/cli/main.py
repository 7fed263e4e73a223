#!/usr/bin/env python3
"""keel-dev CLI - Main entry point"""

from pathlib import Path

import click

from keeldev.config.manager import DEFAULT_CONFIG_PATH, ConfigManager
from keeldev.installer.bootstrap import Provisioner
from keeldev.output import console


@click.group(invoke_without_command=True)
@click.option("--config", type=click.Path(dir_okay=False), help="Config file path")
@click.option("-v", "--verbose", is_flag=True, help="Echo external commands")
@click.pass_context
def cli(ctx, config, verbose):
    """Local Kubernetes cluster for Keel development.

    Without a subcommand, runs `up`.
    """
    ctx.ensure_object(dict)

    config_path = Path(config) if config else DEFAULT_CONFIG_PATH
    try:
        cfg = ConfigManager(config_path).load()
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}")

    if "provisioner" not in ctx.obj:
        ctx.obj["provisioner"] = Provisioner(cfg, verbose=verbose)

    if ctx.invoked_subcommand is None:
        ctx.invoke(up.up)


@cli.command()
def version():
    """Show version information"""
    from keeldev import __version__

    console.print(f"keel-dev version {__version__}")


# Import subcommands
from keeldev.cli import down, status, up

cli.add_command(up.up)
cli.add_command(down.down)
cli.add_command(status.status)


if __name__ == "__main__":
    cli()
