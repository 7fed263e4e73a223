"""Cluster creation command"""

import click

from keeldev.cli.errors import exit_on_failure


@click.command()
@click.pass_context
def up(ctx):
    """Create the kind cluster and wait for it to be Ready"""
    provisioner = ctx.obj["provisioner"]

    with exit_on_failure(ctx):
        provisioner.up()
