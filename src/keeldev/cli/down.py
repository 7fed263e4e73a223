"""Cluster teardown command"""

import click

from keeldev.cli.errors import exit_on_failure


@click.command()
@click.pass_context
def down(ctx):
    """Delete the kind cluster"""
    provisioner = ctx.obj["provisioner"]

    with exit_on_failure(ctx):
        provisioner.down()
