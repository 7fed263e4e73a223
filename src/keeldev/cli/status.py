"""Status command"""

import click
from rich.table import Table

from keeldev.cli.errors import exit_on_failure
from keeldev.output import console


@click.command()
@click.pass_context
def status(ctx):
    """Show prerequisites and cluster state"""
    provisioner = ctx.obj["provisioner"]

    with exit_on_failure(ctx):
        rows = provisioner.status()

    table = Table(title="Keel development cluster", show_header=True)
    table.add_column("Check", style="cyan")
    table.add_column("Status")
    table.add_column("Detail")

    all_ok = True
    for name, ok, detail in rows:
        table.add_row(name, "[green]✓[/green]" if ok else "[red]✗[/red]", detail)
        all_ok = all_ok and ok

    console.print(table)

    if not all_ok:
        console.print("\n[yellow]Run 'keel-dev up' to provision the cluster.[/yellow]")
