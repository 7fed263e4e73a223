"""Map provisioning failures to an error line and an exit code"""

import subprocess
from contextlib import contextmanager

import click

from keeldev.errors import ProvisionError
from keeldev.output import log_error


@contextmanager
def exit_on_failure(ctx: click.Context):
    try:
        yield
    except ProvisionError as e:
        log_error(str(e))
        ctx.exit(e.exit_code)
    except subprocess.CalledProcessError as e:
        cmd = e.cmd if isinstance(e.cmd, str) else " ".join(e.cmd)
        log_error(f"Command failed with code {e.returncode}: {cmd}")
        ctx.exit(e.returncode or 1)
