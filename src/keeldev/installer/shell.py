"""Thin wrapper over subprocess for external commands"""

import subprocess

from keeldev.errors import PrerequisiteError


def run_command(
    cmd: list[str],
    *,
    check: bool = True,
    capture_output: bool = False,
    quiet: bool = False,
) -> subprocess.CompletedProcess:
    """Run a command and return the result.

    ``capture_output`` collects stdout/stderr as text; ``quiet`` discards
    both instead. With neither, output goes straight to the terminal.
    A missing executable raises ``PrerequisiteError`` with exit code 127.
    """
    kwargs = {}
    if quiet:
        kwargs["stdout"] = subprocess.DEVNULL
        kwargs["stderr"] = subprocess.DEVNULL
    elif capture_output:
        kwargs["capture_output"] = True

    try:
        return subprocess.run(cmd, check=check, text=True, **kwargs)
    except FileNotFoundError as e:
        raise PrerequisiteError(f"{cmd[0]} not found in PATH", exit_code=127) from e
