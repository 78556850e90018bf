#!/usr/bin/env python3
"""
Utility functions for the emsecp build orchestrator
Command execution, console output, and file helpers
"""

import os
import shutil
from pathlib import Path
from typing import Iterable, Mapping, Optional

import sh
from rich.console import Console

from .exceptions import CommandFailedError

console = Console(force_terminal=True, markup=True)
print = console.print  # route legacy prints through Rich


def command_exists(cmd: str) -> bool:
    """Check whether a command/binary is available on the system."""
    if "/" in cmd or "\\" in cmd:
        cmd_path = Path(cmd)
        return cmd_path.exists() and os.access(cmd_path, os.X_OK)
    return shutil.which(cmd) is not None


def child_environment(overrides: Optional[Mapping[str, str]] = None) -> dict:
    """Return a copy of the current environment with overrides applied."""
    env = os.environ.copy()
    if overrides:
        env.update(overrides)
    return env


def _echo(line: str) -> None:
    console.out(line.rstrip("\n"), highlight=False)


def run_command(cmd, description="", cwd=None, env_overrides=None) -> None:
    """
    Execute command, streaming its output to the console

    Args:
        cmd: Command to execute (list of strings)
        description: Description of the command for output
        cwd: Working directory for command execution
        env_overrides: Variables added to the inherited environment

    Raises:
        CommandFailedError: If the command is missing or exits non-zero
    """
    argv = [str(arg) for arg in cmd]
    print(f"[bold]{description or ' '.join(argv)}[/]")

    try:
        program = sh.Command(argv[0])
    except sh.CommandNotFound:
        print(f"[red]Error: Command not found: {argv[0]}[/]")
        raise CommandFailedError(argv, 127)

    kwargs = {
        "_env": child_environment(env_overrides),
        "_out": _echo,
        "_err_to_out": True,
    }
    if cwd:
        kwargs["_cwd"] = str(cwd)

    try:
        program(*argv[1:], **kwargs)
    except sh.ErrorReturnCode as e:
        # Signals come back as negative exit codes
        exit_code = e.exit_code if e.exit_code > 0 else 128 - e.exit_code
        print(f"[red]Error: Command failed with exit code {exit_code}[/]")
        raise CommandFailedError(argv, exit_code) from e


def remove_files(paths: Iterable[Path]) -> list:
    """Delete files if present; a missing file is not an error. Returns removed paths."""
    removed = []
    for path in paths:
        try:
            path.unlink()
        except FileNotFoundError:
            continue
        removed.append(path)
    return removed
