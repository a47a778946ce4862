"""Shell and git utilities.

Provides simple wrappers around subprocess calls for running git queries
and forwarded build commands, plus diagnostic output helpers. Every call
returns a CommandResult; callers decide what a non-zero exit means.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from .errors import GitNotFoundError
from .models import CommandResult

_verbose = False


def set_verbose(enabled: bool) -> None:
    """Enable or disable debug() output for the rest of the process."""
    global _verbose
    _verbose = enabled


def debug(msg: str) -> None:
    """Print a diagnostic line to stderr when verbose mode is on."""
    if _verbose:
        print(f"debug: {msg}", file=sys.stderr)


def run_captured(*args: str, cwd: Path | None = None) -> CommandResult:
    """Run a command and capture its output.

    Args:
        *args: Command and arguments (e.g., "git", "diff", "--name-only").
        cwd: Directory to run in. Defaults to the current directory.

    Returns:
        CommandResult with returncode, stdout and stderr as text. Bytes
        that are not valid UTF-8 (e.g. legacy file names) are kept as
        surrogate escapes so they map back to the same path on disk.

    Raises:
        FileNotFoundError: If the executable does not exist.
    """
    result = subprocess.run(
        list(args),
        cwd=cwd,
        capture_output=True,
        text=True,
        errors="surrogateescape",
    )
    return CommandResult(
        args=list(args),
        returncode=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
    )


def git(*args: str, cwd: Path | None = None) -> CommandResult:
    """Run a git command in ``cwd`` and capture its output.

    Raises:
        GitNotFoundError: If git is not installed.
    """
    debug(f"git {' '.join(args)} (in {cwd or Path.cwd()})")
    try:
        return run_captured("git", *args, cwd=cwd)
    except FileNotFoundError as exc:
        raise GitNotFoundError() from exc


def run_tool(*args: str, cwd: Path | None = None) -> CommandResult:
    """Run a forwarded build command attached to the terminal.

    Unlike git(), this doesn't capture output - it streams directly to
    the terminal so users keep colors and progress bars. A missing
    executable is reported as exit status 127, the way a shell would.
    """
    try:
        completed = subprocess.run(list(args), cwd=cwd)
    except FileNotFoundError:
        return CommandResult(
            args=list(args),
            returncode=127,
            stderr=f"{args[0]}: command not found",
        )
    return CommandResult(args=list(args), returncode=completed.returncode)
