from __future__ import annotations

import subprocess
from dataclasses import dataclass

from .errors import SpawnFailed


DEFAULT_GRACE = 0.05
# sh exit codes for "found but not executable" and "not found".
SHELL_FAILURE_CODES = (126, 127)


@dataclass
class LaunchResult:
    command: str
    pid: int
    returncode: int | None


def run_detached_command(command: str, grace: float = DEFAULT_GRACE) -> LaunchResult:
    """Start ``command`` through ``sh`` in its own session and return.

    Output is discarded and the child is never supervised. Within ``grace``
    seconds an immediate shell failure is reported as ``SpawnFailed``;
    anything still running after that counts as launched.
    """
    try:
        process = subprocess.Popen(
            ["sh", "-c", command],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as exc:
        raise SpawnFailed(command, str(exc)) from exc

    try:
        returncode: int | None = process.wait(timeout=grace)
    except subprocess.TimeoutExpired:
        returncode = None

    if returncode in SHELL_FAILURE_CODES:
        reason = "command not found" if returncode == 127 else "command not executable"
        raise SpawnFailed(command, reason)
    return LaunchResult(command=command, pid=process.pid, returncode=returncode)
