from __future__ import annotations

import shlex
import subprocess
from shutil import which
from typing import Sequence

from .errors import PickerUnavailable


DEFAULT_PICKER = "fzf"
FZF_ARGS = ("--layout=default", "--color=dark")


def picker_command(picker: str = DEFAULT_PICKER) -> list[str]:
    command = shlex.split(picker)
    if not command:
        raise PickerUnavailable(picker, "empty picker command")
    if command == [DEFAULT_PICKER]:
        command.extend(FZF_ARGS)
    return command


def ensure_picker_available(command: Sequence[str]) -> None:
    if which(command[0]) is None:
        raise PickerUnavailable(command[0], "command not found in PATH")


def run_picker(names: Sequence[str], picker: str = DEFAULT_PICKER) -> str | None:
    """Let the user pick one of ``names`` in an external fuzzy finder.

    Returns the chosen line, or None when the picker was cancelled or
    printed nothing. The picker draws on the terminal; only its stdin and
    stdout are piped.
    """
    command = picker_command(picker)
    ensure_picker_available(command)
    try:
        completed = subprocess.run(
            command,
            input="\n".join(names) + "\n",
            stdout=subprocess.PIPE,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise PickerUnavailable(command[0], str(exc)) from exc

    # fzf: 1 means no match, 130 means the user hit escape or ctrl-c.
    if completed.returncode != 0:
        return None
    selection = completed.stdout.rstrip("\n")
    return selection or None
