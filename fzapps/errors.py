from __future__ import annotations

from pathlib import Path


class LauncherError(RuntimeError):
    """Base class for every failure fzapps reports."""


class DirectoryUnavailable(LauncherError):
    def __init__(self, path: Path, reason: str = "not a directory") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Skipping {path}: {reason}")


class UnreadableFile(LauncherError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Fail reading file {path}: {reason}")


class MissingRequiredKey(LauncherError):
    def __init__(self, path: Path, key: str) -> None:
        self.path = path
        self.key = key
        super().__init__(f"{path} has no {key}= line")


class PickerUnavailable(LauncherError):
    def __init__(self, picker: str, reason: str) -> None:
        self.picker = picker
        self.reason = reason
        super().__init__(f"Cannot start picker '{picker}': {reason}")


class SpawnFailed(LauncherError):
    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        self.reason = reason
        super().__init__(f"Failed to launch '{command}': {reason}")
