from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
import re
from typing import Iterable

from .config import SearchConfig
from .errors import DirectoryUnavailable, LauncherError, MissingRequiredKey, UnreadableFile


DESKTOP_EXTENSION = ".desktop"
NAME_PREFIX = "Name="
EXEC_PREFIX = "Exec="

# Field codes a desktop environment would substitute; meaningless when launching by hand.
PLACEHOLDERS = (" %f", " %F", " %u", " %U", " %d", " %D", " %n", " %N", " %i", " %c", " %k")
_PLACEHOLDER_RE = re.compile("|".join(re.escape(token) for token in PLACEHOLDERS))


@dataclass(frozen=True)
class DesktopEntry:
    name: str
    exec_cmd: str
    desktop_file: str = ""


@dataclass
class DiscoveryResult:
    registry: dict[str, DesktopEntry] = field(default_factory=dict)
    issues: list[LauncherError] = field(default_factory=list)


def _is_dir(path: Path) -> bool:
    # Any OSError, EACCES included, means "not a directory".
    return os.path.isdir(path)


def _is_file(path: Path) -> bool:
    return os.path.isfile(path)


def find_desktop_files(
    root: Path,
    extension: str = DESKTOP_EXTENSION,
    issues: list[LauncherError] | None = None,
) -> list[Path]:
    """Collect every file ending in ``extension`` below ``root``, at any depth.

    A missing root yields an empty list. Symlinked directories are followed,
    but each resolved directory is listed once, so link cycles terminate.
    """
    if not _is_dir(root):
        return []

    found: list[Path] = []
    visited: set[Path] = set()
    pending = [root]
    while pending:
        directory = pending.pop()
        try:
            canonical = directory.resolve()
            if canonical in visited:
                continue
            visited.add(canonical)
            children = sorted(directory.iterdir())
        except OSError as exc:
            if issues is not None:
                issues.append(DirectoryUnavailable(directory, exc.strerror or str(exc)))
            continue
        subdirs: list[Path] = []
        for child in children:
            if _is_file(child) and child.suffix == extension:
                found.append(child)
            elif _is_dir(child):
                subdirs.append(child)
        pending.extend(reversed(subdirs))
    return found


def remove_placeholders(value: str) -> str:
    return _PLACEHOLDER_RE.sub("", value)


def parse_desktop_entry(path: Path) -> DesktopEntry:
    """Read ``Name=`` and ``Exec=`` from one desktop file.

    The first line of each kind wins; later ones (other locales, action
    groups) are ignored. Raises ``UnreadableFile`` or ``MissingRequiredKey``.
    """
    try:
        raw = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise UnreadableFile(path, str(exc)) from exc

    name: str | None = None
    exec_cmd: str | None = None
    # Split on \n only; a lone \r or other separator stays part of the value.
    for line in raw.split("\n"):
        if line.endswith("\r"):
            line = line[:-1]
        if name is None and line.startswith(NAME_PREFIX):
            name = line[len(NAME_PREFIX):]
        elif exec_cmd is None and line.startswith(EXEC_PREFIX):
            exec_cmd = line[len(EXEC_PREFIX):]
        if name is not None and exec_cmd is not None:
            break

    if name is None:
        raise MissingRequiredKey(path, "Name")
    if exec_cmd is None:
        raise MissingRequiredKey(path, "Exec")

    exec_cmd = remove_placeholders(exec_cmd)
    return DesktopEntry(
        name=f"{name} ({exec_cmd})",
        exec_cmd=exec_cmd,
        desktop_file=str(path),
    )


def build_registry(
    paths: Iterable[Path],
    issues: list[LauncherError] | None = None,
) -> dict[str, DesktopEntry]:
    registry: dict[str, DesktopEntry] = {}
    for path in paths:
        try:
            entry = parse_desktop_entry(path)
        except (UnreadableFile, MissingRequiredKey) as exc:
            if issues is not None:
                issues.append(exc)
            continue
        # Same display name from a later file replaces the earlier one.
        registry[entry.name] = entry
    return registry


def discover_entries(config: SearchConfig) -> DiscoveryResult:
    result = DiscoveryResult()
    paths: list[Path] = []
    for base_dir in config.base_dirs():
        if not _is_dir(base_dir):
            reason = "not a directory" if os.path.exists(base_dir) else "does not exist or is not reachable"
            result.issues.append(DirectoryUnavailable(base_dir, reason))
            continue
        paths.extend(find_desktop_files(base_dir, issues=result.issues))
    result.registry = build_registry(paths, issues=result.issues)
    return result


def display_names(registry: dict[str, DesktopEntry]) -> list[str]:
    return sorted(registry, key=lambda name: name.lower())
