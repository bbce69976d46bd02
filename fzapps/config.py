from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping


APP_FOLDER = "applications"
DEFAULT_DATA_DIRS = "/usr/local/share:/usr/share"


def _default_data_home(environ: Mapping[str, str]) -> str:
    xdg_data_home = environ.get("XDG_DATA_HOME")
    if xdg_data_home is not None:
        return xdg_data_home
    return f"{environ.get('HOME', '')}/.local/share"


def _default_data_dirs(environ: Mapping[str, str]) -> str:
    xdg_data_dirs = environ.get("XDG_DATA_DIRS")
    if xdg_data_dirs is not None:
        return xdg_data_dirs
    return DEFAULT_DATA_DIRS


def split_data_dirs(raw: str) -> tuple[str, ...]:
    return tuple(raw.split(":"))


@dataclass(frozen=True)
class SearchConfig:
    """Where to look for desktop entries.

    Populated once at startup so discovery never reads the environment itself.
    """

    data_home: str
    data_dirs: tuple[str, ...]

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SearchConfig:
        env = os.environ if environ is None else environ
        return cls(
            data_home=_default_data_home(env),
            data_dirs=split_data_dirs(_default_data_dirs(env)),
        )

    def with_overrides(
        self,
        data_home: str | None = None,
        data_dirs: str | None = None,
    ) -> SearchConfig:
        return SearchConfig(
            data_home=self.data_home if data_home is None else data_home,
            data_dirs=self.data_dirs if data_dirs is None else split_data_dirs(data_dirs),
        )

    def base_dirs(self) -> list[Path]:
        # Not deduplicated: a directory reachable twice is scanned twice.
        dirs = [Path(self.data_home) / APP_FOLDER]
        dirs.extend(Path(entry) / APP_FOLDER for entry in self.data_dirs)
        return dirs
