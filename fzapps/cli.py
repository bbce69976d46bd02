from __future__ import annotations

import argparse
import sys

from .config import SearchConfig
from .detect import DiscoveryResult, discover_entries, display_names
from .errors import PickerUnavailable, SpawnFailed, UnreadableFile
from .launch import run_detached_command
from .picker import DEFAULT_PICKER, run_picker


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fzapps",
        description="Pick an installed desktop application with fzf and launch it.",
    )
    parser.add_argument("--list", action="store_true", help="Print detected apps and exit.")
    parser.add_argument("--dry-run", action="store_true", help="Show the command without running it.")
    parser.add_argument("--verbose", action="store_true", help="Report skipped files and directories.")
    parser.add_argument(
        "--picker",
        default=DEFAULT_PICKER,
        help="Picker command reading choices on stdin (default: fzf).",
    )
    parser.add_argument(
        "--data-home",
        default=None,
        help="Override XDG_DATA_HOME for this run.",
    )
    parser.add_argument(
        "--data-dirs",
        default=None,
        help="Override XDG_DATA_DIRS (colon-separated) for this run.",
    )
    return parser


def _print(text: str, verbose: bool = False) -> None:
    if verbose:
        print(text)


def _info(message: str) -> None:
    print(f"INFO: {message}")


def _warn(message: str) -> None:
    print(f"WARN: {message}")


def _error(message: str) -> None:
    print(f"ERROR: {message}", file=sys.stderr)


def _report_issues(result: DiscoveryResult, verbose: bool) -> None:
    for issue in result.issues:
        if isinstance(issue, UnreadableFile):
            _error(str(issue))
        elif verbose:
            _warn(str(issue))


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    config = SearchConfig.from_env().with_overrides(
        data_home=args.data_home,
        data_dirs=args.data_dirs,
    )
    _print(f"searching: {', '.join(str(path) for path in config.base_dirs())}", args.verbose)

    result = discover_entries(config)
    _report_issues(result, args.verbose)
    registry = result.registry
    names = display_names(registry)

    if args.list:
        _info(f"Detected applications: {len(names)}")
        for name in names:
            print(f"- {name}")
        return 0

    if not names:
        _warn("No installed desktop applications detected.")
        return 0

    try:
        selection = run_picker(names, picker=args.picker)
    except PickerUnavailable as exc:
        _error(str(exc))
        return 2

    if selection is None:
        print("No Selection")
        return 0

    entry = registry.get(selection)
    if entry is None:
        print("No cmd")
        return 0

    print(f"Running {entry.exec_cmd}")
    _print(f"from: {entry.desktop_file}", args.verbose)
    if args.dry_run:
        return 0
    try:
        launched = run_detached_command(entry.exec_cmd)
    except SpawnFailed as exc:
        _error(str(exc))
        return 3
    _print(f"pid: {launched.pid}", args.verbose)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
