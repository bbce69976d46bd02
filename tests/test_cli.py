from pathlib import Path
from unittest.mock import patch

from fzapps.cli import main
from fzapps.errors import PickerUnavailable, SpawnFailed
from fzapps.launch import LaunchResult


def _share(tmp_path: Path) -> Path:
    share = tmp_path / "share"
    apps = share / "applications"
    apps.mkdir(parents=True)
    (apps / "test.desktop").write_text(
        "[Desktop Entry]\nType=Application\nName=Test\nExec=test-bin %f\n",
        encoding="utf-8",
    )
    (apps / "broken.desktop").write_text(
        "[Desktop Entry]\nType=Application\nName=Broken\n",
        encoding="utf-8",
    )
    return share


def _args(tmp_path: Path, *extra: str) -> list[str]:
    share = _share(tmp_path)
    return ["--data-home", str(share), "--data-dirs", str(tmp_path / "nothing"), *extra]


def test_selection_launches_detached(tmp_path: Path, capsys) -> None:
    launched = LaunchResult(command="test-bin", pid=100, returncode=None)
    with patch("fzapps.cli.run_picker", return_value="Test (test-bin)") as picker, patch(
        "fzapps.cli.run_detached_command", return_value=launched
    ) as spawn:
        rc = main(_args(tmp_path))
    out = capsys.readouterr().out
    assert rc == 0
    assert picker.call_args.args[0] == ["Test (test-bin)"]
    spawn.assert_called_once_with("test-bin")
    assert "Running test-bin" in out


def test_cancelled_picker_does_not_spawn(tmp_path: Path, capsys) -> None:
    with patch("fzapps.cli.run_picker", return_value=None), patch(
        "fzapps.cli.run_detached_command"
    ) as spawn:
        rc = main(_args(tmp_path))
    assert rc == 0
    assert "No Selection" in capsys.readouterr().out
    spawn.assert_not_called()


def test_unknown_selection_prints_no_cmd(tmp_path: Path, capsys) -> None:
    with patch("fzapps.cli.run_picker", return_value="typed text"), patch(
        "fzapps.cli.run_detached_command"
    ) as spawn:
        rc = main(_args(tmp_path))
    assert rc == 0
    assert "No cmd" in capsys.readouterr().out
    spawn.assert_not_called()


def test_missing_picker_is_fatal(tmp_path: Path, capsys) -> None:
    with patch("fzapps.cli.run_picker", side_effect=PickerUnavailable("fzf", "command not found in PATH")):
        rc = main(_args(tmp_path))
    assert rc == 2
    assert "ERROR: Cannot start picker 'fzf'" in capsys.readouterr().err


def test_spawn_failure_reported(tmp_path: Path, capsys) -> None:
    with patch("fzapps.cli.run_picker", return_value="Test (test-bin)"), patch(
        "fzapps.cli.run_detached_command", side_effect=SpawnFailed("test-bin", "command not found")
    ):
        rc = main(_args(tmp_path))
    assert rc == 3
    assert "command not found" in capsys.readouterr().err


def test_dry_run_skips_spawn(tmp_path: Path, capsys) -> None:
    with patch("fzapps.cli.run_picker", return_value="Test (test-bin)"), patch(
        "fzapps.cli.run_detached_command"
    ) as spawn:
        rc = main(_args(tmp_path, "--dry-run"))
    assert rc == 0
    assert "Running test-bin" in capsys.readouterr().out
    spawn.assert_not_called()


def test_list_prints_names(tmp_path: Path, capsys) -> None:
    with patch("fzapps.cli.run_picker") as picker:
        rc = main(_args(tmp_path, "--list"))
    out = capsys.readouterr().out
    assert rc == 0
    assert "Detected applications: 1" in out
    assert "- Test (test-bin)" in out
    picker.assert_not_called()


def test_verbose_reports_skipped(tmp_path: Path, capsys) -> None:
    rc = main(_args(tmp_path, "--list", "--verbose"))
    out = capsys.readouterr().out
    assert rc == 0
    assert "has no Exec= line" in out
    assert "does not exist" in out


def test_unreadable_file_goes_to_stderr(tmp_path: Path, capsys) -> None:
    args = _args(tmp_path, "--list")
    (tmp_path / "share" / "applications" / "bad.desktop").write_bytes(b"Name=\xff\n")
    rc = main(args)
    captured = capsys.readouterr()
    assert rc == 0
    assert "ERROR: Fail reading file" in captured.err
    assert "- Test (test-bin)" in captured.out


def test_no_apps_skips_picker(tmp_path: Path, capsys) -> None:
    with patch("fzapps.cli.run_picker") as picker:
        rc = main(["--data-home", str(tmp_path / "a"), "--data-dirs", str(tmp_path / "b")])
    assert rc == 0
    assert "No installed desktop applications detected." in capsys.readouterr().out
    picker.assert_not_called()
