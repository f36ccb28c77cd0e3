"""Tests for the command line interface."""

from __future__ import annotations

import csv
import json
import os
from pathlib import Path

from conftest import make_files, tree_snapshot
from extsort.main import EXIT_FATAL, EXIT_OK, EXIT_PARTIAL, main


def test_cli_organizes_and_prints_moves(example_root: Path, capsys) -> None:
    code = main([str(example_root)])
    out, err = capsys.readouterr()

    assert code == EXIT_OK
    lines = out.splitlines()
    assert f"a.txt -> {os.path.join('txt', 'a.txt')}" in lines
    assert f".gitignore -> {os.path.join('noext', '.gitignore')}" in lines
    assert lines[-1] == "planned=4 moved=4 skipped=0 failed=0"
    assert err == ""


def test_cli_empty_directory_is_success(root: Path, capsys) -> None:
    assert main([str(root)]) == EXIT_OK
    assert capsys.readouterr().out.strip() == "planned=0 moved=0 skipped=0 failed=0"


def test_cli_missing_root_exits_1(tmp_path: Path, capsys) -> None:
    code = main([str(tmp_path / "nope")])
    err = capsys.readouterr().err

    assert code == EXIT_FATAL
    assert "does not exist" in err


def test_cli_file_root_exits_1(tmp_path: Path, capsys) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x")

    assert main([str(target)]) == EXIT_FATAL
    assert "not a directory" in capsys.readouterr().err


def test_cli_partial_failure_exits_2(root: Path, capsys) -> None:
    make_files(root, "noext", "a.txt")

    code = main([str(root)])
    out, err = capsys.readouterr()

    assert code == EXIT_PARTIAL
    assert "noext: cannot create directory" in err
    assert out.splitlines()[-1] == "planned=2 moved=1 skipped=0 failed=1"


def test_cli_dry_run_prints_plan_and_changes_nothing(example_root: Path, capsys) -> None:
    before = tree_snapshot(example_root)

    code = main([str(example_root), "--dry-run"])
    out = capsys.readouterr().out

    assert code == EXIT_OK
    assert tree_snapshot(example_root) == before
    lines = out.splitlines()
    assert f"b.TXT -> {os.path.join('txt', 'b.TXT')}" in lines
    assert f"c -> {os.path.join('noext', 'c')}" in lines
    assert lines[-1] == "[dry-run] planned=4 moved=4 skipped=0 failed=0"


def test_cli_defaults_to_current_directory(example_root: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(example_root)

    assert main([]) == EXIT_OK
    assert sorted(os.listdir(str(example_root))) == ["noext", "txt"]


def test_cli_default_root_from_config(example_root: Path, tmp_path: Path, capsys) -> None:
    cfg = tmp_path / "settings.json"
    cfg.write_text(json.dumps({"organizer": {"default_root": str(example_root)}}))

    assert main(["--config", str(cfg)]) == EXIT_OK
    assert (example_root / "txt" / "a.txt").exists()


def test_cli_invalid_config_exits_1(example_root: Path, tmp_path: Path, capsys) -> None:
    cfg = tmp_path / "settings.json"
    cfg.write_text(json.dumps({"organizer": {"noext_key": "No.Ext"}}))

    code = main([str(example_root), "--config", str(cfg)])

    assert code == EXIT_FATAL
    assert "Configuration error" in capsys.readouterr().err
    assert (example_root / "a.txt").exists()


def test_cli_json_report(example_root: Path, tmp_path: Path, capsys) -> None:
    report_path = tmp_path / "out" / "report.json"

    assert main([str(example_root), "--report", str(report_path)]) == EXIT_OK

    payload = json.loads(report_path.read_text(encoding="utf-8"))
    assert payload["totals"] == {"planned": 4, "moved": 4, "skipped": 0, "failed": 0}
    assert payload["dry_run"] is False
    assert {Path(m["target_path"]).parent.name for m in payload["moves"]} == {"txt", "noext"}


def test_cli_csv_report_lists_failures(root: Path, tmp_path: Path, capsys) -> None:
    make_files(root, "noext", "a.txt")
    report_path = tmp_path / "report.csv"

    main([str(root), "--report", str(report_path), "--report-format", "csv"])

    with open(report_path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    statuses = {row["name"]: row["status"] for row in rows}
    assert statuses == {"a.txt": "moved", "noext": "failed"}


def test_cli_move_directories_flag(root: Path, capsys) -> None:
    (root / "Old Stuff").mkdir()

    assert main([str(root), "--move-directories"]) == EXIT_OK
    assert (root / "noext" / "Old Stuff").is_dir()


def test_cli_version(capsys) -> None:
    assert main(["--version"]) == EXIT_OK
    assert capsys.readouterr().out.startswith("Extension Sorter v")


def test_cli_json_logging_goes_to_stderr(tmp_path: Path, capsys) -> None:
    main([str(tmp_path / "missing"), "--log-json"])
    err_lines = [line for line in capsys.readouterr().err.splitlines() if line.startswith("{")]

    record = json.loads(err_lines[0])
    assert record["level"] == "ERROR"
    assert record["error"]["error_code"] == "ROOT_NOT_FOUND"


def test_cli_unsearchable_root_exits_1(example_root: Path, monkeypatch, capsys) -> None:
    real_exists = Path.exists

    def exists(self, *args, **kwargs):
        if str(self) == str(example_root):
            raise PermissionError(13, "Permission denied", str(self))
        return real_exists(self, *args, **kwargs)

    monkeypatch.setattr(Path, "exists", exists)

    code = main([str(example_root)])
    err = capsys.readouterr().err

    assert code == EXIT_FATAL
    assert "Error: Permission denied" in err
    assert "Traceback" not in err
    assert (example_root / "a.txt").exists()


def test_cli_empty_root_argument_exits_1(example_root: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(example_root)

    assert main([""]) == EXIT_FATAL
    assert "Root directory is empty" in capsys.readouterr().err
    assert sorted(os.listdir(str(example_root))) == [".gitignore", "a.txt", "b.TXT", "c"]
