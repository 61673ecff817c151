"""Tests for the update orchestration and reporting."""

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from cup.load_config import DEFAULT_CONFIG
from cup.models import FileInfo, RemoteIdentity
from cup.run_update import run_update, update_files
from cup.tag_resolver import TagResolutionError


def _write(path: Path, text: str) -> FileInfo:
    path.write_text(text, encoding="utf-8")
    return FileInfo(path=path, content=text)


def _resolve(identity: RemoteIdentity) -> str:
    tags = {"acme/widget": "v1.5.2", "acme/lib": "2.1.0"}
    if identity.identifier not in tags:
        msg = f"{identity.identifier} not found"
        raise TagResolutionError(msg)
    return tags[identity.identifier]


def test_update_files_across_batches(tmp_path: Path) -> None:
    """Verify that each file is updated and failures stay isolated."""
    files = [
        _write(tmp_path / "a.txt", "app_version = 1.4.0 // [cup] GitHub acme/widget\n"),
        _write(tmp_path / "b.json", '"lib": "2.0.0" // [cup] acme/lib\n'),
        _write(tmp_path / "c.txt", "x = 0.1.0 # [cup] acme/missing\n"),
        _write(tmp_path / "d.txt", "plain file\n"),
    ]

    report = update_files(files, {**DEFAULT_CONFIG, "workers": 2}, _resolve)

    assert (tmp_path / "a.txt").read_text(encoding="utf-8") == (
        "app_version = 1.5.2 // [cup] GitHub acme/widget\n"
    )
    assert (tmp_path / "b.json").read_text(encoding="utf-8") == (
        '"lib": "2.1.0" // [cup] acme/lib\n'
    )
    assert (tmp_path / "c.txt").read_text(encoding="utf-8") == (
        "x = 0.1.0 # [cup] acme/missing\n"
    )
    assert report.succeeded == 2
    assert report.failed == 1
    assert report.files_written == 2
    assert len(report.results) == 3


def test_update_files_without_targets() -> None:
    """Verify that a tree without annotations produces an empty report."""
    files = [FileInfo(path=Path("x"), content="nothing")]
    report = update_files(files, DEFAULT_CONFIG, _resolve)
    assert report.results == []
    assert report.summary() == "0 target(s) updated, 0 failed, 0 file(s) written"


def test_update_logs_each_target(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Verify per-target and per-file output."""
    f = tmp_path / "v.txt"
    files = [
        _write(
            f,
            "app_version = 1.4.0 // [cup] acme/widget\nlib = 1.0 # [cup] acme/nope\n",
        )
    ]

    with caplog.at_level(logging.INFO):
        update_files(files, DEFAULT_CONFIG, _resolve)

    assert f"{f}:1 → 1.5.2" in caplog.text
    assert f"{f}:2: acme/nope not found" in caplog.text
    assert f"Updated 1 target(s) in {f}" in caplog.text


def test_run_update_writes_json_report(tmp_path: Path) -> None:
    """Verify the full pipeline with a stubbed resolver and JSON report."""
    root = tmp_path / "repo"
    root.mkdir()
    deps = root / "deps.txt"
    deps.write_text("version = 1.0.0 # [cup] acme/lib\n", encoding="utf-8")
    report_path = tmp_path / "report.json"

    with patch("cup.run_update.make_resolve", return_value=_resolve):
        code = run_update(DEFAULT_CONFIG, root, report_path=report_path)

    assert code == 0
    assert (root / "deps.txt").read_text(encoding="utf-8") == (
        "version = 2.1.0 # [cup] acme/lib\n"
    )
    data = json.loads(report_path.read_text(encoding="utf-8"))
    assert data["meta"]["succeeded"] == 1
    target = data["files"][0]["targets"][0]
    assert target["identifier"] == "acme/lib"
    assert target["old_version"] == "1.0.0"
    assert target["new_version"] == "2.1.0"


def test_run_update_succeeds_when_every_target_fails(tmp_path: Path) -> None:
    """Verify that per-target failures do not change the exit status."""
    deps = tmp_path / "deps.txt"
    deps.write_text("x = 1.0 # [cup] acme/missing\n", encoding="utf-8")

    with patch("cup.run_update.make_resolve", return_value=_resolve):
        assert run_update(DEFAULT_CONFIG, tmp_path) == 0

    assert (tmp_path / "deps.txt").read_text(encoding="utf-8") == (
        "x = 1.0 # [cup] acme/missing\n"
    )


def test_unexpected_resolver_error_does_not_abort_run(tmp_path: Path) -> None:
    """Verify that a resolver crash in one file leaves other files updated."""
    files = [
        _write(tmp_path / "bad.txt", "x = 1.0.0 # [cup] acme/bad\n"),
        _write(tmp_path / "good.txt", "y = 1.0.0 # [cup] acme/good\n"),
    ]

    def resolve(identity: RemoteIdentity) -> str:
        if identity.identifier == "acme/bad":
            msg = "boom"
            raise RuntimeError(msg)
        return "2.0.0"

    report = update_files(files, DEFAULT_CONFIG, resolve)

    assert (tmp_path / "good.txt").read_text(encoding="utf-8") == (
        "y = 2.0.0 # [cup] acme/good\n"
    )
    assert (tmp_path / "bad.txt").read_text(encoding="utf-8") == (
        "x = 1.0.0 # [cup] acme/bad\n"
    )
    assert report.succeeded == 1
    assert report.failed == 1


def test_batch_crash_is_reported_per_file(tmp_path: Path) -> None:
    """Verify that an error escaping a file's batch becomes that file's error."""
    files = [_write(tmp_path / "v.txt", "x = 1.0.0 # [cup] acme/lib\n")]

    with patch("cup.run_update.update_file_batch", side_effect=RuntimeError("boom")):
        report = update_files(files, DEFAULT_CONFIG, _resolve)

    assert len(report.results) == 1
    assert report.results[0].error == "unexpected error: boom"


def test_up_to_date_file_is_not_reported_as_updated(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Verify that no write is claimed when the version already matches."""
    f = tmp_path / "v.txt"
    files = [_write(f, '"lib": "2.1.0" // [cup] acme/lib\n')]

    with caplog.at_level(logging.INFO):
        report = update_files(files, DEFAULT_CONFIG, _resolve)

    assert report.files_written == 0
    assert "Updated 1 target(s)" not in caplog.text
    assert f"{f} already up to date" in caplog.text
