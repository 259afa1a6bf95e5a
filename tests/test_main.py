"""Tests for the command-line entry point."""

import pytest

from wikidump_loader.__main__ import build_parser, run_application
from wikidump_loader.infrastructure.containers import Container


def test_parser_defaults_leave_settings_in_charge() -> None:
    args = build_parser().parse_args([])

    assert args.check_new is None
    assert args.locale is None


def test_container_prefers_cli_arguments(tmp_path) -> None:
    container = Container()
    container.cli_args.from_dict(
        {
            "check_new": False,
            "locale": "de",
            "storage_root": str(tmp_path),
            "manifest": None,
        }
    )

    try:
        service = container.snapshot_service()
        assert service.check_new is False
        assert container.locale() == "de"
        assert container.storage_root() == str(tmp_path)
        assert str(container.job_inputs().manifest_path).endswith("job_inputs.txt")
    finally:
        container.shutdown_resources()


def test_offline_run_registers_stored_snapshot(tmp_path, capsys) -> None:
    """An offline run should print and register the stored snapshot."""
    stored = tmp_path / "dumps" / "de" / "dewiki-latest-pages-articles.5.xml"
    stored.parent.mkdir(parents=True)
    stored.write_text("<mediawiki/>")
    manifest = tmp_path / "inputs.txt"
    args = build_parser().parse_args(
        [
            "--locale", "de_DE",
            "--storage-root", str(tmp_path / "dumps"),
            "--manifest", str(manifest),
            "--no-check-new",
        ]
    )

    run_application(args)

    assert capsys.readouterr().out.strip() == str(stored)
    assert manifest.read_text().splitlines() == [str(stored)]


def test_offline_run_without_snapshot_exits_with_error(tmp_path) -> None:
    args = build_parser().parse_args(
        [
            "--storage-root", str(tmp_path),
            "--manifest", str(tmp_path / "inputs.txt"),
            "--no-check-new",
        ]
    )

    with pytest.raises(SystemExit) as excinfo:
        run_application(args)

    assert excinfo.value.code == 1
    assert not (tmp_path / "inputs.txt").exists()
