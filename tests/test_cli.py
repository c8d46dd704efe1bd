"""Tests for the hubstate command line interface."""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from hubstate.cli.__main__ import build_parser, cmd_reset, cmd_show, main
from hubstate.migrations import CURRENT_VERSION


@pytest.fixture
def db(tmp_path):
    return str(tmp_path / "cli" / "state.db")


def run(db, *argv):
    return main(["--db", db, *argv])


class TestParser:
    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_global_options(self):
        args = build_parser().parse_args(["--db", "x.db", "--key", "k", "-v", "status", "-j"])
        assert (args.db, args.key, args.verbose, args.command, args.json) == (
            "x.db",
            "k",
            True,
            "status",
            True,
        )


class TestStatusCommand:
    def test_first_run(self, db, capsys):
        assert run(db, "status") == 0
        assert "No stored state" in capsys.readouterr().out

    def test_after_show(self, db, capsys):
        run(db, "show")
        capsys.readouterr()
        assert run(db, "status") == 0
        out = capsys.readouterr().out
        assert f"v{CURRENT_VERSION} (envelope)" in out
        assert "Pending: none" in out

    def test_lists_other_keys(self, db, capsys):
        run(db, "show")
        run(db, "--key", "archive", "show")
        capsys.readouterr()
        assert run(db, "status") == 0
        assert "Others:  archive" in capsys.readouterr().out

    def test_json(self, db, capsys):
        assert run(db, "status", "--json") == 0
        status = json.loads(capsys.readouterr().out)
        assert status["stored"] is False
        assert status["store"] == "SQLiteStore"


class TestShowCommand:
    def test_summary(self, db, capsys):
        assert run(db, "show") == 0
        out = capsys.readouterr().out
        assert f"State v{CURRENT_VERSION}" in out
        assert "users: 2 items" in out
        assert "isLoggedIn: false" in out

    def test_json(self, db, capsys):
        assert run(db, "show", "--json") == 0
        data = json.loads(capsys.readouterr().out)
        assert data["currentUserId"] == "u_paul"

    def test_field(self, db, capsys):
        assert run(db, "show", "--field", "currentUserId") == 0
        assert json.loads(capsys.readouterr().out) == "u_paul"

    def test_unknown_field(self, db, capsys):
        assert run(db, "show", "--field", "nope") == 1
        assert "No such field: nope" in capsys.readouterr().out

    def test_with_mock_controller(self, capsys):
        controller = MagicMock()
        controller.key = "k"
        controller.load.return_value.version = 13
        controller.load.return_value.keys.return_value = ["events"]
        controller.load.return_value.get.return_value = []

        args = SimpleNamespace(field=None, json=False)
        assert cmd_show(args, controller) == 0
        assert "events: 0 items" in capsys.readouterr().out


class TestExportRestoreCommands:
    def test_export_to_stdout(self, db, capsys):
        assert run(db, "export") == 0
        envelope = json.loads(capsys.readouterr().out)
        assert envelope["version"] == CURRENT_VERSION

    def test_export_then_restore(self, db, tmp_path, capsys):
        backup = tmp_path / "backup.json"
        envelope = {"version": CURRENT_VERSION, "data": {"clients": [{"id": "c1"}]}}
        backup.write_text(json.dumps(envelope))

        assert run(db, "restore", str(backup)) == 0
        assert "✓ Restored" in capsys.readouterr().out

        out_file = tmp_path / "exported.json"
        assert run(db, "export", "-o", str(out_file)) == 0
        exported = json.loads(out_file.read_text())
        assert exported["data"]["clients"] == [{"id": "c1"}]

    def test_restore_missing_file(self, db, tmp_path, capsys):
        assert run(db, "restore", str(tmp_path / "missing.json")) == 1
        assert "✗ Cannot read" in capsys.readouterr().out

    def test_restore_garbage(self, db, tmp_path, capsys):
        bad = tmp_path / "bad.json"
        bad.write_text("not an envelope")
        assert run(db, "restore", str(bad)) == 1
        assert "✗ Restore failed" in capsys.readouterr().out


class TestResetCommand:
    def test_requires_confirmation(self, capsys):
        controller = MagicMock()
        assert cmd_reset(SimpleNamespace(yes=False), controller) == 1
        controller.reset.assert_not_called()
        assert "Refusing to reset" in capsys.readouterr().out

    def test_reset(self, db, tmp_path, capsys):
        backup = tmp_path / "backup.json"
        backup.write_text(json.dumps({"version": CURRENT_VERSION, "data": {"clients": [{}]}}))
        run(db, "restore", str(backup))

        assert run(db, "reset", "--yes") == 0
        capsys.readouterr()
        run(db, "show", "--field", "clients")
        assert json.loads(capsys.readouterr().out) == []


class TestRefreshCommand:
    def test_refresh(self, db, capsys):
        assert run(db, "refresh") == 0
        assert f"✓ State refreshed at v{CURRENT_VERSION}" in capsys.readouterr().out

    def test_custom_key(self, db, capsys):
        run(db, "--key", "other", "refresh")
        capsys.readouterr()
        run(db, "status", "--json")
        assert json.loads(capsys.readouterr().out)["stored"] is False
