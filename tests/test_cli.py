"""Tests for the chatarchive command line."""

import json

from chatarchive.cli import main
from tests.fixtures import export_bytes, make_export_conversation


def _write_export(tmp_path, conversations):
    path = tmp_path / "conversations.json"
    path.write_bytes(export_bytes(conversations))
    return path


class TestImportCommand:
    def test_import_then_reimport(self, tmp_path, capsys):
        export = _write_export(tmp_path, [
            make_export_conversation(conv_id="c1"),
            make_export_conversation(conv_id="c2"),
            make_export_conversation(conv_id="c3", mapping={}),
        ])
        db = str(tmp_path / "archive.db")

        assert main(["--db", db, "import", str(export)]) == 0
        assert "Imported 2 conversations (2 new, 0 updated)" in capsys.readouterr().out

        assert main(["--db", db, "import", str(export)]) == 0
        assert "Imported 2 conversations (0 new, 2 updated)" in capsys.readouterr().out

    def test_missing_export_fails(self, tmp_path):
        db = str(tmp_path / "archive.db")
        assert main(["--db", db, "import", str(tmp_path / "missing.json")]) == 1

    def test_malformed_export_fails(self, tmp_path):
        path = tmp_path / "conversations.json"
        path.write_text("{}")
        db = str(tmp_path / "archive.db")
        assert main(["--db", db, "import", str(path)]) == 1


class TestDumpAndRestore:
    def test_dump_then_restore_into_fresh_db(self, tmp_path, capsys):
        export = _write_export(tmp_path, [make_export_conversation(conv_id="c1")])
        first_db = str(tmp_path / "first.db")
        snapshot = tmp_path / "backup.json"

        assert main(["--db", first_db, "import", str(export)]) == 0
        assert main(["--db", first_db, "dump", str(snapshot)]) == 0
        data = json.loads(snapshot.read_text())
        assert [c["id"] for c in data["conversations"]] == ["c1"]
        assert len(data["conversations"][0]["messages"]) == 4

        second_db = str(tmp_path / "second.db")
        assert main(["--db", second_db, "restore", str(snapshot)]) == 0
        assert "Restored 1 conversations" in capsys.readouterr().out

        again = tmp_path / "again.json"
        assert main(["--db", second_db, "dump", str(again)]) == 0
        assert json.loads(again.read_text()) == data

    def test_restore_bad_snapshot_fails(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("nope")
        assert main(["--db", str(tmp_path / "a.db"), "restore", str(path)]) == 1
