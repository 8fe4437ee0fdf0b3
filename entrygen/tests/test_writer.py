"""Tests for entry file writing."""

import os
import time

import pytest
from entrygen.core.errors import EntryWriteError
from entrygen.core.writer import EntryWriter


class TestEntryWriter:
    def test_writes_entries(self, tmp_path):
        writer = EntryWriter(str(tmp_path / "temp"))

        paths = writer.write({"frontend": "front", "backend": "back"})

        assert paths == [
            str(tmp_path / "temp" / "frontend-entry.js"),
            str(tmp_path / "temp" / "backend-entry.js"),
        ]
        assert (tmp_path / "temp" / "frontend-entry.js").read_text() == "front"
        assert (tmp_path / "temp" / "backend-entry.js").read_text() == "back"

    def test_overwrites_previous_content(self, tmp_path):
        writer = EntryWriter(str(tmp_path))
        writer.write({"frontend": "a much longer first version"})
        writer.write({"frontend": "short"})
        assert (tmp_path / "frontend-entry.js").read_text() == "short"

    def test_initial_write_is_backdated(self, tmp_path):
        writer = EntryWriter(str(tmp_path))
        now = time.time()

        writer.write({"frontend": "x"}, init=True, now=now)

        mtime = os.path.getmtime(tmp_path / "frontend-entry.js")
        assert mtime == pytest.approx(now - 100, abs=1)

    def test_later_writes_not_backdated(self, tmp_path):
        writer = EntryWriter(str(tmp_path))
        before = time.time()

        writer.write({"frontend": "x"}, init=False)

        assert os.path.getmtime(tmp_path / "frontend-entry.js") >= before - 2

    def test_write_failure_raises(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        writer = EntryWriter(str(blocker / "temp"))

        with pytest.raises(EntryWriteError):
            writer.write({"frontend": "x"})

    def test_lone_surrogates_replaced(self, tmp_path):
        writer = EntryWriter(str(tmp_path))

        writer.write({"backend": "const p = /^\\/a\ud800$/;"})

        content = (tmp_path / "backend-entry.js").read_text(encoding="utf-8")
        assert content == "const p = /^\\/a\ufffd$/;"

    def test_surrogate_pair_written_as_one_character(self, tmp_path):
        writer = EntryWriter(str(tmp_path))

        writer.write({"frontend": "\ud83d\ude00"})

        assert (tmp_path / "frontend-entry.js").read_text(encoding="utf-8") == "\U0001F600"
