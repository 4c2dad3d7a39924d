"""Unit tests for journeyshare.io.persistence.

Covers:
- write_bytes_atomic: happy path, parent dirs, no orphaned temp file on failure
- save_json: happy path, unicode, overwrite, unserializable data
- load_json: happy path, missing file, invalid JSON, unreadable file
- read_input_bytes: happy path, missing file, directory
"""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from journeyshare.exceptions import UnreadableInputError
from journeyshare.io.persistence import (
    load_json,
    read_input_bytes,
    save_json,
    write_bytes_atomic,
)


# ── write_bytes_atomic ────────────────────────────────────────────────────────────

class TestWriteBytesAtomic:
    def test_writes_exact_bytes(self, tmp_path):
        """Binary content must land unchanged."""
        target = tmp_path / "blob.mapped"
        data = bytes(range(256))

        write_bytes_atomic(data, target)

        assert target.read_bytes() == data

    def test_creates_parent_directories(self, tmp_path):
        target = tmp_path / "a" / "b" / "blob.bin"
        write_bytes_atomic(b"x", target)
        assert target.exists()

    def test_rename_failure_leaves_no_temp_file(self, tmp_path, monkeypatch):
        """On rename failure, the temp file must be cleaned up and the error raised."""
        target = tmp_path / "blob.bin"

        def failing_replace(src, dst):
            raise OSError("Disk full")

        monkeypatch.setattr(os, "replace", failing_replace)

        with pytest.raises(OSError):
            write_bytes_atomic(b"payload", target)

        assert not target.exists()
        assert list(tmp_path.glob("*.tmp")) == []

    def test_rename_failure_keeps_previous_content(self, tmp_path, monkeypatch):
        """A failed write must not corrupt what was already there."""
        target = tmp_path / "blob.bin"
        target.write_bytes(b"old")

        def failing_replace(src, dst):
            raise OSError("boom")

        monkeypatch.setattr(os, "replace", failing_replace)

        with pytest.raises(OSError):
            write_bytes_atomic(b"new", target)

        assert target.read_bytes() == b"old"


# ── save_json ─────────────────────────────────────────────────────────────────────

class TestSaveJson:
    def test_save_json_happy_path(self, tmp_path):
        """save_json must write valid JSON to the given path."""
        target = tmp_path / "store.json"
        data = {"pendingImportFilename": "Alex_Journey.mapped"}

        save_json(data, target)

        assert json.loads(target.read_text(encoding="utf-8")) == data

    def test_save_json_unicode_preserved(self, tmp_path):
        """Non-ASCII characters must be preserved (ensure_ascii=False)."""
        target = tmp_path / "unicode.json"
        save_json({"senderName": "Zoë Ångström"}, target)

        assert "Zoë Ångström" in target.read_text(encoding="utf-8")

    def test_save_json_overwrites_existing_file(self, tmp_path):
        target = tmp_path / "output.json"
        save_json({"version": 1}, target)
        save_json({"version": 2}, target)

        assert json.loads(target.read_text())["version"] == 2

    def test_save_json_unserializable_raises(self, tmp_path):
        with pytest.raises(TypeError):
            save_json({"bad": object()}, tmp_path / "bad.json")

    def test_save_json_accepts_string_path(self, tmp_path):
        target = str(tmp_path / "string_path.json")
        save_json({"key": "ok"}, target)
        assert Path(target).exists()


# ── load_json ─────────────────────────────────────────────────────────────────────

class TestLoadJson:
    def test_load_json_happy_path(self, tmp_path):
        target = tmp_path / "data.json"
        target.write_text('{"pendingImportData": "e30="}', encoding="utf-8")

        assert load_json(target) == {"pendingImportData": "e30="}

    def test_load_json_missing_file_returns_none(self, tmp_path):
        """Non-existent file path must return None without raising."""
        assert load_json(tmp_path / "does_not_exist.json") is None

    def test_load_json_invalid_json_returns_none(self, tmp_path):
        target = tmp_path / "bad.json"
        target.write_text("{this is not valid json}", encoding="utf-8")

        assert load_json(target) is None

    def test_load_json_empty_file_returns_none(self, tmp_path):
        target = tmp_path / "empty.json"
        target.write_text("", encoding="utf-8")

        assert load_json(target) is None

    def test_load_json_unreadable_path_raises(self, tmp_path):
        """A path that exists but cannot be read is an error, not an empty result."""
        target = tmp_path / "store.json"
        target.mkdir()

        with pytest.raises(OSError):
            load_json(target)

    def test_load_json_roundtrip_with_save(self, tmp_path):
        target = tmp_path / "roundtrip.json"
        original = {"pendingImportData": "AAEC", "pendingImportFilename": "x.mapped"}

        save_json(original, target)

        assert load_json(target) == original


# ── read_input_bytes ──────────────────────────────────────────────────────────────

class TestReadInputBytes:
    def test_reads_file(self, tmp_path):
        target = tmp_path / "Alex_Journey.mapped"
        target.write_bytes(b"MAPPED_JOURNEY_V1\n{}")

        assert read_input_bytes(target) == b"MAPPED_JOURNEY_V1\n{}"

    def test_missing_file_raises_unreadable(self, tmp_path):
        with pytest.raises(UnreadableInputError) as exc_info:
            read_input_bytes(tmp_path / "gone.mapped")
        assert exc_info.value.user_message == "Could not read file"

    def test_directory_raises_unreadable(self, tmp_path):
        with pytest.raises(UnreadableInputError):
            read_input_bytes(tmp_path)
