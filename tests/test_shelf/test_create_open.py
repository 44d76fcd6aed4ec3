"""Tests for Shelf.create and its create/open modes."""

import sqlite3
from contextlib import closing

import pytest

from shelflib import CreateOpenError, CreateOpenMode, IntTraits, Shelf, StringTraits


def _schema_names(path):
    with closing(sqlite3.connect(path)) as conn:
        rows = conn.execute("SELECT type, name FROM sqlite_master ORDER BY name").fetchall()
    return {(kind, name) for kind, name in rows}


def test_create_initializes_schema(shelf_path):
    with Shelf.create(shelf_path, StringTraits(), IntTraits(), CreateOpenMode.create()) as shelf:
        assert shelf.count == 0
        assert shelf.path == str(shelf_path)

    names = _schema_names(shelf_path)
    assert ("table", "shelf_rows") in names
    assert ("index", "shelf_rows_keyhash") in names


def test_create_refuses_existing_file(shelf_path):
    Shelf.create(shelf_path, StringTraits(), IntTraits(), CreateOpenMode.create()).close()

    with pytest.raises(CreateOpenError) as exc_info:
        Shelf.create(shelf_path, StringTraits(), IntTraits(), CreateOpenMode.create())

    assert exc_info.value.path == str(shelf_path)
    assert "already exists" in str(exc_info.value)


def test_open_refuses_missing_file(shelf_path):
    with pytest.raises(CreateOpenError) as exc_info:
        Shelf.create(shelf_path, StringTraits(), IntTraits(), CreateOpenMode.open())

    assert "does not exist" in str(exc_info.value)
    assert not shelf_path.exists()


def test_reopen_sees_committed_data(shelf_path):
    with Shelf.create(shelf_path, StringTraits(), IntTraits(), CreateOpenMode.create()) as shelf:
        shelf["one"] = 1
        shelf["two"] = 2

    with Shelf.create(shelf_path, StringTraits(), IntTraits(), CreateOpenMode.open()) as shelf:
        assert shelf.count == 2
        assert shelf["one"] == 1
        assert shelf["two"] == 2


def test_create_or_open_handles_both(shelf_path):
    mode = CreateOpenMode.create_or_open()
    with Shelf.create(shelf_path, StringTraits(), IntTraits(), mode) as shelf:
        shelf["x"] = 10
    with Shelf.create(shelf_path, StringTraits(), IntTraits(), mode) as shelf:
        assert shelf["x"] == 10


def test_default_mode_is_create_or_open(shelf_path):
    Shelf.create(shelf_path, StringTraits(), IntTraits()).close()
    Shelf.create(shelf_path, StringTraits(), IntTraits()).close()
    assert shelf_path.exists()


def test_unknown_begin_mode_rejected(shelf_path):
    with pytest.raises(ValueError):
        Shelf.create(shelf_path, StringTraits(), IntTraits(), begin="whenever")
    assert not shelf_path.exists()


def test_accepts_string_path(tmp_path):
    path = str(tmp_path / "plain.shelf")
    with Shelf.create(path, StringTraits(), IntTraits()) as shelf:
        shelf["k"] = 1
        assert shelf.path == path


def test_open_fails_fast_when_file_vanishes(shelf_path, monkeypatch):
    monkeypatch.setattr("shelflib.shelf.os.path.exists", lambda path: True)

    with pytest.raises(sqlite3.OperationalError):
        Shelf.create(shelf_path, StringTraits(), IntTraits(), CreateOpenMode.open())

    monkeypatch.undo()
    assert not shelf_path.exists()


def test_failed_schema_creation_removes_file(shelf_path, monkeypatch):
    def broken_schema(conn):
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr("shelflib.shelf.create_schema", broken_schema)

    with pytest.raises(sqlite3.OperationalError):
        Shelf.create(shelf_path, StringTraits(), IntTraits(), CreateOpenMode.create())

    assert not shelf_path.exists()
