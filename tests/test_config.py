"""Tests for ShelfConfig."""

import pytest
from pydantic import ValidationError

from shelflib import CreateOpenError, CreateOpenMode, IntTraits, Shelf, ShelfConfig, StringTraits


def test_defaults():
    config = ShelfConfig.model_validate_json('{"path": "data.shelf"}')
    assert config.path == "data.shelf"
    assert config.mode == "create_or_open"
    assert config.timeout == 5.0
    assert config.begin == "immediate"
    assert config.create_open_mode == CreateOpenMode.create_or_open()


def test_mode_maps_to_create_open_mode():
    config = ShelfConfig(path="x", mode="open")
    assert config.create_open_mode == CreateOpenMode.open()


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"path": ""},
        {"path": "x", "mode": "truncate"},
        {"path": "x", "timeout": -1},
        {"path": "x", "begin": "eventually"},
        {"path": "x", "unexpected": True},
    ],
)
def test_invalid_config_rejected(data):
    with pytest.raises(ValidationError):
        ShelfConfig.model_validate(data)


def test_from_config_creates_and_reopens(tmp_path):
    path = str(tmp_path / "configured.shelf")
    config = ShelfConfig(path=path, mode="create", timeout=1.0, begin="exclusive")

    with Shelf.from_config(config, StringTraits(), IntTraits()) as shelf:
        shelf["answer"] = 42

    with pytest.raises(CreateOpenError):
        Shelf.from_config(config, StringTraits(), IntTraits())

    reopen = ShelfConfig(path=path, mode="open")
    with Shelf.from_config(reopen, StringTraits(), IntTraits()) as shelf:
        assert shelf["answer"] == 42
