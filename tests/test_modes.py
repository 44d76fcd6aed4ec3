"""Tests for CreateOpenMode and AddReplaceMode."""

import pytest

from shelflib import AddReplaceMode, CreateOpenMode


def test_create_open_factories():
    assert CreateOpenMode.create() == CreateOpenMode(allows_create=True, allows_open=False)
    assert CreateOpenMode.open() == CreateOpenMode(allows_create=False, allows_open=True)
    both = CreateOpenMode.create_or_open()
    assert both.allows_create and both.allows_open


def test_add_replace_factories():
    assert AddReplaceMode.add() == AddReplaceMode(allows_add=True, allows_replace=False)
    assert AddReplaceMode.replace() == AddReplaceMode(allows_add=False, allows_replace=True)
    both = AddReplaceMode.add_or_replace()
    assert both.allows_add and both.allows_replace


def test_empty_modes_rejected():
    with pytest.raises(ValueError):
        CreateOpenMode(allows_create=False, allows_open=False)
    with pytest.raises(ValueError):
        AddReplaceMode(allows_add=False, allows_replace=False)


@pytest.mark.parametrize("name", ["create", "open", "create_or_open"])
def test_parse_create_open(name):
    assert CreateOpenMode.parse(name) == getattr(CreateOpenMode, name)()


@pytest.mark.parametrize("name", ["add", "replace", "add_or_replace"])
def test_parse_add_replace(name):
    assert AddReplaceMode.parse(name) == getattr(AddReplaceMode, name)()


def test_parse_unknown_lists_available():
    with pytest.raises(ValueError) as exc_info:
        AddReplaceMode.parse("upsert")
    assert "upsert" in str(exc_info.value)
    assert "add_or_replace" in str(exc_info.value)


def test_immutable():
    mode = AddReplaceMode.add()
    try:
        mode.allows_replace = True  # type: ignore[misc]
        raise AssertionError("Should have raised")
    except AttributeError:
        pass
