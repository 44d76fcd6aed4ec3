"""Shared test fixtures."""

import pytest

from shelflib import CreateOpenMode, IntTraits, Shelf, StringTraits, TupleTraits


class CollidingStringTraits(StringTraits):
    """String traits whose digest only looks at the first character."""

    def digest(self, value: str) -> bytes:
        return value[:1].encode("utf-8").ljust(32, b"\x00")


@pytest.fixture
def pair_traits():
    return TupleTraits(StringTraits(), IntTraits())


@pytest.fixture
def shelf_path(tmp_path):
    return tmp_path / "test.shelf"


@pytest.fixture
def shelf(shelf_path, pair_traits):
    s = Shelf.create(shelf_path, pair_traits, pair_traits, CreateOpenMode.create())
    yield s
    s.close()


@pytest.fixture
def colliding_shelf(tmp_path):
    s = Shelf.create(
        tmp_path / "colliding.shelf",
        CollidingStringTraits(),
        IntTraits(),
        CreateOpenMode.create(),
    )
    yield s
    s.close()
