"""Randomized bulk load checked against a plain dict."""

import random

from shelflib import AddReplaceMode


def test_bulk_load_matches_reference(shelf):
    rng = random.Random(0x43B2FF30)
    reference = {}

    with shelf.begin_transaction() as tx:
        for i in range(1000):
            red = ("red", i)
            blue = ("blue", rng.randrange(1000))

            assert shelf.set_value(AddReplaceMode.add(), red, blue)
            assert shelf.set_value(AddReplaceMode.add_or_replace(), blue, red)
            reference[red] = blue
            reference[blue] = red
        tx.commit()

    assert shelf.count == len(reference)
    keys = shelf.get_keys()
    assert len(keys) == len(reference)
    assert set(keys) == set(reference)
    for key, value in reference.items():
        assert shelf.try_get_value(key) == value
