"""
shelflib — Hello World

A shelf is a dict that lives in a file.  Keys and values can be any
type with TypeTraits; here both are (str, int) pairs.
"""

import tempfile
from pathlib import Path

from shelflib import AddReplaceMode, CreateOpenMode, IntTraits, Shelf, StringTraits, TupleTraits


def main():
    traits = TupleTraits(StringTraits(), IntTraits())
    path = Path(tempfile.mkdtemp()) / "colors.shelf"

    # ──────────────────────────────────────
    #  1. Create the shelf (fails if the file already exists)
    # ──────────────────────────────────────
    with Shelf.create(path, traits, traits, CreateOpenMode.create()) as shelf:
        # ──────────────────────────────────────
        #  2. Add, then try to add again
        # ──────────────────────────────────────
        print("add red/7:       ", shelf.set_value(AddReplaceMode.add(), ("red", 7), ("blue", 3)))
        print("add red/7 again: ", shelf.set_value(AddReplaceMode.add(), ("red", 7), ("green", 1)))
        print("value:           ", shelf.try_get_value(("red", 7)))

        # ──────────────────────────────────────
        #  3. Group several writes in one transaction
        # ──────────────────────────────────────
        with shelf.begin_transaction() as tx:
            for i in range(5):
                shelf[("green", i)] = ("red", i * 10)
            tx.commit()
        print("count:           ", shelf.count)

        # ──────────────────────────────────────
        #  4. A transaction that is never committed leaves no trace
        # ──────────────────────────────────────
        with shelf.begin_transaction():
            shelf[("doomed", 0)] = ("nothing", 0)
        print("doomed present:  ", ("doomed", 0) in shelf)

    # ──────────────────────────────────────
    #  5. Reopen: everything committed is still there
    # ──────────────────────────────────────
    with Shelf.create(path, traits, traits, CreateOpenMode.open()) as shelf:
        for key in shelf.get_keys(0, 3):
            print("  ", traits.to_debug_string(key), "->", traits.to_debug_string(shelf[key]))
        print("deleted red/7:   ", shelf.delete_value(("red", 7)))
        print("contains red/7:  ", shelf.contains_key(("red", 7)))


if __name__ == "__main__":
    main()
