from __future__ import annotations

"""Identifier helpers for tiles, pages and weather locations."""

import random
import string
import time
from typing import Collection

_RANDOM_ALPHABET = string.ascii_lowercase + string.digits


def make_entity_id(prefix: str, taken: Collection[str] = ()) -> str:
    """Return ``{prefix}{epoch_ms}{rnd4}`` not present in ``taken``.

    The millisecond stamp keeps ids sortable by creation time; the random
    suffix separates ids minted within the same millisecond.
    """

    while True:
        stamp = int(time.time() * 1000)
        random_token = "".join(random.choices(_RANDOM_ALPHABET, k=4))
        identifier = f"{prefix}{stamp}{random_token}"
        if identifier not in taken:
            return identifier


__all__ = ["make_entity_id"]
