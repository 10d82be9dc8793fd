from __future__ import annotations

from typing import Hashable

# Any hashable value can address an event; str and Symbol are the usual ones.
EventKey = Hashable


class Symbol:
    """Unique event key that never equals any other key, strings included.

    Two symbols with the same description are still distinct::

        READY = Symbol("ready")
        assert READY != Symbol("ready")
    """

    __slots__ = ("description",)

    def __init__(self, description: str = "") -> None:
        self.description = description

    def __repr__(self) -> str:
        return f"Symbol({self.description!r})"
