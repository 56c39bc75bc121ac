# thumb_scout/epoch.py
"""
Request epoch: a shared marker of "the current request" for one logical slot
(e.g. the linked-page lookup for the thumbnail under the mouse).
"""
from __future__ import annotations


class RequestEpoch:
    """Reference cell holding a monotonically advancing integer.

    Pipelines capture the value at creation time and compare it with
    :attr:`value` after every suspension; only the owner of the slot calls
    :meth:`advance`.
    """

    __slots__ = ("_value",)

    def __init__(self, value: int = 0) -> None:
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    def advance(self) -> int:
        """Supersede every request started with an older token; return the new token."""
        self._value += 1
        return self._value

    def is_current(self, token: int) -> bool:
        return token == self._value

    def __repr__(self) -> str:
        return f"RequestEpoch({self._value})"
