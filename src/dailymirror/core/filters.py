"""File name filters."""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Sequence

    from dailymirror.core.ports import NameFilter


def accept_all(file_name: str) -> bool:  # noqa: ARG001
    """Filter that accepts every file."""
    return True


def build_name_filter(
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
) -> NameFilter:
    """Build a predicate from include/exclude substring lists.

    A name is accepted when it contains at least one include substring (or
    no include list is given) and none of the exclude substrings.

    Example:
        >>> keep = build_name_filter(include=["BTC"], exclude=["-SWAP"])
        >>> keep("BTC-USDT-trades-2024-01-01.zip")
        True
        >>> keep("BTC-USDT-SWAP-trades-2024-01-01.zip")
        False
    """
    includes = list(include or [])
    excludes = list(exclude or [])
    if not includes and not excludes:
        return accept_all

    def predicate(file_name: str) -> bool:
        if includes and not any(s in file_name for s in includes):
            return False
        return not any(s in file_name for s in excludes)

    return predicate
