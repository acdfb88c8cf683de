"""Formatting utilities for domain logic."""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from dailymirror.core.models import PartitionStatus


def partition_state(status: PartitionStatus) -> str:
    """Summarize a partition as "downloaded", "pending" or "unlisted"."""
    if status.downloaded:
        return "downloaded"
    if status.listed:
        return "pending"
    return "unlisted"


def state_to_color(state: str) -> str:
    """Map a partition state to a color name.

    Args:
        state: State string from partition_state().

    Returns:
        Color name string:
        - "downloaded" -> "green"
        - "pending" -> "yellow"
        - "unlisted" -> "red"
        - invalid -> empty string
    """
    color_map = {
        "downloaded": "green",
        "pending": "yellow",
        "unlisted": "red",
    }
    return color_map.get(state, "")
