"""Shared formatting helpers for CLI commands."""

from __future__ import annotations

from rich.text import Text

from dailymirror.core.formatting import state_to_color


def _format_state_with_color(state: str) -> Text:
    """Format a partition state with color coding.

    Args:
        state: "downloaded", "pending" or "unlisted".

    Returns:
        Rich Text object with the matching color.
    """
    color = state_to_color(state)
    return Text(state, style=color) if color else Text(state)
