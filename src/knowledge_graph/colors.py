"""Deterministic node coloring for the graph explorer."""

from __future__ import annotations

from ..utils.constants import NODE_COLOR_PALETTE


def node_color(label: str) -> str:
    """Pick a palette color for a node label.

    The color depends only on the label text: the sum of its character codes
    modulo the palette size.

    Args:
        label: First label of the node ("" for unlabeled nodes).

    Returns:
        Hex color string.
    """
    code_sum = sum(ord(char) for char in label or "")
    return NODE_COLOR_PALETTE[code_sum % len(NODE_COLOR_PALETTE)]
