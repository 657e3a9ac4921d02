"""Severity name to display label mapping."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class LabelColor(StrEnum):
    """Display color of a severity label."""

    RED = "red"
    ORANGE = "orange"
    GOLD = "gold"
    BLUE = "blue"
    GREY = "grey"


@dataclass(frozen=True)
class SeverityLabel:
    text: str
    color: LabelColor


_COLORS: dict[str, LabelColor] = {
    "critical": LabelColor.RED,
    "high": LabelColor.ORANGE,
    "medium": LabelColor.GOLD,
    "low": LabelColor.BLUE,
    "informational": LabelColor.GREY,
}


def severity_label(name: str) -> SeverityLabel:
    """Map a service severity name (any case) to a label; unknown names are grey."""
    normalized = name.strip().lower()
    text = normalized.capitalize() if normalized else "Unknown"
    return SeverityLabel(text=text, color=_COLORS.get(normalized, LabelColor.GREY))
