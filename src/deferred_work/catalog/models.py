"""Catalog item value type."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True, order=True)
class Item:
    """A catalog item, ordered and compared by score only."""

    score: int
    label: str = field(default="", compare=False)

    def to_json(self) -> dict[str, object]:
        return {"score": self.score, "label": self.label}

    def __repr__(self) -> str:
        return f"Item(score={self.score})"
