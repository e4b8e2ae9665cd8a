"""
Fragment data structures for the sigil canvas.

A fragment ("sigil") is a small piece of prompt text placed somewhere on a
2D canvas. Both dataclasses are frozen: the store swaps in a new value on
every update, so a list handed out by the store is a stable snapshot.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict


@dataclass(frozen=True)
class Position:
    """A point on the canvas. Units are whatever the renderer uses (pixels)."""

    x: float = 0.0
    y: float = 0.0

    def translate(self, dx: float, dy: float) -> "Position":
        return Position(x=self.x + dx, y=self.y + dy)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


DEFAULT_CONTENT = "New instruction..."
DEFAULT_POSITION = Position(20.0, 20.0)


@dataclass(frozen=True)
class Fragment:
    """A single sigil on the canvas.

    Attributes
    ----------
    id : str
        Opaque identifier, assigned by the store and never changed.
    content : str
        Prompt text. May be empty; never trimmed.
    position : Position
        Top-left anchor of the sigil on the canvas.
    """

    id: str
    content: str = ""
    position: Position = field(default_factory=Position)

    def with_content(self, content: str) -> "Fragment":
        return replace(self, content=content)

    def moved_by(self, dx: float, dy: float) -> "Fragment":
        return replace(self, position=self.position.translate(dx, dy))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "position": self.position.to_dict(),
        }
