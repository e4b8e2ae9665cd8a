"""Core data model for the sigil canvas."""

from sigil_canvas.core.fragment import Fragment, Position
from sigil_canvas.core.interaction import (
    Dragging,
    Editing,
    Idle,
    InteractionController,
    InteractionMode,
    KeyAction,
)
from sigil_canvas.core.store import FragmentStore
from sigil_canvas.core.trace import GenerationTrace

__all__ = [
    "Position",
    "Fragment",
    "FragmentStore",
    "Idle",
    "Dragging",
    "Editing",
    "InteractionMode",
    "InteractionController",
    "KeyAction",
    "GenerationTrace",
]
