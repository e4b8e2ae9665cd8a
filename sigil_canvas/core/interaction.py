"""
Interaction state for the canvas: pointer drags and text edit sessions.

Only one thing can happen to the canvas at a time. The state is a tagged
union of three variants:

- ``Idle``: nothing is being dragged or edited.
- ``Dragging(fragment_id, dx, dy)``: a pointer drag is in progress; the
  offset is visual feedback only and reaches the store once, on release.
- ``Editing(fragment_id)``: one sigil's text is open for editing; every
  keystroke is written straight to the store.

Because a fragment can only be in one variant, "a fragment being edited
cannot be dragged" and "a fragment being dragged cannot be edited" hold by
construction.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from sigil_canvas.core.store import FragmentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    """No active gesture or edit session."""


@dataclass(frozen=True)
class Dragging:
    """A drag gesture in progress with its accumulated offset."""

    fragment_id: str
    dx: float = 0.0
    dy: float = 0.0


@dataclass(frozen=True)
class Editing:
    """An open edit session."""

    fragment_id: str


InteractionMode = Union[Idle, Dragging, Editing]

IDLE = Idle()


class KeyAction(Enum):
    """What the editing surface should do with a key press."""

    IGNORE = "ignore"  # no edit session; let ambient handlers have it
    DEFAULT = "default"  # ordinary text input
    CONSUME = "consume"  # keep it local; never reaches drag/shortcut handlers
    CONFIRM = "confirm"  # end the session, no line break
    NEWLINE = "newline"  # insert a line break, keep the session open


CONFIRM_KEY = "Enter"
LOCAL_KEYS = frozenset({" ", "Spacebar"})


class InteractionController:
    """Drag controller and edit-session manager over one FragmentStore.

    Parameters
    ----------
    store : FragmentStore
        The store whose fragments are dragged and edited. The controller
        subscribes to removals so a deleted fragment never stays referenced.
    """

    def __init__(self, store: FragmentStore) -> None:
        self._store = store
        self._mode: InteractionMode = IDLE
        store.on_remove(self._on_fragment_removed)

    @property
    def mode(self) -> InteractionMode:
        return self._mode

    @property
    def dragging_id(self) -> Optional[str]:
        return self._mode.fragment_id if isinstance(self._mode, Dragging) else None

    @property
    def editing_id(self) -> Optional[str]:
        return self._mode.fragment_id if isinstance(self._mode, Editing) else None

    def is_editing(self, fragment_id: str) -> bool:
        return self.editing_id == fragment_id

    def is_dragging(self, fragment_id: str) -> bool:
        return self.dragging_id == fragment_id

    # ------------------------------------------------------------------
    # Drag gestures
    # ------------------------------------------------------------------

    def drag_start(self, fragment_id: str) -> bool:
        """Begin dragging a fragment.

        Returns False, leaving the state untouched, when the fragment does
        not exist, is currently being edited, or another drag is active.
        Pressing on a different fragment while one is being edited moves
        focus away from the editor, so that session ends first.
        """
        if fragment_id not in self._store:
            return False
        if isinstance(self._mode, Dragging):
            logger.debug(
                "Drag on %s rejected: %s is already dragging", fragment_id, self._mode.fragment_id
            )
            return False
        if isinstance(self._mode, Editing):
            if self._mode.fragment_id == fragment_id:
                logger.debug("Drag on %s rejected: fragment is being edited", fragment_id)
                return False
            self.end_edit()
        self._mode = Dragging(fragment_id)
        return True

    def drag_move(self, dx: float, dy: float) -> None:
        """Accumulate pointer movement. Nothing is written to the store."""
        if not isinstance(self._mode, Dragging):
            return
        if not (math.isfinite(dx) and math.isfinite(dy)):
            logger.debug("Ignoring non-finite drag delta (%s, %s)", dx, dy)
            return
        self._mode = Dragging(self._mode.fragment_id, self._mode.dx + dx, self._mode.dy + dy)

    def drag_offset(self, fragment_id: str) -> Tuple[float, float]:
        """Visual offset to draw a fragment at while it is being dragged."""
        if isinstance(self._mode, Dragging) and self._mode.fragment_id == fragment_id:
            return (self._mode.dx, self._mode.dy)
        return (0.0, 0.0)

    def drag_end(self) -> bool:
        """Release the pointer and commit the accumulated offset.

        A net offset of exactly zero is a click, not a move: the store is
        left alone. Returns True when a position update was committed.
        """
        if not isinstance(self._mode, Dragging):
            return False
        gesture = self._mode
        self._mode = IDLE
        if gesture.dx == 0 and gesture.dy == 0:
            return False
        self._store.update_position(gesture.fragment_id, gesture.dx, gesture.dy)
        return True

    def drag_cancel(self) -> None:
        """Abort the drag, discarding the offset."""
        if isinstance(self._mode, Dragging):
            logger.debug("Drag on %s cancelled", self._mode.fragment_id)
            self._mode = IDLE

    # ------------------------------------------------------------------
    # Edit sessions
    # ------------------------------------------------------------------

    def begin_edit(self, fragment_id: str) -> bool:
        """Open an edit session, superseding any previous one.

        Rejected while a drag is in progress or when the fragment is gone.
        """
        if fragment_id not in self._store:
            return False
        if isinstance(self._mode, Dragging):
            logger.debug("Edit on %s rejected: %s is dragging", fragment_id, self._mode.fragment_id)
            return False
        self._mode = Editing(fragment_id)
        return True

    def end_edit(self) -> None:
        if isinstance(self._mode, Editing):
            self._mode = IDLE

    def edit_content(self, content: str) -> None:
        """Write one keystroke's worth of content for the edited fragment."""
        if isinstance(self._mode, Editing):
            self._store.update_content(self._mode.fragment_id, content)

    def handle_key(self, key: str, shift: bool = False) -> KeyAction:
        """Route a key press received by the editing surface.

        Space and arrow keys stay inside the editor so they are never read
        as keyboard drag or navigation. Enter closes the session; Shift+Enter
        inserts a line break instead.
        """
        if not isinstance(self._mode, Editing):
            return KeyAction.IGNORE
        if key == CONFIRM_KEY:
            if shift:
                return KeyAction.NEWLINE
            self.end_edit()
            return KeyAction.CONFIRM
        if key in LOCAL_KEYS or key.startswith("Arrow"):
            return KeyAction.CONSUME
        return KeyAction.DEFAULT

    def _on_fragment_removed(self, fragment_id: str) -> None:
        if isinstance(self._mode, (Dragging, Editing)) and self._mode.fragment_id == fragment_id:
            self._mode = IDLE
