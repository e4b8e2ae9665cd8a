"""FragmentStore: canonical, insertion-ordered set of sigils on the canvas."""

import itertools
import logging
import math
from typing import Callable, Dict, Iterator, List, Optional

from sigil_canvas.core.fragment import DEFAULT_CONTENT, DEFAULT_POSITION, Fragment, Position

logger = logging.getLogger(__name__)

RemoveListener = Callable[[str], None]


class FragmentStore:
    """Owns every fragment and enforces the set invariants.

    Ids are ``sigil-<n>`` with ``n`` drawn from a counter that only moves
    forward, so an id is never handed out twice during the life of the
    store, even after the fragment carrying it has been removed.

    Operations addressed to an unknown id are silent no-ops: ids may be
    invalidated by a delete that raced ahead of the caller.

    Coordinates must be finite: ``add`` and ``update_position`` raise
    ValueError for a NaN or infinite result.

    Parameters
    ----------
    id_prefix : str
        Prefix for generated ids.

    Examples
    --------
    >>> store = FragmentStore()
    >>> sid = store.add("A lone knight", Position(50, 50))
    >>> store.update_position(sid, 10, -5)
    >>> store.get(sid).position
    Position(x=60.0, y=45.0)
    """

    def __init__(self, id_prefix: str = "sigil") -> None:
        self._id_prefix = id_prefix
        self._counter = itertools.count(1)
        self._fragments: Dict[str, Fragment] = {}
        self._remove_listeners: List[RemoveListener] = []

    def add(
        self,
        content: str = DEFAULT_CONTENT,
        position: Position = DEFAULT_POSITION,
    ) -> str:
        """Create a fragment and return its freshly generated id."""
        _check_finite(position.x, position.y)
        fragment_id = self._next_id()
        self._fragments[fragment_id] = Fragment(
            id=fragment_id,
            content=content,
            position=Position(float(position.x), float(position.y)),
        )
        logger.debug("Added %s at (%s, %s)", fragment_id, position.x, position.y)
        return fragment_id

    def remove(self, fragment_id: str) -> None:
        """Delete a fragment. Removing an absent id does nothing."""
        if self._fragments.pop(fragment_id, None) is None:
            return
        logger.debug("Removed %s", fragment_id)
        for listener in list(self._remove_listeners):
            listener(fragment_id)

    def update_content(self, fragment_id: str, content: str) -> None:
        """Replace a fragment's content verbatim."""
        fragment = self._fragments.get(fragment_id)
        if fragment is None:
            return
        self._fragments[fragment_id] = fragment.with_content(content)

    def update_position(self, fragment_id: str, dx: float, dy: float) -> None:
        """Move a fragment by a relative delta."""
        fragment = self._fragments.get(fragment_id)
        if fragment is None:
            return
        moved = fragment.moved_by(dx, dy)
        _check_finite(moved.position.x, moved.position.y)
        self._fragments[fragment_id] = moved
        logger.debug("Moved %s by (%s, %s)", fragment_id, dx, dy)

    def get(self, fragment_id: str) -> Optional[Fragment]:
        return self._fragments.get(fragment_id)

    def list(self) -> List[Fragment]:
        """Snapshot of the current fragments in insertion order."""
        return list(self._fragments.values())

    def on_remove(self, listener: RemoveListener) -> None:
        """Register a callback invoked with the id of every removed fragment."""
        self._remove_listeners.append(listener)

    def _next_id(self) -> str:
        return f"{self._id_prefix}-{next(self._counter)}"

    def __contains__(self, fragment_id: object) -> bool:
        return fragment_id in self._fragments

    def __len__(self) -> int:
        return len(self._fragments)

    def __iter__(self) -> Iterator[Fragment]:
        return iter(self.list())


def _check_finite(x: float, y: float) -> None:
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ValueError(f"Fragment coordinates must be finite, got ({x}, {y})")
