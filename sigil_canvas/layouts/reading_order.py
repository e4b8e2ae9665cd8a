"""Reading-order layout: how a scattered canvas reads top to bottom."""

from typing import Any, Dict, List, Sequence

from sigil_canvas.core.fragment import Fragment


def compute_reading_order(fragments: Sequence[Fragment]) -> List[Fragment]:
    """Order fragments by vertical position, top first.

    Only ``position.y`` matters; x is ignored. The sort is stable, so
    fragments on the same row keep the order they were given in, which for
    a store snapshot is insertion order.
    """
    return sorted(fragments, key=lambda f: f.position.y)


def compute_reading_layout(fragments: Sequence[Fragment]) -> List[Dict[str, Any]]:
    """Compute reading-order items for display alongside the canvas.

    Returns a list of dicts with keys: id, rank, content, y.
    """
    return [
        {
            "id": fragment.id,
            "rank": rank,
            "content": fragment.content,
            "y": fragment.position.y,
        }
        for rank, fragment in enumerate(compute_reading_order(fragments), start=1)
    ]
