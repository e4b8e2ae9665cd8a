"""
Sigil Canvas: compose LLM prompts by arranging text sigils on a 2D canvas.
"""

__version__ = "0.1.0"

from sigil_canvas.core.canvas import DEFAULT_SIGILS, SigilCanvas
from sigil_canvas.core.composer import (
    FALLBACK_MESSAGE,
    PROMPT_TEMPLATE,
    PromptComposer,
    SpellResult,
)
from sigil_canvas.core.fragment import Fragment, Position
from sigil_canvas.core.interaction import Dragging, Editing, Idle, KeyAction
from sigil_canvas.core.store import FragmentStore
from sigil_canvas.core.trace import GenerationTrace


def create_canvas(settings=None, **kwargs):  # type: ignore[no-untyped-def]
    """Convenience function: load settings and build a seeded canvas."""
    from sigil_canvas.config import configure_logging, load_settings
    from sigil_canvas.generators import create_generator

    if settings is None:
        settings = load_settings()
    configure_logging(settings.log_level)
    return SigilCanvas.with_default_sigils(create_generator(settings), **kwargs)


__all__ = [
    "Position",
    "Fragment",
    "FragmentStore",
    "Idle",
    "Dragging",
    "Editing",
    "KeyAction",
    "PromptComposer",
    "SpellResult",
    "PROMPT_TEMPLATE",
    "FALLBACK_MESSAGE",
    "GenerationTrace",
    "SigilCanvas",
    "DEFAULT_SIGILS",
    "create_canvas",
    "__version__",
]
