"""SigilCanvas: top-level session object the rendering layer talks to."""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from sigil_canvas.core.composer import PromptComposer, SpellResult, count_tokens, join_fragments
from sigil_canvas.core.fragment import DEFAULT_CONTENT, DEFAULT_POSITION, Fragment, Position
from sigil_canvas.core.interaction import InteractionController, InteractionMode, KeyAction
from sigil_canvas.core.store import FragmentStore
from sigil_canvas.generators.base_generator import BaseGenerator
from sigil_canvas.layouts.reading_order import compute_reading_layout

# Sigils on a fresh canvas: (content, x, y)
DEFAULT_SIGILS: Tuple[Tuple[str, float, float], ...] = (
    ("A lone knight", 50.0, 50.0),
    ("in a dark forest", 250.0, 150.0),
    ("under a crimson moon", 100.0, 300.0),
)


class SigilCanvas:
    """Owns all canvas state: fragments, interaction mode and results.

    Every user intent coming from the UI goes through one of the methods
    below; subordinate pieces (store, interaction controller, composer) are
    owned here and never reached as globals.

    Parameters
    ----------
    generator : BaseGenerator
        Text-generation boundary used by :meth:`submit`.
    sigils : Iterable[Tuple[str, float, float]], optional
        ``(content, x, y)`` triples to seed the canvas with, in order.
    composer : PromptComposer, optional
        Pre-built composer; when given, ``generator`` is not used.

    Examples
    --------
    >>> canvas = SigilCanvas.with_default_sigils(LiteLLMGenerator())
    >>> canvas.compose_prompt()
    'A lone knight in a dark forest under a crimson moon'
    >>> result = await canvas.submit()
    """

    def __init__(
        self,
        generator: BaseGenerator,
        sigils: Optional[Iterable[Tuple[str, float, float]]] = None,
        composer: Optional[PromptComposer] = None,
    ) -> None:
        self.store = FragmentStore()
        self.interaction = InteractionController(self.store)
        self.composer = composer or PromptComposer(generator)
        for content, x, y in sigils or ():
            self.store.add(content, Position(x, y))

    @classmethod
    def with_default_sigils(cls, generator: BaseGenerator, **kwargs: Any) -> "SigilCanvas":
        """Create a canvas seeded with the starter sigils."""
        return cls(generator, sigils=DEFAULT_SIGILS, **kwargs)

    # ------------------------------------------------------------------
    # Fragments
    # ------------------------------------------------------------------

    def add(self, content: str = DEFAULT_CONTENT, position: Position = DEFAULT_POSITION) -> str:
        return self.store.add(content, position)

    def remove(self, fragment_id: str) -> None:
        self.store.remove(fragment_id)

    def update_content(self, fragment_id: str, content: str) -> None:
        self.store.update_content(fragment_id, content)

    def fragments(self) -> List[Fragment]:
        return self.store.list()

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    @property
    def mode(self) -> InteractionMode:
        return self.interaction.mode

    @property
    def editing_id(self) -> Optional[str]:
        return self.interaction.editing_id

    def begin_edit(self, fragment_id: str) -> bool:
        return self.interaction.begin_edit(fragment_id)

    def end_edit(self) -> None:
        self.interaction.end_edit()

    def edit_content(self, content: str) -> None:
        """Keystroke in the open editor; written through to the store at once."""
        self.interaction.edit_content(content)

    def handle_key(self, key: str, shift: bool = False) -> KeyAction:
        return self.interaction.handle_key(key, shift=shift)

    def drag_start(self, fragment_id: str) -> bool:
        return self.interaction.drag_start(fragment_id)

    def drag_move(self, dx: float, dy: float) -> None:
        self.interaction.drag_move(dx, dy)

    def drag_end(self) -> bool:
        return self.interaction.drag_end()

    def drag_cancel(self) -> None:
        self.interaction.drag_cancel()

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    @property
    def loading(self) -> bool:
        """True while a submission is in flight; the cast button is disabled."""
        return self.composer.in_flight

    @property
    def result(self) -> Optional[SpellResult]:
        return self.composer.result

    @property
    def result_visible(self) -> bool:
        return self.composer.result_visible

    def compose_prompt(self) -> str:
        """Ordered prompt text without the instruction template."""
        return join_fragments(self.store.list())

    def prompt_token_count(self) -> int:
        """Token estimate for the full prompt that :meth:`submit` would send."""
        return count_tokens(self.composer.build_prompt(self.store.list()))

    async def submit(self) -> Optional[SpellResult]:
        """Cast the current canvas. None means the trigger was suppressed."""
        return await self.composer.submit(self.store.list())

    def dismiss_result(self) -> None:
        self.composer.dismiss_result()

    # ------------------------------------------------------------------
    # Rendering boundary
    # ------------------------------------------------------------------

    def snapshot(self) -> List[Dict[str, Any]]:
        """Per-fragment view state for the renderer, in insertion order."""
        view = []
        for fragment in self.store.list():
            item = fragment.to_dict()
            item["drag_offset"] = self.interaction.drag_offset(fragment.id)
            item["editing"] = self.interaction.is_editing(fragment.id)
            item["dragging"] = self.interaction.is_dragging(fragment.id)
            view.append(item)
        return view

    def reading_order(self) -> List[Dict[str, Any]]:
        """Fragments ranked in the order they will appear in the prompt."""
        return compute_reading_layout(self.store.list())
