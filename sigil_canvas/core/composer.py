"""PromptComposer: turns the canvas into one prompt and casts it."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import tiktoken

from sigil_canvas.core.fragment import Fragment
from sigil_canvas.generators.base_generator import BaseGenerator
from sigil_canvas.layouts.reading_order import compute_reading_order

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "Describe, in a mystical and epic tone, the image that would be generated "
    "from the following concept: {prompt}"
)
FALLBACK_MESSAGE = "The spell failed. The connection to the oracle was lost."
SEPARATOR = " "


def count_tokens(text: str, encoding_name: str = "cl100k_base") -> int:
    """Count tokens using tiktoken, estimating 4 chars per token if unavailable."""
    try:
        encoding = tiktoken.get_encoding(encoding_name)
        return len(encoding.encode(text))
    except Exception:
        return len(text) // 4


def join_fragments(fragments: Sequence[Fragment]) -> str:
    """Join fragment contents in reading order with single spaces.

    Contents are not trimmed, and an empty fragment still contributes its
    (empty) segment, so it shows up as a doubled space.
    """
    return SEPARATOR.join(f.content for f in compute_reading_order(fragments))


@dataclass(frozen=True)
class SpellResult:
    """Outcome of one submission, as shown to the user.

    Attributes
    ----------
    text : str
        Generated text, or the fallback message when ``ok`` is False.
    ok : bool
        Whether the generation call succeeded.
    prompt : str
        The full prompt that was sent, template included.
    token_count : int
        Token estimate for ``prompt``.
    """

    text: str
    ok: bool
    prompt: str
    token_count: int = 0


class PromptComposer:
    """Builds the prompt from a fragment snapshot and submits it.

    At most one submission is in flight at a time; a submit arriving while
    another is pending is dropped. The in-flight flag is cleared on every
    exit path, so a failed call never leaves the composer stuck.

    Parameters
    ----------
    generator : BaseGenerator
        The text-generation boundary.
    template : str
        Instruction template with a ``{prompt}`` placeholder.
    fallback_message : str
        Text surfaced in place of a result when generation fails.
    """

    def __init__(
        self,
        generator: BaseGenerator,
        template: str = PROMPT_TEMPLATE,
        fallback_message: str = FALLBACK_MESSAGE,
    ) -> None:
        self._generator = generator
        self.template = template
        self.fallback_message = fallback_message
        self._in_flight = False
        self._result: Optional[SpellResult] = None
        self._result_visible = False

    @property
    def in_flight(self) -> bool:
        """True while a submission awaits the generator."""
        return self._in_flight

    @property
    def result(self) -> Optional[SpellResult]:
        """Most recent outcome, kept after it has been dismissed."""
        return self._result

    @property
    def result_visible(self) -> bool:
        return self._result_visible

    @property
    def generator(self) -> BaseGenerator:
        return self._generator

    def build_prompt(self, fragments: Sequence[Fragment]) -> str:
        """Order, join and wrap ``fragments`` in the instruction template."""
        return self.template.format(prompt=join_fragments(fragments))

    async def submit(self, fragments: Sequence[Fragment]) -> Optional[SpellResult]:
        """Send the prompt built from ``fragments`` to the generator.

        ``fragments`` should be a snapshot; the live store may keep changing
        while the request is pending. Returns the new result, or None when
        the call was suppressed because another one is still in flight.
        Generation failures never propagate.
        """
        if self._in_flight:
            logger.debug("Submission suppressed: another one is in flight")
            return None
        self._in_flight = True
        try:
            prompt = self.build_prompt(fragments)
            # first use of an encoding may fetch its BPE file; keep that off the loop
            loop = asyncio.get_running_loop()
            tokens = await loop.run_in_executor(None, count_tokens, prompt)
            logger.info("Casting prompt from %d fragments (~%d tokens)", len(fragments), tokens)
            try:
                text = await self._generator.generate(prompt)
                result = SpellResult(text=text, ok=True, prompt=prompt, token_count=tokens)
            except Exception:
                logger.exception("Generation failed")
                result = SpellResult(
                    text=self.fallback_message, ok=False, prompt=prompt, token_count=tokens
                )
            self._result = result
            self._result_visible = True
            return result
        finally:
            self._in_flight = False

    def dismiss_result(self) -> None:
        """Hide the result surface."""
        self._result_visible = False
