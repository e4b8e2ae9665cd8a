"""Base generator abstract class for text-generation providers."""

import logging
import time
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sigil_canvas.core.trace import GenerationTrace
from sigil_canvas.exceptions import GenerationError

logger = logging.getLogger(__name__)


def _extract_text(response: Any) -> str:
    """Pull the message text out of an OpenAI-compatible chat response."""
    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, TypeError) as exc:
        raise GenerationError(f"Malformed completion response: {exc!r}") from exc
    if not content:
        raise GenerationError("Completion response contained no text")
    return content


def _extract_usage(response: Any) -> Dict[str, int]:
    usage = getattr(response, "usage", None)
    if not usage:
        return {}
    return {
        "prompt_tokens": usage.prompt_tokens,
        "completion_tokens": usage.completion_tokens,
        "total_tokens": usage.total_tokens,
    }


class BaseGenerator(ABC):
    """Abstract base class for text-generation providers.

    Subclasses implement :meth:`_complete`, which sends one user message and
    returns the raw OpenAI-compatible response. :meth:`generate` times the
    call, extracts the text and records a :class:`GenerationTrace`, which is
    available afterwards through :attr:`last_trace` whether or not the call
    succeeded.
    """

    provider: str = ""

    def __init__(self, model: str, timeout: Optional[float] = None, **kwargs: object) -> None:
        self.model = model
        self.timeout = timeout
        self._last_trace: Optional[GenerationTrace] = None

    @property
    def last_trace(self) -> Optional[GenerationTrace]:
        """Trace of the most recent call, if any."""
        return self._last_trace

    async def generate(self, prompt: str) -> str:
        """Send ``prompt`` as a single user message and return the reply text."""
        trace = GenerationTrace(
            provider=self.provider,
            model=self.model,
            prompt=prompt,
            timestamp=datetime.now(timezone.utc).isoformat(),
            session_id=str(uuid.uuid4())[:8],
        )
        self._last_trace = trace
        start = time.time()
        try:
            response = await self._complete(prompt)
            trace.response = _extract_text(response)
            trace.usage = _extract_usage(response)
        except Exception as exc:
            trace.error = repr(exc)
            raise
        finally:
            trace.latency_ms = (time.time() - start) * 1000
            logger.debug("Generation trace: %s", trace.to_dict())
        return trace.response

    @abstractmethod
    async def _complete(self, prompt: str) -> Any: ...
