"""LiteLLM generator: one async completion through litellm.acompletion.

LiteLLM provides a unified interface for 100+ LLM providers using the
OpenAI-compatible request/response format, which lets the canvas talk to
Gemini (the default), Anthropic, OpenAI and others with the same code.
"""

from typing import Any, Optional

import litellm

from sigil_canvas.generators.base_generator import BaseGenerator

DEFAULT_MODEL = "gemini/gemini-1.5-flash"


def _extract_provider(model: str) -> str:
    """Extract provider name from LiteLLM model string.

    LiteLLM uses ``provider/model-name`` format, e.g.
    ``gemini/gemini-1.5-flash``, ``anthropic/claude-3-opus``,
    ``azure/gpt-4``.  Bare model names (no slash) default to ``openai``.
    """
    if "/" in model:
        return model.split("/", 1)[0]
    return "openai"


class LiteLLMGenerator(BaseGenerator):
    """Generator backed by ``litellm.acompletion``.

    Usage
    -----
    ::

        generator = LiteLLMGenerator(model="gemini/gemini-1.5-flash")
        text = await generator.generate("Describe a lone knight")

    Parameters
    ----------
    model : str
        LiteLLM model string.
    api_key : str, optional
        Passed through to LiteLLM; otherwise it reads the provider's own
        environment variable.
    timeout : float, optional
        Request timeout in seconds.
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        **kwargs: object,
    ) -> None:
        super().__init__(model=model, timeout=timeout, **kwargs)
        self.provider = _extract_provider(model)
        self._api_key = api_key

    async def _complete(self, prompt: str) -> Any:
        kwargs: dict = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }
        if self._api_key:
            kwargs["api_key"] = self._api_key
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return await litellm.acompletion(**kwargs)
