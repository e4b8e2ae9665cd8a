"""OpenAI generator: one chat completion through the async OpenAI client."""

from typing import Any, Optional

from sigil_canvas.generators.base_generator import BaseGenerator

DEFAULT_MODEL = "gpt-4o-mini"


class OpenAIGenerator(BaseGenerator):
    """Generator backed by ``openai.AsyncOpenAI``.

    Parameters
    ----------
    model : str
        OpenAI model identifier.
    api_key : str, optional
        Key for the client; the SDK falls back to ``OPENAI_API_KEY``.
    timeout : float, optional
        Request timeout in seconds.
    client : openai.AsyncOpenAI, optional
        Pre-built client, mostly useful for tests.
    """

    provider = "openai"

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Any = None,
        **kwargs: object,
    ) -> None:
        super().__init__(model=model, timeout=timeout, **kwargs)
        self._api_key = api_key
        self._client = client

    @property
    def client(self) -> Any:
        """The async OpenAI client, created on first use."""
        if self._client is None:
            try:
                from openai import AsyncOpenAI
            except ImportError:
                raise ImportError(
                    "openai is required for OpenAIGenerator. "
                    "Install it with: pip install 'sigil-canvas[openai]'"
                )
            client_kwargs: dict = {"api_key": self._api_key}
            if self.timeout is not None:
                client_kwargs["timeout"] = self.timeout
            self._client = AsyncOpenAI(**client_kwargs)
        return self._client

    async def _complete(self, prompt: str) -> Any:
        return await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
        )
