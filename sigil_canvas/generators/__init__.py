"""Generators wrapping text-generation providers."""

from typing import TYPE_CHECKING

from sigil_canvas.generators.base_generator import BaseGenerator
from sigil_canvas.generators.litellm_generator import LiteLLMGenerator
from sigil_canvas.generators.openai_generator import OpenAIGenerator

if TYPE_CHECKING:
    from sigil_canvas.config import SigilSettings


def create_generator(settings: "SigilSettings") -> BaseGenerator:
    """Build the generator selected by ``settings.provider``."""
    if settings.provider == "openai":
        return OpenAIGenerator(
            model=settings.model, api_key=settings.api_key, timeout=settings.timeout
        )
    return LiteLLMGenerator(
        model=settings.model, api_key=settings.api_key, timeout=settings.timeout
    )


__all__ = [
    "BaseGenerator",
    "LiteLLMGenerator",
    "OpenAIGenerator",
    "create_generator",
]
