"""Exception types raised by sigil_canvas.

The canvas core itself never raises for bad ids or conflicting gestures;
these types cover startup configuration and the generation adapters.
"""


class SigilError(Exception):
    """Base class for sigil_canvas errors."""


class ConfigurationError(SigilError):
    """Settings could not be loaded or are invalid."""


class MissingCredentialsError(ConfigurationError):
    """No API key is available for the configured generation provider."""

    def __init__(self, env_var: str) -> None:
        self.env_var = env_var
        super().__init__(f"{env_var} is not set; export it or add it to your .env file")


class GenerationError(SigilError):
    """The text-generation service answered, but not with usable text."""
