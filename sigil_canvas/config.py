"""
Settings and logging setup.

Settings are read from the process environment, after loading a ``.env``
file if one is found. Missing credentials are fatal at startup; the canvas
core never checks for them at runtime.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from sigil_canvas.exceptions import ConfigurationError, MissingCredentialsError
from sigil_canvas.generators.litellm_generator import DEFAULT_MODEL, _extract_provider

PROVIDERS = ("litellm", "openai")

# Environment variable holding the key for each LiteLLM provider prefix
PROVIDER_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "mistral": "MISTRAL_API_KEY",
    "groq": "GROQ_API_KEY",
}

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass
class SigilSettings:
    """Runtime settings.

    Attributes
    ----------
    provider : str
        Generator adapter: ``litellm`` or ``openai``.
    model : str
        Model identifier handed to the adapter.
    api_key : str, optional
        Explicit key. When None the adapter reads the provider's own
        environment variable.
    timeout : float
        Request timeout in seconds.
    log_level : str
        Name of the logging level for the ``sigil_canvas`` logger.
    """

    provider: str = "litellm"
    model: str = DEFAULT_MODEL
    api_key: Optional[str] = None
    timeout: float = 60.0
    log_level: str = "INFO"

    @property
    def key_env_var(self) -> str:
        """Environment variable the provider reads its key from."""
        if self.provider == "openai":
            return "OPENAI_API_KEY"
        vendor = _extract_provider(self.model)
        return PROVIDER_KEY_ENV.get(vendor, f"{vendor.upper()}_API_KEY")


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    require_credentials: bool = True,
    dotenv: bool = True,
) -> SigilSettings:
    """Build settings from ``SIGIL_*`` environment variables.

    Parameters
    ----------
    environ : Mapping[str, str], optional
        Variables to read instead of ``os.environ``.
    require_credentials : bool
        Raise :class:`MissingCredentialsError` when no key can be found.
    dotenv : bool
        Load a ``.env`` file into ``os.environ`` first. Ignored when an
        explicit ``environ`` is given.

    Raises
    ------
    ConfigurationError
        If the provider or timeout is invalid.
    MissingCredentialsError
        If credentials are required and absent.
    """
    if environ is None:
        if dotenv:
            load_dotenv()
        environ = os.environ

    provider = environ.get("SIGIL_PROVIDER", "litellm").strip().lower()
    if provider not in PROVIDERS:
        raise ConfigurationError(
            f"SIGIL_PROVIDER must be one of {', '.join(PROVIDERS)}, got {provider!r}"
        )

    default_model = DEFAULT_MODEL if provider == "litellm" else "gpt-4o-mini"
    raw_timeout = environ.get("SIGIL_TIMEOUT", "60")
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ConfigurationError(f"SIGIL_TIMEOUT must be a number, got {raw_timeout!r}")
    if timeout <= 0:
        raise ConfigurationError(f"SIGIL_TIMEOUT must be positive, got {timeout}")

    settings = SigilSettings(
        provider=provider,
        model=environ.get("SIGIL_MODEL", default_model),
        api_key=environ.get("SIGIL_API_KEY") or None,
        timeout=timeout,
        log_level=environ.get("SIGIL_LOG_LEVEL", "INFO").upper(),
    )

    if require_credentials and not settings.api_key and not environ.get(settings.key_env_var):
        raise MissingCredentialsError(settings.key_env_var)
    return settings


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stream handler to the package logger and set its level.

    Calling it again only updates the level.
    """
    package_logger = logging.getLogger("sigil_canvas")
    package_logger.setLevel(level)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    return package_logger
