"""
Trace record for a single text-generation call.

Generators fill one in per request so the latest call can be inspected
(latency, token usage, exact prompt) after the result has been shown.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class GenerationTrace:
    """Trace of one generation request.

    Attributes
    ----------
    provider : str
        LLM provider name (openai, gemini, anthropic, etc.).
    model : str
        Model identifier as passed to the provider.
    prompt : str
        Full prompt text, template included.
    response : str
        Text returned by the model. Empty when the call failed.
    usage : Dict[str, int]
        Token usage: prompt_tokens, completion_tokens, total_tokens.
    latency_ms : float
        Request latency in milliseconds.
    error : str
        ``repr`` of the exception when the call failed, else empty.
    timestamp : str
        ISO 8601 timestamp of the call.
    session_id : str
        Short identifier for grouping traces.
    """

    provider: str = ""
    model: str = ""
    prompt: str = ""
    response: str = ""
    usage: Dict[str, int] = field(default_factory=dict)
    latency_ms: float = 0.0
    error: str = ""

    timestamp: str = ""
    session_id: str = ""

    @property
    def ok(self) -> bool:
        return not self.error

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "model": self.model,
            "prompt": self.prompt,
            "response": self.response,
            "usage": self.usage,
            "latency_ms": self.latency_ms,
            "error": self.error,
            "timestamp": self.timestamp,
            "session_id": self.session_id,
        }
