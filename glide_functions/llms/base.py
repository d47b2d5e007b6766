# =============================================================================
# glide_functions/llms/base.py — Provider client interface
# =============================================================================
# A provider client is a request-builder + response-parser pair. The router
# owns the HTTP round trip; clients only translate to and from the vendor's
# JSON shapes.
# =============================================================================

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from glide_functions.core.config import Settings
from glide_functions.core.providers import Provider, provider_label


@dataclass(slots=True)
class Attachment:
    mime_type: str
    data: str  # base64


@dataclass(slots=True)
class GenerationRequest:
    prompt: str
    api_key: str
    model: str
    temperature: float = 0.7
    max_tokens: int = 1000
    attachment_url: str | None = None
    attachment: Attachment | None = None


@dataclass(slots=True)
class PreparedCall:
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)
    payload: dict[str, Any] = field(default_factory=dict)


class BaseLLM(ABC):
    provider: Provider
    accepts_attachments: bool = False

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    @property
    def label(self) -> str:
        return provider_label(self.provider)

    @property
    def empty_response(self) -> str:
        return f"No response generated from {self.label}."

    @abstractmethod
    def build_request(self, request: GenerationRequest) -> PreparedCall:
        ...

    @abstractmethod
    def parse_response(self, data: dict[str, Any]) -> str:
        ...

    def extract_error(self, data: Any) -> str | None:
        """Vendor error message from a decoded body, if it carries one."""
        if not isinstance(data, dict):
            return None
        error = data.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            if message:
                return str(message)
            return str(error.get("type") or error.get("status") or "Unknown error")
        if isinstance(error, str) and error:
            return error
        return None
