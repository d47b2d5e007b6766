# =============================================================================
# glide_functions/llms/gemini_client.py — Google Gemini request/response shapes
# =============================================================================
# The API key travels as the `key` query parameter; there is no auth header.
# Model ids may arrive as "models/gemini-..." and are used without the prefix.
# Gemini is the only provider that takes an inline image attachment.
# =============================================================================

import base64
from typing import Any

import httpx

from glide_functions.core.errors import (
    AttachmentFetchError,
    ModelListFetchError,
    PromptBlockedError,
)
from glide_functions.core.providers import PROVIDERS, Provider
from glide_functions.llms.base import Attachment, BaseLLM, GenerationRequest, PreparedCall

DEFAULT_ATTACHMENT_MIME = "image/jpeg"
MODEL_PREFIX = "models/"
GENERATE_METHOD = "generateContent"


def strip_model_prefix(model: str) -> str:
    m = model.strip()
    if m.startswith(MODEL_PREFIX):
        return m[len(MODEL_PREFIX):]
    return m


async def fetch_attachment(client: httpx.AsyncClient, url: str) -> Attachment:
    try:
        r = await client.get(url, follow_redirects=True)
    except httpx.HTTPError as e:
        raise AttachmentFetchError(f"Failed to fetch attachment ({e!s})") from e
    if not r.is_success:
        raise AttachmentFetchError(f"Failed to fetch attachment (HTTP {r.status_code})")
    content_type = r.headers.get("content-type") or ""
    mime_type = content_type.split(";", 1)[0].strip() or DEFAULT_ATTACHMENT_MIME
    return Attachment(
        mime_type=mime_type,
        data=base64.b64encode(r.content).decode("ascii"),
    )


class GeminiClient(BaseLLM):
    provider = Provider.GEMINI
    accepts_attachments = True

    def models_url(self) -> str:
        base = self._settings.gemini_base_url.rstrip("/")
        return f"{base}{PROVIDERS[self.provider]['path']}"

    @staticmethod
    def key_params(api_key: str) -> dict[str, str]:
        return {"key": api_key}

    def build_request(self, request: GenerationRequest) -> PreparedCall:
        base = self._settings.gemini_base_url.rstrip("/")
        model = strip_model_prefix(request.model)
        parts: list[dict[str, Any]] = [{"text": request.prompt}]
        if request.attachment is not None:
            parts.append(
                {
                    "inline_data": {
                        "mime_type": request.attachment.mime_type,
                        "data": request.attachment.data,
                    }
                }
            )
        return PreparedCall(
            url=f"{base}{PROVIDERS[self.provider]['path']}/{model}:{GENERATE_METHOD}",
            headers={"Content-Type": "application/json"},
            params=self.key_params(request.api_key),
            payload={
                "contents": [{"parts": parts}],
                "generationConfig": {
                    "temperature": request.temperature,
                    "maxOutputTokens": request.max_tokens,
                },
            },
        )

    def parse_response(self, data: dict[str, Any]) -> str:
        feedback = data.get("promptFeedback") or {}
        block_reason = feedback.get("blockReason")
        if block_reason:
            raise PromptBlockedError(str(block_reason))
        candidates = data.get("candidates") or []
        if not candidates:
            return self.empty_response
        content = candidates[0].get("content") or {}
        parts = content.get("parts") or []
        if not parts:
            return self.empty_response
        text = parts[0].get("text")
        return text if text else self.empty_response

    def parse_model_list(self, data: dict[str, Any]) -> list[str]:
        models = data.get("models") or []
        if not isinstance(models, list):
            raise ModelListFetchError("Invalid model list")
        names: list[str] = []
        for entry in models:
            if not isinstance(entry, dict):
                continue
            methods = entry.get("supportedGenerationMethods") or []
            if not isinstance(methods, list):
                continue
            if GENERATE_METHOD not in methods:
                continue
            name = entry.get("name")
            if isinstance(name, str) and name:
                names.append(strip_model_prefix(name))
        return names
