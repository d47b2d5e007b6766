from typing import Any

from glide_functions.core.providers import PROVIDERS, Provider
from glide_functions.llms.base import BaseLLM, GenerationRequest, PreparedCall


class AnthropicClient(BaseLLM):
    provider = Provider.ANTHROPIC

    def build_request(self, request: GenerationRequest) -> PreparedCall:
        base = self._settings.anthropic_base_url.rstrip("/")
        return PreparedCall(
            url=f"{base}{PROVIDERS[self.provider]['path']}",
            headers={
                "x-api-key": request.api_key,
                "anthropic-version": self._settings.anthropic_version,
                "Content-Type": "application/json",
            },
            payload={
                "model": request.model,
                "max_tokens": request.max_tokens,
                "temperature": request.temperature,
                "messages": [{"role": "user", "content": request.prompt}],
            },
        )

    def parse_response(self, data: dict[str, Any]) -> str:
        blocks = data.get("content") or []
        if not blocks:
            return self.empty_response
        text = blocks[0].get("text")
        return text if text else self.empty_response
