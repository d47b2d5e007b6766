from typing import Any

from glide_functions.core.providers import PROVIDERS, Provider
from glide_functions.llms.base import BaseLLM, GenerationRequest, PreparedCall


class OpenAIClient(BaseLLM):
    provider = Provider.OPENAI

    def build_request(self, request: GenerationRequest) -> PreparedCall:
        base = self._settings.openai_base_url.rstrip("/")
        return PreparedCall(
            url=f"{base}{PROVIDERS[self.provider]['path']}",
            headers={
                "Authorization": f"Bearer {request.api_key}",
                "Content-Type": "application/json",
            },
            payload={
                "model": request.model,
                "messages": [{"role": "user", "content": request.prompt}],
                "temperature": request.temperature,
                "max_tokens": request.max_tokens,
            },
        )

    def parse_response(self, data: dict[str, Any]) -> str:
        choices = data.get("choices") or []
        if not choices:
            return self.empty_response
        message = choices[0].get("message") or {}
        content = message.get("content")
        return content if content else self.empty_response
