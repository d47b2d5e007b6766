# =============================================================================
# glide_functions/llms/router.py — Provider dispatch and model listing
# =============================================================================
# One request in, one outbound POST, plain text out. Provider selection is a
# pure function of the model string (see core/providers.classify_provider).
# Failures are raised as FunctionError subclasses; the service layer turns
# them into flattened strings for the host.
# =============================================================================

import time
from typing import Any

import httpx

from glide_functions.core.config import Settings, get_settings
from glide_functions.core.errors import (
    MalformedResponseError,
    ModelListError,
    ModelListFetchError,
    UpstreamHTTPError,
    UpstreamVendorError,
)
from glide_functions.core.providers import Provider, classify_provider, default_model
from glide_functions.core.security import redact_key
from glide_functions.llms.anthropic_client import AnthropicClient
from glide_functions.llms.base import BaseLLM, GenerationRequest
from glide_functions.llms.gemini_client import GeminiClient, fetch_attachment
from glide_functions.llms.openai_client import OpenAIClient
from glide_functions.utils.logger import logger

NO_GENERATIVE_MODELS = "No models support content generation."


def get_client(provider: Provider, settings: Settings | None = None) -> BaseLLM:
    settings = settings or get_settings()
    if provider == Provider.OPENAI:
        return OpenAIClient(settings)
    if provider == Provider.ANTHROPIC:
        return AnthropicClient(settings)
    if provider == Provider.GEMINI:
        return GeminiClient(settings)
    raise ValueError(f"Unknown provider: {provider}")


def _decode(r: httpx.Response) -> Any:
    try:
        return r.json()
    except ValueError:
        return None


def _http_error_message(llm: BaseLLM, r: httpx.Response) -> str:
    data = _decode(r)
    message = llm.extract_error(data)
    if message:
        return message
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return f"HTTP {r.status_code}"


async def dispatch(
    request: GenerationRequest,
    http: httpx.AsyncClient,
    settings: Settings | None = None,
) -> str:
    settings = settings or get_settings()
    provider = classify_provider(request.model)
    llm = get_client(provider, settings)
    request.model = request.model.strip() or default_model(provider, settings)

    if request.attachment_url:
        if llm.accepts_attachments:
            request.attachment = await fetch_attachment(http, request.attachment_url)
        else:
            logger.debug("attachment_ignored", extra={"provider": provider.value})

    call = llm.build_request(request)
    start = time.perf_counter()
    r = await http.post(call.url, headers=call.headers, params=call.params, json=call.payload)
    latency_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "llm_called",
        extra={
            "provider": provider.value,
            "model": request.model,
            "url": redact_key(call.url),
            "status_code": r.status_code,
            "latency_ms": round(latency_ms, 2),
        },
    )

    if not r.is_success:
        raise UpstreamHTTPError(request.model, _http_error_message(llm, r), r.status_code)

    data = _decode(r)
    if not isinstance(data, dict):
        raise MalformedResponseError(request.model, "Invalid JSON response", r.status_code)
    vendor_error = llm.extract_error(data)
    if vendor_error:
        raise UpstreamVendorError(request.model, vendor_error, r.status_code)
    return llm.parse_response(data)


async def list_models(
    api_key: str,
    http: httpx.AsyncClient,
    settings: Settings | None = None,
) -> str:
    gemini = GeminiClient(settings or get_settings())
    url = gemini.models_url()
    try:
        r = await http.get(url, params=gemini.key_params(api_key))
    except httpx.HTTPError as e:
        raise ModelListFetchError(str(e) or type(e).__name__) from e
    logger.info("models_listed", extra={"url": redact_key(url), "status_code": r.status_code})

    data = _decode(r)
    if not isinstance(data, dict):
        raise ModelListFetchError(f"Invalid JSON response (HTTP {r.status_code})")
    message = gemini.extract_error(data)
    if message:
        raise ModelListError(message)
    if not r.is_success:
        raise ModelListError(f"HTTP {r.status_code}")

    names = gemini.parse_model_list(data)
    if not names:
        return NO_GENERATIVE_MODELS
    return "Available models:\n" + ", ".join(names)
