from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx

from glide_functions.core.config import get_settings
from glide_functions.core.errors import flatten_exception
from glide_functions.core.providers import is_list_models_command
from glide_functions.core.security import require_api_key, require_prompt
from glide_functions.llms.base import GenerationRequest
from glide_functions.llms.router import dispatch, list_models
from glide_functions.schemas.response import FunctionResult
from glide_functions.utils.logger import logger


@asynccontextmanager
async def _http_client(http: httpx.AsyncClient | None) -> AsyncIterator[httpx.AsyncClient]:
    if http is not None:
        yield http
        return
    async with httpx.AsyncClient(timeout=get_settings().http_timeout) as client:
        yield client


async def generate(
    prompt: str,
    api_key: str,
    model: str = "",
    temperature: float | None = None,
    max_tokens: int | None = None,
    attachment_url: str | None = None,
    http: httpx.AsyncClient | None = None,
) -> FunctionResult:
    settings = get_settings()
    try:
        key = require_api_key(api_key)
        if is_list_models_command(model):
            async with _http_client(http) as client:
                return FunctionResult.success(await list_models(key, client, settings))
        require_prompt(prompt)

        if temperature is None:
            temperature = settings.default_temperature
        if not max_tokens or max_tokens <= 0:
            max_tokens = settings.default_max_tokens
        request = GenerationRequest(
            prompt=prompt,
            api_key=key,
            model=model or "",
            temperature=min(2.0, max(0.0, temperature)),
            max_tokens=max_tokens,
            attachment_url=(attachment_url or "").strip() or None,
        )
        async with _http_client(http) as client:
            return FunctionResult.success(await dispatch(request, client, settings))
    except Exception as e:
        logger.warning(
            "function_failed",
            extra={"function": "generate", "error_type": type(e).__name__},
        )
        return FunctionResult.failure(flatten_exception(e))


async def list_available_models(
    api_key: str,
    http: httpx.AsyncClient | None = None,
) -> FunctionResult:
    try:
        key = require_api_key(api_key)
        async with _http_client(http) as client:
            return FunctionResult.success(await list_models(key, client))
    except Exception as e:
        logger.warning(
            "function_failed",
            extra={"function": "list_models", "error_type": type(e).__name__},
        )
        return FunctionResult.failure(flatten_exception(e))
