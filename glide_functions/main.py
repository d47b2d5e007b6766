from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from glide_functions.core.config import get_settings
from glide_functions.core.errors import flatten_exception
from glide_functions.core.providers import PROVIDERS, default_model
from glide_functions.schemas.params import as_float, as_int, as_text
from glide_functions.schemas.request import (
    CoordinatesRequest,
    GenerateRequest,
    ListModelsRequest,
    RandomRequest,
)
from glide_functions.schemas.response import FunctionResult
from glide_functions.services.coordinates import DEFAULT_FORMAT, format_location
from glide_functions.services.llm_service import generate, list_available_models
from glide_functions.services.random_service import RandomCache, random_number
from glide_functions.utils.logger import logger


def create_app(http_client: httpx.AsyncClient | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = http_client is None
        app.state.http = http_client or httpx.AsyncClient(timeout=get_settings().http_timeout)
        app.state.random_cache = RandomCache()
        logger.info("app_started", extra={"owns_http_client": owned})
        try:
            yield
        finally:
            if owned:
                await app.state.http.aclose()

    app = FastAPI(title="Glide Functions", version="0.1.0", lifespan=lifespan)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
        first_error = exc.errors()[0]["msg"] if exc.errors() else "Invalid request"
        return JSONResponse(status_code=422, content={"detail": first_error})

    @app.get("/")
    async def root():
        return {
            "message": "Glide Functions API",
            "docs": "/docs",
            "health": "/health",
            "functions": [
                "POST /functions/generate",
                "POST /functions/models",
                "POST /functions/random",
                "POST /functions/coordinates",
            ],
        }

    @app.get("/health")
    async def get_health():
        settings = get_settings()
        return {
            "status": "ok",
            "providers": {p.value: default_model(p, settings) for p in PROVIDERS},
        }

    @app.post("/functions/generate", response_model=FunctionResult)
    async def post_generate(request: Request, body: GenerateRequest) -> FunctionResult:
        return await generate(
            prompt=as_text(body.prompt),
            api_key=as_text(body.api_key),
            model=as_text(body.model),
            temperature=as_float(body.temperature, get_settings().default_temperature),
            max_tokens=as_int(body.max_tokens, get_settings().default_max_tokens),
            attachment_url=as_text(body.attachment) or None,
            http=request.app.state.http,
        )

    @app.post("/functions/models", response_model=FunctionResult)
    async def post_models(request: Request, body: ListModelsRequest) -> FunctionResult:
        return await list_available_models(as_text(body.api_key), http=request.app.state.http)

    @app.post("/functions/random", response_model=FunctionResult)
    async def post_random(request: Request, body: RandomRequest) -> FunctionResult:
        value = random_number(
            key=as_text(body.key),
            minimum=as_float(body.min, 0.0),
            maximum=as_float(body.max, 1.0),
            cache=request.app.state.random_cache,
        )
        return FunctionResult.success(value)

    @app.post("/functions/coordinates", response_model=FunctionResult)
    async def post_coordinates(body: CoordinatesRequest) -> FunctionResult:
        precision = None if body.precision in (None, "") else as_int(body.precision, 6)
        try:
            text = format_location(
                body.location,
                as_text(body.format, DEFAULT_FORMAT) or DEFAULT_FORMAT,
                precision,
            )
        except Exception as e:
            logger.warning(
                "function_failed",
                extra={"function": "coordinates", "error_type": type(e).__name__},
            )
            return FunctionResult.failure(flatten_exception(e))
        return FunctionResult.success(text)

    return app


app = create_app()
