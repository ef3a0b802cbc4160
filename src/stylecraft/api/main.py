"""Stylecraft - FastAPI Application.

This module builds the web application.  :func:`create_app` returns a
configured FastAPI instance, and :func:`main` is the CLI entry point that
launches it under uvicorn.

Architecture
------------
- **Configuration** is loaded once by :func:`create_app` via
  :func:`~stylecraft.core.config.load_config`.  A missing provider
  credential raises :class:`~stylecraft.core.errors.ConfigError` before the
  app exists.
- **State** (record store, provider client, generation service) is created
  in the lifespan hook and kept on ``app.state``.  There is no module-level
  store.
- **Errors** are typed.  Exception handlers map request validation failures
  to 400 and provider failures to 500.
- **The HTML page** is served as a raw ``HTMLResponse``.  It fetches the
  style list from ``GET /api/config`` on load.

Endpoints
---------
========  ==========================  ======================================
Method    Path                        Purpose
========  ==========================  ======================================
GET       ``/``                       Serve the main HTML page
GET       ``/api/config``             Version and style presets
POST      ``/api/generate``           Generate and store one image
GET       ``/api/generations``        List stored generation records
GET       ``/api/generations/{id}``   Single generation record
========  ==========================  ======================================

Usage
-----
CLI (installed entry point)::

    stylecraft

Direct invocation::

    python -m stylecraft.api.main
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from stylecraft import __version__
from stylecraft.core.config import StylecraftConfig, load_config
from stylecraft.core.errors import ConfigError, ProviderError, ValidationError
from stylecraft.core.generation import GenerationService
from stylecraft.core.provider import FalImageProvider, ImageProvider
from stylecraft.core.schema import ErrorResponse, GenerateRequest, Generation
from stylecraft.core.store import MemoryStore, RecordStore
from stylecraft.core.styles import DEFAULT_STYLE, style_options

logger = logging.getLogger(__name__)

TEMPLATES_DIR: Path = Path(__file__).resolve().parent.parent / "templates"

INVALID_REQUEST_MESSAGE = "Invalid request data"
GENERATION_FAILED_MESSAGE = "Failed to generate image"

router = APIRouter()


# ---------------------------------------------------------------------------
# Error responses.
# ---------------------------------------------------------------------------


def _error_response(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    body = ErrorResponse(message=message, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Rejected invalid request to {request.url.path}: {exc.errors()}")
    return _error_response(400, INVALID_REQUEST_MESSAGE)


async def _validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning(f"Rejected invalid request to {request.url.path}: {exc.errors}")
    return _error_response(400, INVALID_REQUEST_MESSAGE)


async def _provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
    return _error_response(500, GENERATION_FAILED_MESSAGE, exc.message)


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@router.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    """Serve the main application HTML page.

    Raises:
        HTTPException: 404 if ``index.html`` is not found.
    """
    index_path = TEMPLATES_DIR / "index.html"
    if index_path.exists():
        return HTMLResponse(content=index_path.read_text(encoding="utf-8"))
    raise HTTPException(status_code=404, detail="index.html not found")


@router.get("/api/config")
async def get_config() -> dict:
    """Return the version and the style presets for the frontend form."""
    return {
        "version": __version__,
        "styles": style_options(),
        "defaultStyle": DEFAULT_STYLE,
    }


@router.post(
    "/api/generate",
    response_model=Generation,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_image(req: GenerateRequest, request: Request):
    """Generate an image for a prompt and style, and store the record.

    Returns:
        The stored :class:`Generation` (``id``, ``prompt``, ``style``,
        ``imageUrl``, ``metadata``).

    Raises:
        ValidationError: Handled by the app as a 400 response.
        ProviderError: Handled by the app as a 500 response.
    """
    service: GenerationService = request.app.state.generation_service
    try:
        return await service.generate(req)
    except (ProviderError, ValidationError):
        raise
    except Exception as e:
        logger.exception("Unexpected failure while generating image")
        return _error_response(500, GENERATION_FAILED_MESSAGE, str(e) or e.__class__.__name__)


@router.get("/api/generations", response_model=list[Generation])
async def list_generations(request: Request) -> list[Generation]:
    """Return every stored generation record."""
    store: RecordStore = request.app.state.store
    return store.list_generations()


@router.get("/api/generations/{generation_id}", response_model=Generation)
async def get_generation(generation_id: int, request: Request) -> Generation:
    """Return a single generation record.

    Raises:
        HTTPException: 404 if no record has this id.
    """
    store: RecordStore = request.app.state.store
    generation = store.get_generation(generation_id)
    if generation is None:
        raise HTTPException(status_code=404, detail="Generation not found")
    return generation


# ---------------------------------------------------------------------------
# Application factory.
# ---------------------------------------------------------------------------


def create_app(
    config: StylecraftConfig | None = None,
    *,
    store: RecordStore | None = None,
    provider: ImageProvider | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Application configuration.  Loaded from the environment when
            omitted.
        store: Record store to use.  A fresh :class:`MemoryStore` when
            omitted.
        provider: Image provider to use.  A :class:`FalImageProvider` when
            omitted.  An injected provider is left open on shutdown; the
            caller owns it and closes it.

    Returns:
        The configured application.

    Raises:
        ConfigError: If ``config`` is omitted and the environment lacks the
            provider credential.
    """
    if config is None:
        config = load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # --- Startup -------------------------------------------------------
        app_store = store if store is not None else MemoryStore()
        owns_provider = provider is None
        app_provider = FalImageProvider(config) if owns_provider else provider
        app.state.config = config
        app.state.store = app_store
        app.state.provider = app_provider
        app.state.generation_service = GenerationService(app_store, app_provider, config)
        logger.info(f"Stylecraft {__version__} started (provider model: {config.provider_model}).")

        yield

        # --- Shutdown ------------------------------------------------------
        if owns_provider:
            await app_provider.close()
            logger.info("Provider client closed on shutdown.")

    app = FastAPI(
        title="Stylecraft",
        description="Styled text-to-image generation backed by an external provider.",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(ValidationError, _validation_handler)
    app.add_exception_handler(ProviderError, _provider_error_handler)

    app.include_router(router)
    return app


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Loads configuration first; a missing ``FAL_KEY`` is logged and the
    process exits with status 1 without binding a port.

    This function is registered as the ``stylecraft`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = load_config()
    except ConfigError as e:
        logger.error(f"Cannot start Stylecraft: {e.message}")
        sys.exit(1)

    logging.getLogger().setLevel(config.log_level)

    uvicorn.run(
        create_app(config),
        host=config.server_host,
        port=config.server_port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
