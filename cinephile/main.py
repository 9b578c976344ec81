"""Entry point for the FastAPI-powered Desi Cinephile app."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from .catalog import StaticCatalog
from .config import settings
from .models import EXTRA_KINDS, GenrePickRequest, MoodPickRequest
from .services.extras_cache import ExtraContentCache
from .services.openrouter import OpenRouterClient, RecommendationUnavailableError
from .services.selection import NoCandidatesError, SelectionController
from .web import render_app_page

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

MOOD_FAILURE_ADVISORY = "Network issue. Let's watch something '{genre}' instead!"

app: FastAPI


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    exit_stack = AsyncExitStack()
    openrouter_http = await exit_stack.enter_async_context(
        httpx.AsyncClient(
            base_url=str(settings.openrouter_api_url),
            timeout=httpx.Timeout(60.0, connect=10.0),
        )
    )
    openrouter = OpenRouterClient(settings, openrouter_http)
    extras = ExtraContentCache(
        openrouter,
        ttl_seconds=settings.extra_cache_ttl_seconds,
        capacity=settings.extra_cache_capacity,
    )
    catalog = StaticCatalog()
    controller = SelectionController(settings, catalog, openrouter, extras)

    fastapi_app.state.catalog = catalog
    fastapi_app.state.controller = controller

    try:
        yield
    finally:  # pragma: no cover - teardown path exercised at runtime
        controller.reset()
        await exit_stack.aclose()


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Slot-machine picks from Indian cinema, with an AI mood matcher",
        version="1.0.0",
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    register_routes(fastapi_app)
    return fastapi_app


def get_controller(app: FastAPI) -> SelectionController:
    controller = getattr(app.state, "controller", None)
    if not isinstance(controller, SelectionController):
        raise RuntimeError("Selection controller not initialised")
    return controller


def get_catalog(app: FastAPI) -> StaticCatalog:
    catalog = getattr(app.state, "catalog", None)
    if not isinstance(catalog, StaticCatalog):
        raise RuntimeError("Catalog not initialised")
    return catalog


def register_routes(fastapi_app: FastAPI) -> None:
    def _state_payload(status_code: int = 200) -> JSONResponse:
        controller = get_controller(fastapi_app)
        return JSONResponse(
            controller.snapshot().to_response(), status_code=status_code
        )

    @fastapi_app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @fastapi_app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        catalog = get_catalog(fastapi_app)
        return HTMLResponse(render_app_page(settings, catalog.list_genres()))

    @fastapi_app.get("/api/genres")
    async def list_genres() -> dict[str, Any]:
        catalog = get_catalog(fastapi_app)
        return {
            "genres": [
                {
                    "name": genre.name,
                    "slug": genre.slug,
                    "desc": genre.desc,
                    "emoji": genre.emoji,
                    "gradient": genre.gradient,
                    "count": len(catalog.candidates_for(genre.name)),
                }
                for genre in catalog.list_genres()
            ],
            "fallback_genre": settings.fallback_genre,
        }

    @fastapi_app.get("/api/state")
    async def current_state() -> JSONResponse:
        return _state_payload()

    @fastapi_app.post("/api/pick/genre")
    async def pick_genre(body: GenrePickRequest) -> JSONResponse:
        controller = get_controller(fastapi_app)
        try:
            controller.pick_from_genre(body.genre)
        except NoCandidatesError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return _state_payload(status_code=202)

    @fastapi_app.post("/api/pick/mood")
    async def pick_mood(body: MoodPickRequest) -> JSONResponse:
        controller = get_controller(fastapi_app)
        try:
            await controller.pick_from_mood(body.mood)
        except RecommendationUnavailableError as exc:
            raise HTTPException(
                status_code=503,
                detail=MOOD_FAILURE_ADVISORY.format(genre=settings.fallback_genre),
            ) from exc
        return _state_payload()

    @fastapi_app.post("/api/replay")
    async def replay() -> JSONResponse:
        controller = get_controller(fastapi_app)
        controller.replay()
        return _state_payload()

    @fastapi_app.post("/api/reset")
    async def reset() -> JSONResponse:
        controller = get_controller(fastapi_app)
        controller.reset()
        return _state_payload()

    @fastapi_app.post("/api/extra/{kind}")
    async def fetch_extra(kind: str) -> JSONResponse:
        if kind not in EXTRA_KINDS:
            raise HTTPException(status_code=400, detail="Unsupported extra kind")
        controller = get_controller(fastapi_app)
        await controller.fetch_extra(kind)  # type: ignore[arg-type]
        return _state_payload()


app = create_app()
