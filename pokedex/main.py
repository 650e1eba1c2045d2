# pokedex/main.py
import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI

from . import __version__
from .catalog import catalog_router
from .catalog.api_service import PokedexAPI
from .catalog.controller import CatalogController
from .catalog.filters import FilterState
from .config import PokedexSettings


def create_app(
    settings: Optional[PokedexSettings] = None,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """FastAPI app factory.

    Serve it with ``uvicorn --factory pokedex.main:create_app`` or
    ``python -m pokedex``.  ``http_client`` lets callers (tests) supply
    their own client; it is then left open on shutdown.
    """
    settings = settings or PokedexSettings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # timeout=None: the remote API is awaited until it answers
        client = http_client or httpx.AsyncClient(timeout=None)
        api = PokedexAPI(client, settings.api_url)
        controller = CatalogController(
            api,
            FilterState(
                page_size=settings.page_size,
                page_size_options=settings.page_size_options,
            ),
        )
        app.state.api = api
        app.state.controller = controller
        # the first load runs in the background so a hanging API never blocks startup
        app.state.startup_task = asyncio.create_task(controller.start())
        try:
            yield
        finally:
            startup_task = app.state.startup_task
            startup_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await startup_task
            if http_client is None:
                await client.aclose()

    app = FastAPI(
        title="Pokédex catalogue",
        description=(
            "Liste paginée des Pokémon avec recherche par nom, filtre par "
            "type et défilement infini, plus une vue détaillée par Pokémon."
        ),
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # 🔹 Route de base pour tester rapidement
    @app.get("/")
    def health_check():
        return {"status": "ok", "api_url": settings.api_url}

    app.include_router(catalog_router)
    return app
