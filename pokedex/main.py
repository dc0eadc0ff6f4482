# pokedex/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI

from .catalog import catalog_router
from .catalog.detail import DetailResolver
from .catalog.pokeapi_service import create_client
from .catalog.store import CatalogStore
from .settings import Settings


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the app; ``transport`` replaces the network in tests."""
    settings = settings or Settings()
    logging.getLogger("pokedex").setLevel(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = create_client(settings, transport=transport)
        store = CatalogStore(client, settings)
        app.state.settings = settings
        app.state.store = store
        app.state.resolver = DetailResolver(client, settings, catalog=lambda: store.entries)
        if settings.load_on_startup:
            await store.load()
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(
        title="Pokédex browser",
        description=(
            "Search, filter, sort and page through the first generation of "
            "Pokémon, with per-entry detail and previous/next navigation."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # 🔹 Base route for a quick liveness check
    @app.get("/")
    def health_check():
        store = app.state.store
        return {"status": "ok" if store.loaded else "degraded", "entries": len(store.entries)}

    app.include_router(catalog_router)
    return app


app = create_app()
