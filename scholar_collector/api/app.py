"""FastAPI application factory.

Lifespan
--------
On startup the app creates one :class:`CollectorSession` (shared across all
requests via ``request.app.state.session``), loading the collection file from
``settings.collection_path`` when it exists.

Routers
-------
    /merge       stateless merge of two HTML documents
    /collection  the session's collection: capture, transfer, edit, save
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scholar_collector.config import settings
from scholar_collector.document import HTMLDocument
from scholar_collector.session import CollectorSession

from scholar_collector.api.routers import collection as collection_router
from scholar_collector.api.routers import merge as merge_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the collection on startup."""
    document = HTMLDocument.read_or_new(settings.collection_path)
    app.state.session = CollectorSession(document)
    logger.info("Collection bound to %s", settings.collection_path)
    yield


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="Scholarly Collector API",
        description=(
            "Collect Google Scholar result entries into one HTML document: "
            "merge captured pages, prune selections, highlight search terms "
            "and save the collection."
        ),
        version="0.3.0",
        lifespan=lifespan,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(merge_router.router, prefix="/merge", tags=["merge"])
    app.include_router(collection_router.router, prefix="/collection", tags=["collection"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn scholar_collector.api.app:app --reload
app = create_app()
