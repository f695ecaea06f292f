"""
Campus Registry API Server
Student, course and professor pages backed by a hosted row store.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from campus_registry.config.settings import Settings, get_settings
from campus_registry.database.connection import init_table_client, close_table_client
from campus_registry.database.table_client import TableClient
from campus_registry.models.entities import ALL_ENTITIES
from campus_registry.services.entity_controller import build_controllers
from campus_registry.services.status_notifier import StatusNotifier
from campus_registry.api.routes import health
from campus_registry.api.routes.entities import build_entity_router
from campus_registry.utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, table_client: Optional[TableClient] = None) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        settings: Application settings (default: read from environment)
        table_client: Pre-built table client (default: built from settings at startup)
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        client = await init_table_client(settings, table_client)
        app.state.controllers = build_controllers(
            ALL_ENTITIES,
            client,
            lambda: StatusNotifier(timeout=settings.status_timeout_seconds)
        )
        logger.info(f"Registry pages ready: {', '.join(app.state.controllers)}")
        yield
        app.state.controllers = {}
        await close_table_client()

    app = FastAPI(
        title="Campus Registry",
        description="CRUD pages for students, courses and professors",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_error_handling(app)

    @app.get("/")
    async def index():
        """Pages served by this backend"""
        return {
            "pages": [
                {
                    "entity": entity.table,
                    "singular": entity.singular,
                    "plural": entity.plural,
                    "natural_key": entity.natural_key,
                    "path": f"/{entity.table}"
                }
                for entity in ALL_ENTITIES
            ]
        }

    app.include_router(health.router, prefix="/health", tags=["Health"])
    for entity in ALL_ENTITIES:
        app.include_router(build_entity_router(entity), prefix=f"/{entity.table}", tags=[entity.plural.capitalize()])

    return app
