"""
World Property Backend API Server
Core functionality: Listings, Saved items, Offers, Legal workflow, FX
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from world_property import __version__
from world_property.api.routes import accounts, fx, health, legal, listings, offers, preferences, saved
from world_property.config.settings import ALLOWED_ORIGINS, DATABASE_URL, SEED_LISTINGS
from world_property.data.seed_listings import seed_listings
from world_property.database.connection import Database
from world_property.repositories import Repositories, in_memory_repositories, postgres_repositories
from world_property.utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)


def create_app(
    database: Optional[Database] = None,
    repositories: Optional[Repositories] = None,
    seed: bool = SEED_LISTINGS,
) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        database: Database handle to use; one is created from DATABASE_URL
            when omitted and the URL is set
        repositories: Prebuilt repository bundle; takes precedence over the
            database and skips schema creation
        seed: Insert the seed listings into an empty listings table

    Returns:
        Configured FastAPI app
    """
    if database is None and repositories is None and DATABASE_URL:
        database = Database(DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        opened = False
        if repositories is not None:
            app.state.repositories = repositories
        elif database is not None:
            await database.open()
            opened = True
            await database.ensure_schema()
            app.state.repositories = postgres_repositories(database)
        else:
            logger.info("Using in-memory repositories")
            app.state.repositories = in_memory_repositories()

        if seed:
            await seed_listings(app.state.repositories)

        yield

        if opened:
            await database.close()

    app = FastAPI(
        title="World Property Backend",
        description="Backend API for the property marketplace, offers and the legal purchase workflow",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.database = database if repositories is None else None

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # Setup centralized error handling
    setup_error_handling(app)

    # Include API routes
    app.include_router(health.router, tags=["Health"])
    app.include_router(listings.router, prefix="/api/listings", tags=["Listings"])
    app.include_router(saved.router, prefix="/api/saved", tags=["Saved"])
    app.include_router(accounts.auth_router, prefix="/api/auth", tags=["Auth"])
    app.include_router(accounts.users_router, prefix="/api/users", tags=["Users"])
    app.include_router(accounts.agents_router, prefix="/api/agents", tags=["Agents"])
    app.include_router(offers.router, prefix="/api/offers", tags=["Offers"])
    app.include_router(legal.router, prefix="/api/legal", tags=["Legal Workflow"])
    app.include_router(fx.router, prefix="/api/fx", tags=["FX"])
    app.include_router(preferences.router, prefix="/api/preferences", tags=["Preferences"])

    return app


# FastAPI app instance is exported for use by uvicorn
# Server startup is handled by main.py at the project root
app = create_app()
