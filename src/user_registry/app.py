"""
User Registry Backend API Server
Core functionality: list, fetch, create and update users
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_registry.config.settings import ALLOWED_ORIGINS, API_PREFIX
from user_registry.database.connection import init_database, close_database
from user_registry.api.routes import health
from user_registry.api.routes.users import UserHandler, build_router
from user_registry.services.users_service import PostgresUserStore, UserStore
from user_registry.utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database pool unless an explicit store was supplied"""
    if app.state.manage_database:
        await init_database()
    yield
    if app.state.manage_database:
        await close_database()

def create_app(store: Optional[UserStore] = None) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        store: UserStore to serve requests from. Defaults to a
            PostgresUserStore whose pool is opened in the lifespan.
    """
    app = FastAPI(
        title="User Registry Backend",
        description="CRUD API for user records",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.manage_database = store is None
    app.state.user_store = store if store is not None else PostgresUserStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_error_handling(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(
        build_router(UserHandler(app.state.user_store)),
        prefix=f"{API_PREFIX}/users",
        tags=["Users"]
    )

    logger.info(f"User routes mounted at {API_PREFIX}/users")
    return app
