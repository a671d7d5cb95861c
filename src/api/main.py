"""Main FastAPI application."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorClient

from api.routers import datasets
from datastore.database import Database
from events.tutor_student import create_tutor_student_events
from settings import settings
from utils.logging import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = AsyncIOMotorClient(settings.database_connection_string)
    client.get_io_loop = asyncio.get_running_loop

    try:
        logger.info(f"Connecting to database '{settings.database_name}'")
        app.state.database = await Database.setup(client, settings.database_name)
        app.state.tutor_student_events = create_tutor_student_events(app.state.database)
        yield
    finally:
        # Close MongoDB connection
        logger.info("Closing database connection")
        client.close()


def create_app() -> FastAPI:
    """Create FastAPI application."""
    app = FastAPI(title=settings.api_title, version=settings.api_version, description=settings.api_description, lifespan=lifespan)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Allows all origins
        allow_credentials=True,
        allow_methods=["*"],  # Allows all methods
        allow_headers=["*"],  # Allows all headers
    )

    # Add routers
    app.include_router(datasets.router)

    @app.get("/")
    async def root():
        """Health check."""
        return {"status": "online", "version": settings.api_version}

    return app


app = create_app()
