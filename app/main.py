from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator

from dotenv import load_dotenv
from fastapi import FastAPI

from app.api import router
from datastore.store import build_default_store
from logging_config import configure_logging
from services.dashboard import build_default_dashboard

load_dotenv()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # Building the dashboard reads settings; missing Cosmos values abort startup.
    dashboard = build_default_dashboard()
    try:
        yield
    finally:
        dashboard.shutdown()
        dashboard.store.close()
        build_default_dashboard.cache_clear()
        build_default_store.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Canal Ice Dashboard",
        description="Read-only API over aggregated ice-safety sensor data.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    return app

app = create_app()
