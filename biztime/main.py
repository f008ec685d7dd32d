# biztime/main.py

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from sqlalchemy.engine import Engine

from biztime.api.companies import router as companies_router
from biztime.api.industries import router as industries_router
from biztime.api.invoices import router as invoices_router
from biztime.db.engine import DB_URL, create_db_engine
from biztime.errors import register_error_handlers

LOG_LEVEL = os.environ.get("BIZTIME_LOG_LEVEL", "INFO")

logger = logging.getLogger(__name__)


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def create_app(engine: Optional[Engine] = None) -> FastAPI:
    """
    Build the API. Pass an engine to reuse it (tests); otherwise one is
    opened on DB_URL at startup and disposed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_engine = engine is None
        app.state.engine = create_db_engine(DB_URL) if owns_engine else engine
        logger.info("Database engine ready: %s", app.state.engine.url)
        try:
            yield
        finally:
            if owns_engine:
                app.state.engine.dispose()

    app = FastAPI(
        title="BizTime API",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    app.include_router(companies_router)
    app.include_router(invoices_router)
    app.include_router(industries_router)

    register_error_handlers(app)

    return app


configure_logging()

app = create_app()
