"""FastAPI application for the golf round tracker."""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from database.connection import db
from database.db_manager import DatabaseManager
from llm.insights import GeminiInsightService
from llm.scorecard_extractor import GeminiScorecardExtractor

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _cors_origins() -> list:
    raw = os.environ.get("CORS_ORIGINS", "http://localhost:3000")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize DB pool and service clients on startup, close on shutdown."""
    await db.initialize(dsn=os.environ.get("DATABASE_URL"))
    app.state.db_manager = DatabaseManager(db.pool)
    app.state.extractor = GeminiScorecardExtractor()
    app.state.insights = GeminiInsightService()
    logger.info("API started")
    yield
    await db.close()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Golf Round Tracker API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import courses, insights, rounds, scan, stats, users
    app.include_router(courses.router, prefix="/api/courses", tags=["courses"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(rounds.router, prefix="/api/rounds", tags=["rounds"])
    app.include_router(stats.router, prefix="/api/stats", tags=["stats"])
    app.include_router(scan.router, prefix="/api/scan", tags=["scan"])
    app.include_router(insights.router, prefix="/api/insights", tags=["insights"])

    @app.get("/api/health")
    async def health():
        healthy = await db.health_check()
        return {"status": "ok" if healthy else "degraded", "database": healthy}

    return app


app = create_app()
