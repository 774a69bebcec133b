from fastapi import Request

from database.db_manager import DatabaseManager
from llm.insights import GeminiInsightService
from llm.scorecard_extractor import GeminiScorecardExtractor


def get_db(request: Request) -> DatabaseManager:
    """FastAPI dependency that provides the DatabaseManager."""
    return request.app.state.db_manager


def get_extractor(request: Request) -> GeminiScorecardExtractor:
    return request.app.state.extractor


def get_insights(request: Request) -> GeminiInsightService:
    return request.app.state.insights
