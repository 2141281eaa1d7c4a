"""
Web API module - FastAPI service
"""

from mcflation.web.app import create_app
from mcflation.web.models import ChartResponse, ErrorResponse, HealthResponse, PricesResponse
from mcflation.web.routes import health_router, metrics_router, price_router

__all__ = [
    "create_app",
    "health_router",
    "metrics_router",
    "price_router",
    "ChartResponse",
    "ErrorResponse",
    "HealthResponse",
    "PricesResponse",
]
