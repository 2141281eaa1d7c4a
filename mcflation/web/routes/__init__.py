"""
Web API routes
"""

from mcflation.web.metrics import router as metrics_router
from mcflation.web.routes.health_routes import router as health_router
from mcflation.web.routes.price_routes import router as price_router

__all__ = ["health_router", "metrics_router", "price_router"]
