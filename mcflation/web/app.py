"""
FastAPI application factory and configuration
"""

import time
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from mcflation import __version__
from mcflation.core.config import AppConfig, ConfigManager
from mcflation.core.data.sources import CsvDataSource, DataSource
from mcflation.core.exceptions import PriceChartError, SourceUnavailableError
from mcflation.core.logging import get_logger, log_context
from mcflation.web.models import ErrorResponse
from mcflation.web.routes import health_router, metrics_router, price_router

LOAD_ERROR_MESSAGE = "Unable to load CSV data"

request_logger = get_logger("mcflation.web.requests")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifecycle"""
    app.state.start_time = time.time()
    logger.bind(source=app.state.data_source.name).info("McChickenflation API starting")
    yield
    logger.info("McChickenflation API stopped")


def create_app(config: AppConfig | None = None, data_source: DataSource | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        config: application configuration; loaded from file and environment when omitted
        data_source: dataset reader; a :class:`CsvDataSource` over ``config.data.csv_path`` when omitted
    """
    resolved_config = config or ConfigManager().get_config()
    app = FastAPI(
        title="McChickenflation API",
        description="Historical McChicken prices and their chart description",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.config = resolved_config
    app.state.data_source = data_source or CsvDataSource(configured=resolved_config.data.csv_path)

    _setup_middleware(app, resolved_config)
    _setup_routes(app)
    _setup_exception_handlers(app)

    return app


def _setup_middleware(app: FastAPI, config: AppConfig) -> None:
    if config.server.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.server.allowed_origins,
            allow_methods=["GET"],
            allow_headers=["Content-Type"],
        )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def request_context(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Run each request inside a log context keyed by X-Request-ID."""
        with log_context(trace_id=request.headers.get("X-Request-ID"), path=request.url.path) as trace_id:
            started = time.perf_counter()
            response = await call_next(request)
            response.headers["X-Request-ID"] = trace_id
            request_logger.bind(method=request.method, status_code=response.status_code).debug(
                f"Request completed in {(time.perf_counter() - started) * 1000:.2f} ms"
            )
            return response


def _setup_routes(app: FastAPI) -> None:
    app.include_router(price_router, prefix="/api", tags=["prices"])
    app.include_router(health_router, prefix="/api", tags=["health"])
    app.include_router(metrics_router)


def _setup_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(SourceUnavailableError)
    async def source_unavailable_handler(request: Request, exc: SourceUnavailableError) -> JSONResponse:
        """The dataset could not be read; the only dataset-level error boundary."""
        logger.bind(error_code=exc.error_code, candidates=exc.candidates).error(LOAD_ERROR_MESSAGE)
        return JSONResponse(status_code=500, content=ErrorResponse(error=LOAD_ERROR_MESSAGE).model_dump())

    @app.exception_handler(PriceChartError)
    async def price_chart_error_handler(request: Request, exc: PriceChartError) -> JSONResponse:
        logger.bind(error_code=exc.error_code).error(exc.message)
        return JSONResponse(status_code=500, content=ErrorResponse(error=exc.message).model_dump())


app = create_app()
