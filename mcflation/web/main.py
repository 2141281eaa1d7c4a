"""
Web service launcher
"""

import uvicorn

from mcflation.core.config import AppConfig, ConfigManager
from mcflation.core.logging import configure_logging


def serve(config: AppConfig | None = None) -> None:
    """Start the FastAPI service with uvicorn."""

    resolved = config or ConfigManager().get_config()
    configure_logging(
        level=resolved.logging.level,
        format=resolved.logging.format,
        file_output=bool(resolved.logging.file),
        file_path=resolved.logging.file,
    )
    uvicorn.run(
        "mcflation.web.app:app",
        host=resolved.server.host,
        port=resolved.server.port,
        reload=resolved.server.reload,
        log_level=resolved.logging.level.lower(),
    )


if __name__ == "__main__":
    serve()
