"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from . import __version__
from .config import get_settings
from .db import init_db
from .errors import PersistenceFailure, TaskGatewayError
from .logging_config import setup_logging
from .middleware import RequestContextMiddleware
from .routers import tasks

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and initialize the database on startup."""
    setup_logging(get_settings())
    init_db()
    logger.info("app_started", database=str(get_settings().database_path))
    yield


async def gateway_error_handler(request: Request, exc: TaskGatewayError) -> JSONResponse:
    """Render a gateway error as ``{errorKind, detail}``."""
    if isinstance(exc, PersistenceFailure):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def create_app() -> FastAPI:
    app = FastAPI(
        title="Task Ingestion Gateway",
        description="Batch task ingestion with status summaries",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(TaskGatewayError, gateway_error_handler)
    app.include_router(tasks.router)

    @app.get("/health")
    def health():
        """Liveness probe."""
        return {"status": "ok"}

    return app


app = create_app()


def main():
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "task_gateway.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )


if __name__ == "__main__":
    main()
