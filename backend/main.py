"""
Main FastAPI application entry point
"""
from contextlib import asynccontextmanager

from app.api.routes import factories, factories_pages, health, metrics
from app.core.config import get_settings
from app.core.database import dispose_engine, init_db
from app.core.exceptions import ResourceError
from app.core.logging_config import LoggingConfig
from app.core.middleware import LoggingContextMiddleware
from app.core.middleware_metrics import MetricsMiddleware
from app.core.templates import render_template
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Configure logging first
LoggingConfig.configure()

logger = LoggingConfig.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for FastAPI app"""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode...")
    # SQLite deployments have no migration step; Postgres uses Alembic
    if settings.is_sqlite:
        init_db()

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    dispose_engine()


_settings = get_settings()
app = FastAPI(
    title=_settings.app_name,
    description="Administration of payment gateway factory configurations",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(LoggingContextMiddleware)
app.add_middleware(MetricsMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _wants_html(request: Request) -> bool:
    return not request.url.path.startswith("/api") and "text/html" in request.headers.get("accept", "")


@app.exception_handler(StarletteHTTPException)
async def html_aware_http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render a page for browser 404s, JSON otherwise"""
    if exc.status_code == 404 and _wants_html(request):
        return render_template(
            "errors/404.html",
            {"detail": exc.detail, "messages": []},
            request,
            status_code=404,
        )
    return await http_exception_handler(request, exc)


@app.exception_handler(ResourceError)
async def resource_error_handler(request: Request, exc: ResourceError):
    """Store failures that reached the edge of the application"""
    logger.error(
        "Resource store failure",
        exc_info=exc,
        extra={
            "error": exc.message,
            "error_type": type(exc).__name__,
            "resource_id": str(exc.resource_id),
            "path": request.url.path,
            "method": request.method,
        }
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to log all unhandled errors"""
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={
            "error": str(exc),
            "error_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
        }
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": str(exc),
            "type": type(exc).__name__
        }
    )


app.include_router(factories_pages.router)
app.include_router(factories.router)
app.include_router(health.router)
app.include_router(metrics.router)


@app.get("/api")
async def root():
    """Root API endpoint"""
    settings = get_settings()
    return {
        "name": settings.app_name,
        "version": "0.1.0",
        "status": "running",
        "environment": settings.app_env,
    }


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.app_env == "development",
    )
