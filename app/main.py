"""Main FastAPI application."""
import functools
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from app.auth import EnvSecretAuthorizer, SharedSecretAuthorizer
from app.config import HOST, PORT, AppConfig
from app.database import make_session_factory
from app.errors import AppError
from app.routers import articles, content_import, news, uploads
from app.services.article_store import ArticleStore
from app.services.feeds import fetch_feed
from app.utils.logger import configure_logging

logger = logging.getLogger(__name__)

def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Build the application around an explicit configuration."""
    config = config or AppConfig.from_env()
    configure_logging(config.log_dir)

    # The upload dir must exist before StaticFiles is mounted on it
    config.upload_dir.mkdir(parents=True, exist_ok=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup/shutdown events."""
        logger.info("Starting VMS backend server...")

        app.state.store.init_schema()
        logger.info("Database tables created/verified")

        yield

        logger.info("Shutting down VMS backend server...")

    app = FastAPI(
        title="VMS Backend API",
        description="Backend for the Validation Management Solutions website: articles, uploads, news",
        version="1.0.0",
        lifespan=lifespan
    )

    app.state.config = config
    app.state.store = ArticleStore(make_session_factory(config.database_url))
    if config.admin_password is not None:
        app.state.authorizer = SharedSecretAuthorizer(config.admin_password)
    else:
        app.state.authorizer = EnvSecretAuthorizer()
    app.state.feed_fetcher = functools.partial(fetch_feed, timeout=config.feed_timeout)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error for {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": AppError.message},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Invalid request body for {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request"},
        )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(articles.router)
    app.include_router(uploads.router)
    app.include_router(news.router)
    app.include_router(content_import.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    # Uploaded images
    app.mount("/uploads", StaticFiles(directory=config.upload_dir), name="uploads")

    # Built front end, with index.html as the fallback for client-side routes
    if (config.dist_dir / "index.html").exists():
        dist_dir = config.dist_dir.resolve()

        @app.get("/{full_path:path}", include_in_schema=False)
        async def serve_spa(full_path: str):
            """Serve the single-page front end."""
            candidate = (dist_dir / full_path).resolve()
            if full_path and candidate.is_file() and candidate.is_relative_to(dist_dir):
                return FileResponse(candidate)
            return FileResponse(dist_dir / "index.html")

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=HOST, port=PORT)
