# worldbuilder/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from worldbuilder import __version__
from worldbuilder.api.responses import fail, ok
from worldbuilder.api.v1.router import api_router
from worldbuilder.config import Settings, get_settings
from worldbuilder.database import Store
from worldbuilder.errors import WorldbuilderError

# Setup logging
logging.basicConfig(
    level=get_settings().LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[Store] = None) -> FastAPI:
    """
    Build the API application.

    The store is opened when the app starts serving and closed on shutdown;
    pass one in to point the app at a different database.
    """
    settings = settings or get_settings()
    store = store or Store(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.store = store.open()
        try:
            yield
        finally:
            store.close()

    app = FastAPI(
        title="Worldbuilder API",
        description="API for collaborative tabletop-RPG worldbuilding",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.store = store

    # CORS middleware for frontend access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routes
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    async def root():
        """Health check and welcome message"""
        return ok(message="Welcome to the Worldbuilder API", status="online", version=__version__)

    @app.exception_handler(WorldbuilderError)
    async def domain_exception_handler(request: Request, exc: WorldbuilderError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        if exc.code:
            return fail(exc.status_code, exc.code, message=exc.message)
        return fail(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return fail(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        error = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query"))
        message = error.get("msg", "Invalid request")
        return fail(status.HTTP_400_BAD_REQUEST, f"{field} {message}".strip())

    # Error handler for global exceptions
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return fail(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("worldbuilder.main:app", host="0.0.0.0", port=8000, reload=True)
