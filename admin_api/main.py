# admin_api/main.py
"""
Admin API
Minimal main file with core FastAPI setup and routing
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import uvicorn
import logging

from .config import get_settings
from .database.db import DatabaseConnection
from .middlewares.jwt_auth import JWTAuthController
from .middlewares.jwt_auth_middleware import JWTAuthMiddleware
from .router_config import setup_routers
from .src.admin.store import AdminStore
from .utils.helperFunctions import api_response, ensure_default_admin
from .utils.security import PasswordHasher

# Configure logging to reduce verbosity
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("passlib").setLevel(logging.ERROR)

logger = logging.getLogger(__name__)


def _bind_database(app: FastAPI, database) -> None:
    settings = app.state.settings
    app.state.admin_store = AdminStore(database[settings.ADMIN_COLLECTION])


def create_app(settings=None, database=None) -> FastAPI:
    """Build the application.

    ``database`` is a pymongo Database (or anything indexable by collection
    name). When omitted, the lifespan connects to MONGODB_URI on startup.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan event handler for startup and shutdown"""
        connection = None
        if getattr(app.state, "admin_store", None) is None:
            connection = DatabaseConnection(settings)
            _bind_database(app, connection.db)

        await ensure_default_admin(app.state.admin_store, app.state.password_hasher, settings)

        yield

        if connection is not None:
            connection.close_connection()

    app = FastAPI(
        title="Admin API",
        description="Management of administrator accounts stored in MongoDB",
        version=settings.SERVICE_VERSION,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.password_hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    app.state.jwt_auth = JWTAuthController(settings)
    app.state.admin_store = None
    if database is not None:
        _bind_database(app, database)

    # Add JWT authentication middleware
    app.add_middleware(JWTAuthMiddleware)

    # Configure CORS middleware (outermost, so 401s carry CORS headers)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS.split(","),
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS.split(","),
        allow_headers=settings.CORS_ALLOW_HEADERS.split(","),
        max_age=settings.CORS_MAX_AGE,
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed or wrong-typed request bodies answer in the envelope too"""
        message = "; ".join(error.get("msg", "Invalid request") for error in exc.errors())
        logger.info("Rejected request to %s: %s", request.url.path, message)
        return api_response(status.HTTP_400_BAD_REQUEST, False, None, f"Invalid request: {message}")

    setup_routers(app)

    @app.get("/health")
    async def health_check():
        """Simple health check endpoint"""
        return {"status": "healthy", "service": settings.SERVICE_NAME}

    @app.get("/")
    async def root():
        """Root endpoint with service information"""
        return {
            "message": "Admin API",
            "version": settings.SERVICE_VERSION,
            "environment": settings.ENVIRONMENT,
        }

    return app


def run():
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(create_app(settings), host=settings.SERVICE_HOST, port=settings.SERVICE_PORT, log_level=settings.LOG_LEVEL.lower())


# Main entry point
if __name__ == "__main__":
    run()
