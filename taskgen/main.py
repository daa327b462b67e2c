import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, load_settings
from .database import create_db_engine, create_session_factory, create_tables
from .gemini import GeminiClient
from .logging_setup import setup_logging
from .routers import tasks
from .services.tasks import StepGenerator

logger = logging.getLogger(__name__)

# 400 messages for body fields that fail schema validation
VALIDATION_MESSAGES = {
    ("body", "topic"): "Topic is required",
    ("body", "userId"): "Invalid user ID",
    ("body", "completed"): "Invalid completed status",
}


def _validation_message(exc: RequestValidationError) -> str:
    for error in exc.errors():
        loc = tuple(str(part) for part in error.get("loc", ()))
        if loc[:2] == ("body", "topic") and error.get("type") == "string_too_long":
            return "Topic is too long"
        if len(loc) >= 2 and loc[:2] in VALIDATION_MESSAGES:
            return VALIDATION_MESSAGES[loc[:2]]
    return "Invalid request body"


def create_app(settings: Settings, model_client: Optional[StepGenerator] = None) -> FastAPI:
    """Build the application around one explicit settings object."""
    engine = create_db_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        create_tables(engine)
        yield
        engine.dispose()

    app = FastAPI(
        title="Taskgen API",
        description="Generate actionable learning tasks for a topic and track their completion",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.model_client = model_client or GeminiClient(settings)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _validation_message(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    app.include_router(tasks.router, prefix="/api", tags=["tasks"])

    @app.get("/")
    def read_root():
        return {"message": "Backend Works"}

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


def build_app(settings: Optional[Settings] = None) -> FastAPI:
    """Entry point for uvicorn's ``--factory`` mode."""
    settings = settings or load_settings()
    setup_logging(settings.log_level, settings.log_dir)
    return create_app(settings)
