"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api import attributes, users, values
from src.config import get_settings
from src.database import SessionLocal, init_db
from src.logging_config import configure_logging
from src.services.attribute_service import AttributeService
from src.services.exceptions import ConflictError, NotFoundError, StorageError, ValidationError

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    configure_logging(settings.log_level)
    if settings.seed_default_attributes:
        init_db()
        db = SessionLocal()
        try:
            AttributeService(db).seed_defaults()
        finally:
            db.close()
    yield


app = FastAPI(
    title="User Attribute API",
    description="User management with administrator-defined attributes (EAV)",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(NotFoundError)
async def handle_not_found(_: Request, exc: NotFoundError):
    content: dict[str, object] = {"message": exc.message}
    if exc.entity_id is not None:
        content["id"] = exc.entity_id
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=content)


@app.exception_handler(ConflictError)
async def handle_conflict(_: Request, exc: ConflictError):
    content: dict[str, object] = {"message": exc.message}
    if exc.usage_count is not None:
        content["usageCount"] = exc.usage_count
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


@app.exception_handler(ValidationError)
async def handle_validation_error(_: Request, exc: ValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(_: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(StorageError)
async def handle_storage_error(request: Request, exc: StorageError):
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc.__cause__}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "A database error occurred"},
    )


# Register routers
app.include_router(users.router)
app.include_router(attributes.router)
app.include_router(values.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
