"""
Internship Portal - Main Application

FastAPI backend with:
- MongoDB for users, profiles, internships, applications and messages
- Skill-overlap recommendations for candidates
- JWT authentication (Candidate / Employer roles)
- Local file storage for resumes and profile images, served from /uploads

Run: uvicorn internship_portal.main:create_app --factory --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pymongo.database import Database
from pymongo.errors import PyMongoError

from internship_portal.api.routes import api_router
from internship_portal.core.config import Settings, get_settings
from internship_portal.core.errors import PortalError, UnexpectedError, ValidationError
from internship_portal.core.logging_config import setup_logging
from internship_portal.db.mongodb import (
    create_mongo_client, get_mongo_db, init_mongo_indexes, test_mongo_connection
)
from internship_portal.schemas.schemas import ErrorResponse
from internship_portal.utils.file_upload import UPLOADS_URL_PREFIX, BlobStorage

logger = logging.getLogger(__name__)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    return "; ".join(parts) or "Invalid request"


def _error_response(error: PortalError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=ErrorResponse(detail=error.detail).model_dump()
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map the error taxonomy onto HTTP responses ({"detail": ...})."""

    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error_response(ValidationError(_format_validation_errors(exc)))

    @app.exception_handler(PyMongoError)
    async def store_error_handler(request: Request, exc: PyMongoError):
        logger.exception("Store error on %s %s", request.method, request.url.path)
        return _error_response(UnexpectedError())

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unexpected error on %s %s", request.method, request.url.path)
        return _error_response(UnexpectedError())


def create_app(settings: Settings = None, db: Database = None) -> FastAPI:
    """
    Build the application.

    Pass `db` to run against an existing database (tests inject mongomock);
    otherwise a MongoClient is created from settings and closed on shutdown.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    client = None
    if db is None:
        client = create_mongo_client(settings)
        db = get_mongo_db(client, settings)

    app = FastAPI(
        title="Internship Portal",
        description="""
        Internship marketplace backend.

        ## Features
        - **Authentication**: JWT-based auth for candidates and employers
        - **Internships**: Post, browse, filter, save
        - **Recommendations**: Internships ranked by skill match
        - **Applications**: Apply once per internship, employers approve or reject
        - **Messages**: Candidate <-> employer notes on an application
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.state.settings = settings
    app.state.db = db
    app.state.storage = BlobStorage(settings.upload_dir, settings.max_resume_size_bytes)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include API routes
    app.include_router(api_router, prefix="/api")

    # Uploaded resumes and images
    app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=settings.upload_dir), name="uploads")

    @app.on_event("startup")
    async def startup_event():
        """Initialize MongoDB indexes on startup."""
        try:
            init_mongo_indexes(app.state.db)
        except PyMongoError as e:
            logger.warning("MongoDB index initialization failed: %s", e)

    @app.on_event("shutdown")
    async def shutdown_event():
        if client is not None:
            client.close()

    @app.get("/", tags=["Health"])
    async def root():
        return {"status": "healthy", "app": "Internship Portal API"}

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Detailed health check."""
        connected = test_mongo_connection(app.state.db.client)
        return {
            "status": "healthy" if connected else "degraded",
            "mongodb": "connected" if connected else "disconnected"
        }

    return app
