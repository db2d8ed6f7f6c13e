"""
FastAPI application for the PDF extraction service.

Provides endpoints for:
- Extracting the headings and a summary from an uploaded PDF
- Health checks
"""

import logging

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.common.validation import UploadValidationError

from . import __version__
from .config import get_settings
from .models import ErrorResponse, HealthResponse
from .routers import process_pdf
from .services.ai import AIServiceError, get_ai_service

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting PDF Extraction Service...")
    # Initialize services on startup
    get_ai_service()
    logger.info("Services initialized successfully")
    yield
    logger.info("Shutting down PDF Extraction Service...")


# Create FastAPI application
app = FastAPI(
    title="PDF Extraction API",
    description="Extracts headings and a summary from PDF documents using AI",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS for the browser frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Endpoints
# =============================================================================


@app.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """Root endpoint - health check."""
    return HealthResponse(status="healthy")


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy")


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(process_pdf.router)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(UploadValidationError)
async def upload_validation_error_handler(request: Request, exc: UploadValidationError):
    """Handle rejected uploads."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


@app.exception_handler(AIServiceError)
async def ai_service_error_handler(request: Request, exc: AIServiceError):
    """Handle AI service errors."""
    logger.error("AI service error (%s): %s", exc.kind.value, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.user_message).model_dump(),
    )
