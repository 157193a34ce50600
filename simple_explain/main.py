from contextlib import asynccontextmanager
from typing import Any, Dict

from dotenv import load_dotenv

# Load .env file before importing app modules
load_dotenv(override=True)

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from simple_explain.api.router import api_router
from simple_explain.config import settings
from simple_explain.exceptions import SimpleExplainException
from simple_explain.utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application."""
    logger.info(
        "Starting up FastAPI application",
        environment=settings.ENVIRONMENT,
        llm_configured=settings.llm_configured,
        model=settings.LLM_MODEL,
    )
    try:
        yield
    finally:
        logger.info("Shutting down FastAPI application")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Complex topics, explained simply",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)


# Exception handlers
@app.exception_handler(SimpleExplainException)
async def simple_explain_exception_handler(
    request: Request, exc: SimpleExplainException
) -> JSONResponse:
    """Handle custom application exceptions."""
    logger.error(
        "Application error",
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        path=request.url.path,
        method=request.method,
    )

    response_content: Dict[str, Any] = {
        "error": {
            "code": exc.error_code,
            "message": exc.message,
        }
    }

    # Add details if available and not in production
    if exc.details and settings.ENVIRONMENT != "production":
        response_content["error"]["details"] = exc.details

    return JSONResponse(status_code=exc.status_code, content=response_content)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer malformed request bodies with the same 400 as a missing field."""
    logger.warning(
        "Request validation error",
        errors=exc.errors(),
        path=request.url.path,
        method=request.method,
    )

    formatted_errors = [
        {
            "field": " -> ".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]

    response_content: Dict[str, Any] = {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Missing topic or lang",
        }
    }
    if settings.ENVIRONMENT != "production":
        response_content["error"]["details"] = {"validation_errors": formatted_errors}

    return JSONResponse(status_code=400, content=response_content)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle HTTP errors, including unknown routes and wrong methods."""
    logger.error(
        "HTTP error",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
        method=request.method,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": "HTTP_ERROR",
                "message": exc.detail,
            }
        },
        headers=exc.headers,
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for all unhandled exceptions."""
    logger.exception(
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred. Please try again later.",
            }
        },
    )


# Set CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)
