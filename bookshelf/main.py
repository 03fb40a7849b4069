"""FastAPI application entry point."""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse

from bookshelf import __version__
from bookshelf.api import api_router
from bookshelf.config import settings
from bookshelf.core.exceptions import AppException
from bookshelf.core.logging import get_logger, setup_logging
from bookshelf.schemas.common import StatusResponse

setup_logging(settings.log_level)
logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown."""
    logger.info(f"Serving books from {settings.data_file}")
    yield
    logger.info("Shutting down")


app = FastAPI(
    title=settings.app_name,
    description="CRUD API over a JSON file of books",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# Exception handlers
@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """Handle application exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error_code": exc.error_code},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed JSON bodies are a client error."""
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request body", "error_code": "VALIDATION_ERROR"},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "error_code": "INTERNAL_ERROR"},
    )


# Include API router
app.include_router(api_router)


@app.get("/health", response_model=StatusResponse)
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}


@app.get("/", include_in_schema=False)
async def root():
    """Opening the base URL shows the collection."""
    return RedirectResponse(url="/books")


def run() -> None:
    """Run the API with uvicorn on the configured host and port."""
    import uvicorn

    logger.info(f"Books API running on http://localhost:{settings.port}")
    uvicorn.run(
        "bookshelf.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
