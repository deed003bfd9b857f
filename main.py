"""
Main FastAPI application entry point.
"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging
from contextlib import asynccontextmanager

from portal.core.config import settings
from portal.core.database import engine, Base
from portal.core.device import assign_device_cookie
from portal.core.webhook import WebhookError
from portal.routers import api_router, pages
from portal.services.submission import REQUEST_KINDS
import portal.models  # noqa: F401  (registers tables on Base.metadata)

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format=settings.log_format,
)
logger = logging.getLogger(__name__)

# Python field name -> camelCase wire name, across every submission body
WIRE_NAMES = {
    name: field.alias or name
    for kind in REQUEST_KINDS.values()
    for name, field in kind.submission_model.model_fields.items()
}


# Lifespan context manager for startup/shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: make sure the local storage table exists
    Base.metadata.create_all(bind=engine)
    logger.info(f"🚀 {settings.app_name} started ({settings.ENVIRONMENT})")

    yield

    logger.info("🛑 Shutting down")


# Create FastAPI app with lifespan
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)


# Add middleware to log unexpected failures
@app.middleware("http")
async def catch_unexpected_errors(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        # Log the full error for debugging
        logger.error(f"Request failed: {str(e)}", exc_info=True)

        # Return detailed error in development, generic in production
        if settings.debug:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": str(e),
                    "error_type": type(e).__name__
                }
            )
        else:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "Failed to submit request"}
            )


# Device cookie scopes local storage to one browser
app.middleware("http")(assign_device_cookie)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Add exception handler for validation errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Map Pydantic validation errors to {field: message}"""
    errors = {}

    for error in exc.errors():
        loc = [str(x) for x in error["loc"]]
        if loc and loc[0] == "body":
            loc = loc[1:]
        field = WIRE_NAMES.get(loc[0], loc[0]) if loc else "form"
        errors.setdefault(field, error["msg"])

    logger.error(f"Validation error on {request.url.path}: {errors}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Validation Error",
            "errors": errors,
        }
    )


# Forwarding failures keep the {"error": ...} shape clients expect
@app.exception_handler(WebhookError)
async def webhook_exception_handler(request: Request, exc: WebhookError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message}
    )


# Include API router
app.include_router(api_router, prefix="/api")


@app.get("/status")
def read_status():
    """Application status."""
    return {
        "status": "ok",
        "app_name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.ENVIRONMENT
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Portal pages last: their /{slug} routes would otherwise shadow the ones above
app.include_router(pages.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )
