"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from microblog.api import auth, microposts, users
from microblog.config import get_settings
from microblog.database import init_db
from microblog.exceptions import PermissionDenied, ValidationFailed
from microblog.schemas.errors import FieldErrorResponse, ValidationErrorResponse

settings = get_settings()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Starting microblog ({settings.environment})")
    init_db()
    yield


app = FastAPI(
    title="Microblog API",
    description="Microposts, follows and a personalized status feed",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:3001",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(ValidationFailed)
async def validation_failed_handler(request: Request, exc: ValidationFailed):
    """Report rejected writes as per-field errors."""
    body = ValidationErrorResponse(
        errors=[FieldErrorResponse(field=e.field, message=e.message) for e in exc.errors]
    )
    return JSONResponse(
        status_code=422,
        content=body.model_dump(),
    )


@app.exception_handler(PermissionDenied)
async def permission_denied_handler(request: Request, exc: PermissionDenied):
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


# Register routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(microposts.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
