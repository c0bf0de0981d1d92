"""FastAPI web application for hydrotrack."""

import logging
import os
from contextlib import asynccontextmanager
from typing import List
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv

from hydrotrack.api.routers import auth, users, water
from hydrotrack.database.database import init_db

load_dotenv()

logger = logging.getLogger(__name__)

VERSION = "0.1.0"

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"


def _debug_enabled() -> bool:
    return os.getenv("DEBUG", "False").lower() == "true"


def get_cors_origins() -> List[str]:
    """Allowed CORS origins from the comma-separated `CORS_ORIGINS` env var."""
    raw = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create (or migrate) the schema on startup."""
    init_db()
    yield


# Initialize FastAPI app
app = FastAPI(
    title="hydrotrack API",
    description="Personal hydration tracking: log water intake, view daily and monthly progress",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "x-auth-token"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as `{"msg": ...}`."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"msg": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Render request validation failures as 400 with per-field messages."""
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query", "header")]
        errors.append({
            "field": ".".join(loc) if loc else None,
            "msg": error.get("msg", "Invalid value"),
        })
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"msg": "Validation failed", "errors": errors},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Map unexpected failures to 500; detail only leaves the server in debug mode."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {type(exc).__name__}")
    content = {"msg": "Server error"}
    if _debug_enabled():
        content["error"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(water.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": VERSION}
