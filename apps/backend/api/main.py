"""
FastAPI application for the movie review API.

Account signup/signin, movie CRUD and review creation over MongoDB.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies import close_db
from api.exceptions import APIError, api_error_handler, request_validation_handler
from api.logging_config import (
    generate_request_id,
    level_for_status,
    logger,
    request_summary,
    set_request_id,
)

from api.routers import auth, movies, reviews


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close the store handle when the server shuts down."""
    yield
    logger.info("Shutting down, closing database connection")
    close_db()


app = FastAPI(
    title="Movie Review API",
    description="Movie catalog with user reviews and average ratings",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

app.add_exception_handler(APIError, api_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """Log all HTTP requests with timing and response status."""
    request_id = generate_request_id()
    set_request_id(request_id)

    skip_paths = {"/health", "/", "/api/docs", "/api/redoc", "/api/openapi.json"}
    if request.url.path in skip_paths:
        return await call_next(request)

    start_time = time.time()
    client_ip = request.client.host if request.client else "unknown"

    logger.info(f"Request started: {request.method} {request.url.path} from {client_ip}")

    try:
        response = await call_next(request)
    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        logger.error(
            f"Request failed: {request.method} {request.url.path} "
            f"duration={duration_ms:.2f}ms error={e}"
        )
        raise

    duration_ms = (time.time() - start_time) * 1000
    logger.log(
        level_for_status(response.status_code),
        request_summary(
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            user=getattr(request.state, "user", None),
        ),
    )

    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(auth.router, tags=["Accounts"])
app.include_router(movies.router, tags=["Movies"])
app.include_router(reviews.router, tags=["Reviews"])


@app.get("/", include_in_schema=False)
async def root():
    """Service banner."""
    return {
        "message": "Movie Review API",
        "docs": "/api/docs",
    }


@app.get("/health", include_in_schema=False)
async def health():
    """Simple health check endpoint."""
    return {"status": "ok"}
