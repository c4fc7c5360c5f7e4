"""
Main FastAPI application
"""
import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from employee_directory.config.settings import settings
from employee_directory.routes import employee
from employee_directory.utils.errors import (
    EmployeeDirectoryError,
    InternalError,
    RateLimitExceeded,
    ValidationFailed,
)
from employee_directory.utils.rate_limit import FixedWindowRateLimiter

logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO,
                    format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
logger = logging.getLogger(__name__)

rate_limiter = FixedWindowRateLimiter(settings.RATE_LIMIT_REQUESTS, settings.RATE_LIMIT_WINDOW_SECONDS)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events"""
    logger.info("🚀 %s v%s started (data file: %s)", settings.APP_NAME, settings.VERSION, settings.DATA_FILE)
    yield
    logger.info("👋 Application shutdown")

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EmployeeDirectoryError)
async def employee_directory_exception_handler(request: Request, exc: EmployeeDirectoryError):
    headers = None
    if isinstance(exc, RateLimitExceeded):
        headers = {"Retry-After": str(exc.retry_after)}
    return JSONResponse(status_code=exc.status_code, content=exc.to_problem(), headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Query/path parameter type errors share the 422 problem shape
    errors = {}
    for error in exc.errors():
        field = str(error["loc"][-1]) if error.get("loc") else "request"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    logger.info("❌ 422 on %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=422, content=ValidationFailed(errors).to_problem())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("💥 Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content=InternalError().to_problem())


@app.middleware("http")
async def rate_limit_requests(request: Request, call_next):
    if request.url.path.startswith("/api/"):
        client = request.client.host if request.client else "anonymous"
        allowed, retry_after = rate_limiter.hit(client)
        if not allowed:
            logger.warning("⛔ Rate limit exceeded for %s", client)
            exc = RateLimitExceeded(retry_after)
            return JSONResponse(
                status_code=exc.status_code,
                content=exc.to_problem(),
                headers={"Retry-After": str(retry_after)},
            )
    return await call_next(request)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time
    logger.info("🌐 %s %s - %s (%.2fs)", request.method, request.url.path, response.status_code, duration)
    return response

# Mount uploaded files
if not os.path.exists(settings.UPLOAD_DIR):
    os.makedirs(settings.UPLOAD_DIR)
app.mount(settings.PUBLIC_UPLOAD_URL, StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

# Include routers
app.include_router(employee.router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "app": settings.APP_NAME,
        "version": settings.VERSION,
        "status": "running"
    }

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}
