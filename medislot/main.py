import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import config
from . import models  # noqa: F401
from .database import Base, engine
from .domain.availability.router import catalog_router
from .domain.availability.router import router as availability_router
from .domain.bookings.router import router as bookings_router
from .domain.doctors.router import router as doctors_router
from .domain.patients.router import router as patients_router
from .shared.errors import DomainError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")

    if config.RATE_LIMIT_ENABLED:
        try:
            from .rate_limiter import get_redis_client

            get_redis_client()  # Connection test
            logger.info("Redis connection established")
        except Exception as e:
            logger.warning(f"Redis connection failed - rate limited endpoints will return 503: {e}")

    yield

    logger.info("Application shutting down...")


app = FastAPI(title="MediSlot API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.warning(f"Validation error for {request.url.path}: {errors}")
    first = errors[0] if errors else {}
    message = first.get("msg", "Invalid request")
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    if loc:
        message = f"{'.'.join(loc)}: {message}"
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "message": message,
            "detail": jsonable_errors(errors),
        },
    )


def jsonable_errors(errors) -> list[dict]:
    # ctx may carry the raw exception object, which is not JSON serializable
    return [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in errors
    ]


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Internal server error"},
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise
    duration_ms = (time.time() - start_time) * 1000
    logger.info(f"{request.method} {request.url.path} {response.status_code} ({duration_ms:.1f}ms)")
    return response


# CORS Configuration
logger.info(f"CORS allowed origins: {config.ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(availability_router)
app.include_router(catalog_router)
app.include_router(bookings_router)
app.include_router(doctors_router)
app.include_router(patients_router)


@app.get("/")
def root():
    return {"message": "MediSlot API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}


@app.get("/health/redis")
async def redis_health_check():
    """Check Redis connectivity for monitoring"""
    try:
        from .rate_limiter import get_redis_client

        redis_client = get_redis_client()

        start_time = time.time()
        redis_client.ping()
        response_time = (time.time() - start_time) * 1000  # Convert to milliseconds

        info = redis_client.info()

        return {
            "status": "healthy",
            "redis": {
                "connected": True,
                "response_time_ms": round(response_time, 2),
                "version": info.get("redis_version", "unknown"),
                "used_memory_human": info.get("used_memory_human", "unknown"),
                "connected_clients": info.get("connected_clients", 0),
            },
        }
    except Exception as e:
        return {"status": "unhealthy", "redis": {"connected": False, "error": str(e)}}
