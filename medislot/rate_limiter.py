"""
Redis rate limiting for booking and slot mutation endpoints
Fixed window per client IP using INCR + EXPIRE
"""

import logging
import os
from typing import Optional

import redis
from fastapi import HTTPException, Request, status

from . import config

logger = logging.getLogger(__name__)

# Redis connection
redis_client: Optional[redis.Redis] = None


def get_redis_client() -> redis.Redis:
    """
    Get or create Redis client
    Supports a REDIS_URL or individual host/port settings
    """
    global redis_client

    if redis_client is None:
        logger.info("🔄 Initializing Redis connection for rate limiting...")

        redis_url = os.getenv("REDIS_URL")

        if redis_url:
            # Mask password in URL for logging
            if "@" in redis_url:
                url_parts = redis_url.split("@")
                protocol = url_parts[0].split(":")[0]
                masked_url = f"{protocol}:****@{url_parts[1]}"
            else:
                masked_url = "****"
            logger.info(f"📡 Using Redis URL connection: {masked_url}")

            client = redis.from_url(
                redis_url,
                decode_responses=True,
                socket_connect_timeout=15,
                socket_timeout=30,
                retry_on_timeout=True,
                health_check_interval=30,
                max_connections=20,
            )
        else:
            redis_host = os.getenv("REDIS_HOST", "localhost")
            redis_port = int(os.getenv("REDIS_PORT", "6379"))
            redis_ssl = os.getenv("REDIS_SSL", "false").lower() == "true"
            logger.info(f"📡 Using Redis at {redis_host}:{redis_port} (SSL: {redis_ssl})")

            client = redis.Redis(
                host=redis_host,
                port=redis_port,
                password=os.getenv("REDIS_PASSWORD", None),
                db=int(os.getenv("REDIS_DB", "0")),
                ssl=redis_ssl,
                decode_responses=True,
                socket_connect_timeout=15,
                socket_timeout=30,
                retry_on_timeout=True,
                health_check_interval=30,
                max_connections=20,
            )

        try:
            client.ping()
        except Exception as e:
            logger.error(f"❌ Failed to connect to Redis: {str(e)}")
            raise
        logger.info("Redis connected successfully")
        redis_client = client

    return redis_client


def check_rate_limit(
    key: str, limit: int, window_seconds: int, client: redis.Redis
) -> tuple[bool, int, int]:
    """Count one request against a fixed window

    Args:
        key: Redis key for this rate limit
        limit: Maximum number of requests allowed
        window_seconds: Time window in seconds
        client: Redis client instance

    Returns:
        Tuple of (is_allowed, current_count, ttl_seconds)
    """
    # INCR and EXPIRE go out together so a key can never be left without a TTL;
    # NX keeps the first request's window from being extended
    pipe = client.pipeline()
    pipe.incr(key)
    pipe.expire(key, window_seconds, nx=True)
    count, _ = pipe.execute()
    ttl = client.ttl(key)
    ttl = ttl if ttl and ttl > 0 else window_seconds
    return count <= limit, count, ttl


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def rate_limit_dependency(
    request: Request,
    limit: int,
    window_seconds: int,
    key_prefix: str = "rate_limit",
):
    """
    FastAPI dependency for rate limiting

    Does nothing unless RATE_LIMIT_ENABLED is set; when enabled it fails
    closed (503) if Redis cannot be reached.
    """
    if not config.RATE_LIMIT_ENABLED:
        return

    try:
        client = get_redis_client()
        key = f"{key_prefix}:{client_ip(request)}"
        is_allowed, current_count, ttl = check_rate_limit(key, limit, window_seconds, client)
    except Exception as e:
        logger.error(f"❌ Rate limiting error: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Rate limiting service temporarily unavailable",
        ) from e

    if not is_allowed:
        logger.warning(f"🚫 Rate limit EXCEEDED for {key} - {current_count}/{limit} requests used")
        raise HTTPException(
            status_code=429,
            detail=f"Rate limit exceeded. Maximum {limit} requests per {window_seconds} seconds.",
            headers={"Retry-After": str(ttl)},
        )


def create_rate_limiter(limit: int, window_seconds: int, key_prefix: str = "rate_limit"):
    """
    Create a rate limiter dependency with specific parameters

    Example usage:
        booking_rate_limit = create_rate_limiter(limit=30, window_seconds=60, key_prefix="bookings")

        @router.post("/bookings")
        async def create_booking(data: BookingCreate, _: None = Depends(booking_rate_limit)):
            ...
    """

    async def rate_limiter(request: Request):
        return await rate_limit_dependency(request, limit, window_seconds, key_prefix)

    return rate_limiter


booking_rate_limit = create_rate_limiter(
    limit=config.BOOKING_RATE_LIMIT,
    window_seconds=config.BOOKING_RATE_WINDOW,
    key_prefix="bookings",
)
