# app/api/middleware.py
import time

from fastapi import Request

from app.utils.logging import get_logger

logger = get_logger(__name__)


async def request_logger(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.url.path} {response.status_code} - {duration_ms:.0f}ms")
    return response
