import platform
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from app.utils.settings import APP_ENV

router = APIRouter(tags=["health"])

_STARTED = time.monotonic()


def format_uptime(seconds: float) -> str:
    h = int(seconds // 3600)
    m = int((seconds % 3600) // 60)
    s = int(seconds % 60)
    return f"{h}h {m}m {s}s"


@router.get("/health")
def health(request: Request):
    db_up = request.app.state.db.ping()
    return {
        "status": "OK" if db_up else "DEGRADED",
        "uptime": format_uptime(time.monotonic() - _STARTED),
        "environment": APP_ENV,
        "python_version": platform.python_version(),
        "database": "up" if db_up else "down",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
