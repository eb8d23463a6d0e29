import time
import logging
from fastapi import APIRouter

from ..core.config import settings

logger = logging.getLogger(__name__)
router = APIRouter()

_start_time = time.time()


@router.get("/healthz")
async def health():
    """Liveness plus generation backend configuration status."""
    backend_configured = bool(settings.openrouter_api_key)
    if not backend_configured:
        logger.warning("OpenRouter API key not configured; designs will use the fallback layout")

    return {
        "ok": True,
        "status": "healthy" if backend_configured else "degraded",
        "uptime_seconds": round(time.time() - _start_time, 1),
        "services": {
            "generation_backend": backend_configured,
        },
    }
