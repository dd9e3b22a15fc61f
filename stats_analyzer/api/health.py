from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from stats_analyzer.services.descriptive import STATISTICS

router = APIRouter()


@router.get("/health")
async def health(request: Request) -> dict[str, str]:
    """Liveness probe: 200 with the running service version."""
    return {"status": "ok", "version": request.app.version}


@router.get("/ready")
async def ready(request: Request):
    """
    Readiness probe.
    503 until lifespan startup has run; afterwards 200 listing the statistics
    served under /statistics/{name}.
    """
    is_ready = getattr(request.app.state, "ready_flag", None)
    if not (is_ready and is_ready()):
        return JSONResponse({"status": "not ready"}, status_code=HTTP_503_SERVICE_UNAVAILABLE)
    return {"status": "ready", "statistics": sorted(STATISTICS)}
