from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from stats_analyzer.api import analysis, health
from stats_analyzer.observability.metrics import MetricsMiddleware, metrics_router
from stats_analyzer.observability.logging import setup_logging
from contextlib import asynccontextmanager
import logging
import math

logger = logging.getLogger(__name__)

# READY_FLAG is True between lifespan startup and shutdown
READY_FLAG = False

@asynccontextmanager
async def app_lifespan(app: FastAPI):
    global READY_FLAG
    READY_FLAG = True
    logger.info("Statistics service ready")
    yield
    READY_FLAG = False
    logger.info("Statistics service shutting down")

def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(
        title="Descriptive Statistics Service",
        version="1.0.0",
        lifespan=app_lifespan,
    )
    app.add_middleware(MetricsMiddleware)  # Prometheus request metrics
    app.include_router(metrics_router)     # /metrics
    app.include_router(health.router)      # /health and /ready
    app.include_router(analysis.router)    # /summary and /statistics/{name}
    app.state.ready_flag = lambda: READY_FLAG

    # Malformed bodies and unknown statistic names are all 400, never 422
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Pydantic puts the raised exception object into ctx; make it JSON-safe
        def serialize_error(err):
            if isinstance(err, Exception):
                return str(err)
            if isinstance(err, dict):
                return {k: serialize_error(v) for k, v in err.items()}
            if isinstance(err, (list, tuple)):
                return [serialize_error(e) for e in err]
            if isinstance(err, float) and not math.isfinite(err):
                return str(err)  # JSON has no NaN or Infinity
            return err
        logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=400,
            content={"detail": serialize_error(exc.errors())},
        )

    return app

app = create_app()
