"""FastAPI application entrypoint for the counter service."""

from fastapi import FastAPI
from fastapi.requests import Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from counter_service.config import get_settings
from counter_service.counters import (
    CounterNamespace,
    JsonCounterStorage,
    MissingSelector,
    StorageUnavailable,
    UnknownOperation,
    router as counters_router,
)
from counter_service.counters.routes import USAGE_MESSAGE
from counter_service.lib.logger import configure_logging, get_logger
from counter_service.lib.metrics import METRICS

settings = get_settings()

configure_logging(settings.log_level)
logger = get_logger(__name__)

app = FastAPI(title="Counter Service", version="0.1.0")

app.state.metrics = METRICS
app.state.counter_namespace = CounterNamespace(
    JsonCounterStorage(settings.storage_dir, fsync=settings.storage_fsync)
)


@app.exception_handler(MissingSelector)
async def missing_selector_handler(request: Request, exc: MissingSelector) -> Response:
    return PlainTextResponse(USAGE_MESSAGE, status_code=400)


@app.exception_handler(UnknownOperation)
async def unknown_operation_handler(request: Request, exc: UnknownOperation) -> JSONResponse:
    logger.info("counter.operation.unknown", extra={"operation": exc.operation})
    return JSONResponse({"ok": False, "error": "Not found"}, status_code=404)


@app.exception_handler(StorageUnavailable)
async def storage_unavailable_handler(request: Request, exc: StorageUnavailable) -> JSONResponse:
    return JSONResponse({"ok": False, "error": "Counter storage unavailable"}, status_code=503)


@app.get("/health", tags=["system"], summary="Health check")
async def health_check() -> JSONResponse:
    """Return liveness response for uptime monitoring."""
    payload = {"ok": True, "data": {"status": "healthy"}}
    return JSONResponse(content=payload)


@app.get("/metrics", tags=["system"], summary="Metrics endpoint")
async def metrics_endpoint() -> JSONResponse:
    snapshot = METRICS.snapshot()
    return JSONResponse({"ok": True, "data": snapshot})


@app.get("/favicon.ico", include_in_schema=False)
async def favicon() -> Response:
    """Answer browser favicon probes before they reach the operation router."""

    return Response(status_code=204)


# Registered last: its catch-all operation path must not shadow the routes above
app.include_router(counters_router, tags=["counters"])
