"""HTTP routes dispatching requests to named counters."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from counter_service.counters.errors import MissingSelector, UnknownOperation
from counter_service.counters.schemas import CounterSnapshot
from counter_service.counters.service import CounterNamespace

router = APIRouter()

USAGE_MESSAGE = (
    "Select a counter to contact by using the `name` URL query string parameter, "
    "for example, ?name=A"
)

OPERATIONS = ("increment", "decrement")

# Any method reaches the same dispatch, selected by path alone
ROUTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def get_counter_namespace(request: Request) -> CounterNamespace:
    namespace: CounterNamespace | None = getattr(request.app.state, "counter_namespace", None)
    if namespace is None:
        raise RuntimeError("Counter namespace not configured on application state")
    return namespace


@router.api_route("/", methods=ROUTED_METHODS, name="counter_read")
async def read_counter(
    name: str | None = Query(default=None),
    namespace: CounterNamespace = Depends(get_counter_namespace),
) -> JSONResponse:
    """Serve the current value of a counter."""

    if not name:
        raise MissingSelector()
    count = await namespace.get(name).read()
    return _respond(name, count)


@router.api_route("/{operation:path}", methods=ROUTED_METHODS, name="counter_operation")
async def apply_operation(
    operation: str,
    name: str | None = Query(default=None),
    amount: int = Query(default=1),
    namespace: CounterNamespace = Depends(get_counter_namespace),
) -> JSONResponse:
    """Increment or decrement a counter by ``amount`` (default 1)."""

    if not name:
        raise MissingSelector()
    if operation not in OPERATIONS:
        raise UnknownOperation(operation)

    counter = namespace.get(name)
    if operation == "increment":
        count = await counter.increment(amount)
    else:
        count = await counter.decrement(amount)
    return _respond(name, count)


def _respond(name: str, count: int) -> JSONResponse:
    snapshot = CounterSnapshot(name=name, count=count)
    return JSONResponse({"ok": True, "data": snapshot.model_dump(mode="json")})
