"""Pytest fixtures for counter service tests."""

from collections.abc import AsyncIterator, Iterator
import os
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

_STORAGE_PATH = Path(__file__).resolve().parent / "__storage"
os.environ.setdefault("STORAGE_DIR", str(_STORAGE_PATH))
os.environ.setdefault("STORAGE_FSYNC", "false")
_STORAGE_PATH.mkdir(parents=True, exist_ok=True)

from counter_service.main import app as fastapi_app


@pytest.fixture(scope="session")
def app() -> FastAPI:
    """Return the FastAPI application instance."""
    return fastapi_app


@pytest_asyncio.fixture()
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Provide an `httpx.AsyncClient` wired to the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture(autouse=True)
def clean_storage() -> Iterator[None]:
    """Ensure the storage directory is empty before and after each test."""

    for child in _STORAGE_PATH.glob("*"):
        if child.is_file():
            child.unlink()
    yield
    for child in _STORAGE_PATH.glob("*"):
        if child.is_file():
            child.unlink()


@pytest.fixture(autouse=True)
def reset_runtime(app: FastAPI) -> Iterator[None]:
    """Reset metrics and cached counters so locks never outlive a test's loop."""

    metrics = app.state.metrics
    namespace = app.state.counter_namespace
    metrics.reset()
    namespace.reset()
    yield
    metrics.reset()
    namespace.reset()


@pytest.fixture()
def storage_dir() -> Path:
    """Return the configured storage directory path for assertions."""

    return _STORAGE_PATH
