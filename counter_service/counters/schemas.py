"""Pydantic schemas for counter responses."""

from __future__ import annotations

from pydantic import BaseModel


class CounterSnapshot(BaseModel):
    """Counter name with the value produced by the requested operation."""

    name: str
    count: int
