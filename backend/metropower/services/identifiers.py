"""Identifier synthesis for employees and projects created without an explicit id."""

from __future__ import annotations

from collections.abc import Callable, Collection
from typing import Final
from uuid import uuid4

EMPLOYEE_ID_PREFIX: Final[str] = "EMP"
PROJECT_ID_PREFIX: Final[str] = "PROJ-"
_SEQUENCE_WIDTH: Final[int] = 3


def sequential_id(prefix: str, existing_count: int, *, width: int = _SEQUENCE_WIDTH) -> str:
    """Return ``prefix`` followed by ``existing_count + 1`` zero-padded to ``width``.

    Only unique under a single writer; two callers that read the same count get
    the same id.
    """
    return f"{prefix}{existing_count + 1:0{width}d}"


def next_employee_id(existing_count: int) -> str:
    return sequential_id(EMPLOYEE_ID_PREFIX, existing_count)


def next_project_id(existing_count: int) -> str:
    return sequential_id(PROJECT_ID_PREFIX, existing_count)


def first_free_id(next_id: Callable[[int], str], existing_count: int, taken: Collection[str]) -> str:
    """Length-based id, stepping past values a client already supplied."""
    count = existing_count
    candidate = next_id(count)
    while candidate in taken:
        count += 1
        candidate = next_id(count)
    return candidate


def random_id(prefix: str) -> str:
    """Collision-resistant id for stores with concurrent writers."""
    base = prefix.rstrip("-")
    return f"{base}-{uuid4().hex[:8].upper()}"
