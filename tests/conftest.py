"""Shared test helpers."""

import copy
import asyncio
from typing import Any

import pytest

from pievote.models import Comparison

ENDPOINT = "https://script.example.com/macros/s/deployment/exec"


def make_comparison(comparison_id: str, a: str = "Classic", b: str = "Frangipane",
                    votes_a: int = 0, votes_b: int = 0) -> Comparison:
    """Build a Comparison with a fixed timestamp."""
    return Comparison(
        id=comparison_id,
        a=a,
        b=b,
        votes_a=votes_a,
        votes_b=votes_b,
        created_at="2026-12-01T09:00:00.000Z",
    )


def ids(comparisons) -> list[str]:
    return [c.id for c in comparisons]


class FakeStore:
    """In-memory stand-in for RemoteStore.

    Set ``fetch_error`` / ``push_error`` to make calls fail, and ``gate`` to
    an asyncio.Event to hold pushes until it is set. ``push_gates`` holds
    one event per push, consumed in the order the pushes start.
    """

    def __init__(self, records: Any = None):
        self.records = [] if records is None else records
        self.pushes: list[list[dict[str, Any]]] = []
        self.fetch_error: Exception | None = None
        self.push_error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.push_gates: list[asyncio.Event] = []

    async def fetch_list(self) -> Any:
        if self.fetch_error is not None:
            raise self.fetch_error
        return copy.deepcopy(self.records)

    async def push(self, records: list[dict[str, Any]]) -> None:
        if self.push_gates:
            await self.push_gates.pop(0).wait()
        elif self.gate is not None:
            await self.gate.wait()
        if self.push_error is not None:
            raise self.push_error
        self.pushes.append(records)
        self.records = copy.deepcopy(records)


@pytest.fixture
def three_records():
    """Three stored comparisons, newest first, as the store returns them."""
    return [
        make_comparison("1733050800000.25", "Classic", "Frangipane", 3, 1).to_dict(),
        make_comparison("1733047200000.5", "Crumble", "Lattice", 0, 2).to_dict(),
        make_comparison("1733043600000.75", "Puff Pastry", "Deep-Filled").to_dict(),
    ]


@pytest.fixture
def store(three_records):
    return FakeStore(three_records)
