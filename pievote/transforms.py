"""Pure transforms over a comparison collection.

Each factory returns a callable taking the current list and returning a new
one. Inputs are never mutated, so the previous list stays a valid snapshot.
"""

from dataclasses import replace
from typing import Callable

from pievote.models import Comparison, Side

Transform = Callable[[list[Comparison]], list[Comparison]]


def prepend(record: Comparison) -> Transform:
    """Insert a record at the front (newest first)."""
    def apply(comparisons: list[Comparison]) -> list[Comparison]:
        return [record, *comparisons]
    return apply


def increment(comparison_id: str, side: Side | str) -> Transform:
    """Add one vote to ``side`` of the matching record.

    Unknown ids leave the collection unchanged.
    """
    side = Side.parse(side)

    def apply(comparisons: list[Comparison]) -> list[Comparison]:
        result = []
        for c in comparisons:
            if c.id == comparison_id:
                if side is Side.A:
                    c = replace(c, votes_a=c.votes_a + 1)
                else:
                    c = replace(c, votes_b=c.votes_b + 1)
            result.append(c)
        return result
    return apply


def reset(comparison_id: str) -> Transform:
    """Zero both counters of the matching record."""
    def apply(comparisons: list[Comparison]) -> list[Comparison]:
        return [
            replace(c, votes_a=0, votes_b=0) if c.id == comparison_id else c
            for c in comparisons
        ]
    return apply


def remove(comparison_id: str) -> Transform:
    """Drop the matching record."""
    def apply(comparisons: list[Comparison]) -> list[Comparison]:
        return [c for c in comparisons if c.id != comparison_id]
    return apply
