"""Core data model for pairwise comparisons and their vote tallies."""

import math
import random
import time
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Self


class Side(str, Enum):
    """Which item of a comparison a vote goes to."""
    A = "A"
    B = "B"

    @classmethod
    def parse(cls, value: "str | Side") -> "Side":
        """Accept "A"/"B" in any case. Raises ValueError otherwise."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Invalid side {value!r}, expected 'A' or 'B'") from None


# Wire key -> attribute name. The order is also the sheet column order.
WIRE_FIELDS = {
    "id": "id",
    "a": "a",
    "b": "b",
    "aImg": "a_img",
    "bImg": "b_img",
    "votesA": "votes_a",
    "votesB": "votes_b",
    "createdAt": "created_at",
}


def new_comparison_id(existing: set[str] = frozenset()) -> str:
    """Make an id from the current time in ms plus a random tie-break.

    Regenerates until the id is not in ``existing``.
    """
    while True:
        candidate = format_id(int(time.time() * 1000) + random.random())
        if candidate not in existing:
            return candidate


def format_id(raw: Any) -> str:
    """Normalise an id read from the store to its string form.

    Spreadsheets hand numeric ids back as numbers, so ``1729260000000.0``
    and ``"1729260000000"`` must compare equal.
    """
    if isinstance(raw, bool):
        return str(raw)
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    if isinstance(raw, (int, float)):
        return repr(raw)
    return str(raw).strip()


def utc_timestamp() -> str:
    """Current time as ISO 8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _as_count(value: Any) -> int:
    try:
        count = int(float(value))
    except (TypeError, ValueError):
        return 0
    return max(count, 0)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class Comparison:
    """One A-vs-B voting item.

    Attributes:
        id: Stable unique identifier (see new_comparison_id)
        a: Display name of the left item
        b: Display name of the right item
        a_img: Optional image URL for the left item ("" if none)
        b_img: Optional image URL for the right item ("" if none)
        votes_a: Votes cast for the left item
        votes_b: Votes cast for the right item
        created_at: ISO 8601 creation timestamp

    Example:
        >>> c = Comparison.create("Classic", "Frangipane")
        >>> c.votes_a, c.votes_b
        (0, 0)
    """
    id: str
    a: str
    b: str
    a_img: str = ""
    b_img: str = ""
    votes_a: int = 0
    votes_b: int = 0
    created_at: str = ""

    @classmethod
    def create(
        cls,
        a: str,
        b: str,
        a_img: str = "",
        b_img: str = "",
        existing_ids: set[str] = frozenset(),
    ) -> Self:
        """Build a fresh record with zero votes and the current timestamp.

        Raises:
            ValueError: If either name is blank after stripping
        """
        a = (a or "").strip()
        b = (b or "").strip()
        if not a or not b:
            raise ValueError("Both items of a comparison need a name")
        return cls(
            id=new_comparison_id(existing_ids),
            a=a,
            b=b,
            a_img=(a_img or "").strip(),
            b_img=(b_img or "").strip(),
            votes_a=0,
            votes_b=0,
            created_at=utc_timestamp(),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Decode a record as returned by the store, leniently.

        Missing strings become "", counts are coerced to non-negative ints.
        """
        def text(key: str) -> str:
            value = data.get(key)
            return "" if value is None else str(value)

        return cls(
            id=format_id(data.get("id", "")),
            a=text("a"),
            b=text("b"),
            a_img=text("aImg"),
            b_img=text("bImg"),
            votes_a=_as_count(data.get("votesA")),
            votes_b=_as_count(data.get("votesB")),
            created_at=text("createdAt"),
        )

    def to_dict(self) -> dict[str, Any]:
        values = asdict(self)
        return {wire: values[attr] for wire, attr in WIRE_FIELDS.items()}

    @property
    def total(self) -> int:
        return self.votes_a + self.votes_b

    def percentages(self) -> tuple[int, int]:
        """Return (pct_a, pct_b), whole numbers summing to 100.

        With no votes cast the split is 50/50.
        """
        total = self.total
        pct_a = round_half_up(self.votes_a / total * 100) if total else 50
        return pct_a, 100 - pct_a

    def votes_for(self, side: Side) -> int:
        return self.votes_a if side is Side.A else self.votes_b
