"""Plain-text rendering of the comparison list."""

from typing import Iterable

from pievote.models import Comparison, round_half_up

BAR_WIDTH = 30
LOADING_TEXT = "Loading sheet…"
SAVING_TEXT = "Saving…"


def filter_comparisons(comparisons: Iterable[Comparison], query: str) -> list[Comparison]:
    """Keep comparisons where either name contains ``query`` (case-insensitive)."""
    needle = (query or "").lower()
    return [c for c in comparisons if needle in c.a.lower() or needle in c.b.lower()]


def render_bar(pct_a: int, width: int = BAR_WIDTH) -> str:
    filled = round_half_up(pct_a / 100 * width)
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def render_comparison(c: Comparison, width: int = BAR_WIDTH) -> str:
    pct_a, pct_b = c.percentages()
    left = f"A: {c.votes_a} ({pct_a}%)"
    right = f"B: {c.votes_b} ({pct_b}%)"
    gap = max(width + 2 - len(left) - len(right), 1)
    lines = [
        f"{c.a}  vs  {c.b}",
        f"  id {c.id}",
        f"  {c.total} vote(s)",
        "  " + render_bar(pct_a, width),
        "  " + left + " " * gap + right,
    ]
    return "\n".join(lines)


def render_status(loading: bool, saving: bool) -> str:
    if loading:
        return LOADING_TEXT
    if saving:
        return SAVING_TEXT
    return ""


def render_list(comparisons: Iterable[Comparison], query: str = "",
                loading: bool = False, saving: bool = False) -> str:
    """Render the status line and every comparison matching ``query``."""
    blocks = []
    status = render_status(loading, saving)
    if status:
        blocks.append(status)

    shown = filter_comparisons(comparisons, query)
    if shown:
        blocks.extend(render_comparison(c) for c in shown)
    elif not loading:
        blocks.append("No comparisons yet." if not query else f"No comparisons match {query!r}.")
    return "\n\n".join(blocks)
