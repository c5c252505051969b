"""Generate a sample sheet for the reference store.

Builds comparisons between fake bakeries' mince pies with random tallies,
using faker and random with a fixed seed so the output is reproducible,
and writes them in the reference store's JSON sheet format.

Usage:
    python scripts/seed_sheet.py
    python scripts/seed_sheet.py -n 25 -o /tmp/sheet.json
    PIEVOTE_SHEET_PATH=/tmp/sheet.json python scripts/seed_sheet.py
"""

import argparse
import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

from faker import Faker

sys.path.insert(0, str(Path(__file__).parent.parent))

from pievote.config import StoreSettings
from pievote.models import Comparison, format_id
from pievote.sheet import SheetTable

DEFAULT_OUTPUT = Path("sheet.json")

SEED = 20261218
START = datetime(2026, 12, 1, 9, 0, tzinfo=timezone.utc)

STYLES = [
    "Classic", "Frangipane", "Crumble", "Puff Pastry", "Lattice",
    "Gluten-Free", "Brandy Butter", "Star-Topped", "Deep-Filled",
]


def generate_comparisons(count: int, seed: int) -> list[Comparison]:
    """Generate ``count`` comparisons, newest first."""
    fake = Faker(["en_GB"])
    Faker.seed(seed)
    rng = random.Random(seed)

    comparisons = []
    used_ids: set[str] = set()
    for i in range(count):
        created = START + timedelta(hours=i * 7, minutes=rng.randrange(60))
        ms = int(created.timestamp() * 1000)
        comparison_id = format_id(ms + rng.random())
        while comparison_id in used_ids:
            comparison_id = format_id(ms + rng.random())
        used_ids.add(comparison_id)

        left, right = rng.sample(STYLES, 2)
        comparisons.append(Comparison(
            id=comparison_id,
            a=f"{fake.last_name()}'s {left}",
            b=f"{fake.last_name()}'s {right}",
            a_img="",
            b_img="",
            votes_a=rng.randrange(0, 40),
            votes_b=rng.randrange(0, 40),
            created_at=created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        ))

    comparisons.reverse()
    return comparisons


def main():
    default_output = StoreSettings().sheet_path or DEFAULT_OUTPUT
    parser = argparse.ArgumentParser(
        description="Write a sample sheet for the reference store")
    parser.add_argument("-n", "--count", type=int, default=12,
                        help="Number of comparisons (default: 12)")
    parser.add_argument("-o", "--output", default=str(default_output),
                        help=f"Output path (default: {default_output})")
    args = parser.parse_args()

    comparisons = generate_comparisons(args.count, SEED)
    for c in comparisons:
        print(f"  {c.a} vs {c.b}: {c.votes_a}-{c.votes_b}")

    table = SheetTable(path=Path(args.output))
    table.replace([c.to_dict() for c in comparisons])
    print(f"Written {len(comparisons)} comparisons to {args.output}")


if __name__ == "__main__":
    main()
