"""Command-line front end for a sheet-backed comparison vote.

Every command loads the list from the store, applies one action, waits for
the push to finish and prints the resulting list.

Usage:
    pievote list --filter frangipane
    pievote add "Classic" "Frangipane" --a-img https://example.com/a.jpg
    pievote vote 1729260000000.4821 A
    pievote reset 1729260000000.4821 --yes
    pievote delete 1729260000000.4821
"""

import argparse
import asyncio
import logging
import sys
from typing import TextIO

from pydantic import ValidationError

from pievote.config import ConfigError, Settings
from pievote.confirm import always_yes, prompt_confirm_in_thread
from pievote.remote import RemoteStore
from pievote.sync import ComparisonSynchronizer
from pievote.view import render_list

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pievote",
        description="Compare pairs of items and vote, backed by a spreadsheet store.",
    )
    parser.add_argument("--endpoint", help="Store URL (default: $PIEVOTE_ENDPOINT)")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="Show comparisons")
    list_cmd.add_argument("--filter", default="", help="Only show names containing this")

    add_cmd = sub.add_parser("add", help="Add a comparison")
    add_cmd.add_argument("a", help="Left item name")
    add_cmd.add_argument("b", help="Right item name")
    add_cmd.add_argument("--a-img", default="", help="Left image URL")
    add_cmd.add_argument("--b-img", default="", help="Right image URL")

    vote_cmd = sub.add_parser("vote", help="Vote for one side of a comparison")
    vote_cmd.add_argument("id")
    vote_cmd.add_argument("side", type=str.upper, choices=["A", "B"])

    for name, help_text in (("reset", "Reset a comparison's votes"),
                            ("delete", "Delete a comparison")):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("id")
        cmd.add_argument("-y", "--yes", action="store_true", help="Don't ask for confirmation")

    return parser


async def run(args: argparse.Namespace, settings: Settings,
              out: TextIO = sys.stdout, err: TextIO = sys.stderr) -> int:
    """Execute one parsed command. Returns the process exit status."""
    confirm = always_yes if getattr(args, "yes", False) else prompt_confirm_in_thread

    logger.debug("Running %s against %s", args.command, settings.endpoint)
    async with RemoteStore(settings.require_endpoint(), timeout=settings.timeout) as store:
        sync = ComparisonSynchronizer(store, confirm=confirm)
        if not await sync.load():
            # Pushing now would overwrite the store with an empty list
            print("Could not load comparisons from the store.", file=err)
            return 1

        if args.command in ("vote", "reset", "delete") and sync.get(args.id) is None:
            print(f"No comparison with id {args.id}", file=err)
            return 1

        if args.command == "add":
            try:
                record = sync.add_comparison(args.a, args.b, args.a_img, args.b_img)
            except ValueError as e:
                print(str(e), file=err)
                return 1
            print(f"Added {record.id}", file=out)
        elif args.command == "vote":
            sync.vote(args.id, args.side)
        elif args.command == "reset":
            if not await sync.reset_votes(args.id):
                print("Cancelled.", file=out)
        elif args.command == "delete":
            if not await sync.delete_comparison(args.id):
                print("Cancelled.", file=out)

        await sync.wait_idle()
        print(render_list(sync.comparisons, query=getattr(args, "filter", "")), file=out)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
        if args.endpoint:
            settings.endpoint = args.endpoint
        if args.timeout is not None:
            settings.timeout = args.timeout
    except ValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return asyncio.run(run(args, settings))
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
