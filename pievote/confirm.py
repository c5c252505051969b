"""Confirmation capabilities for destructive actions.

A confirmer is any callable taking a prompt message and returning a bool,
or an awaitable resolving to one. The synchronizer never assumes a
particular UI; the CLI plugs in a console prompt and tests plug in
``always_yes`` / ``always_no``.
"""

import asyncio
import inspect
import sys
from typing import Awaitable, Callable, TextIO

Confirmer = Callable[[str], "bool | Awaitable[bool]"]


def always_yes(message: str) -> bool:
    return True


def always_no(message: str) -> bool:
    return False


def prompt_confirm(message: str, *, stdin: TextIO | None = None,
                   stdout: TextIO | None = None) -> bool:
    """Ask on the console; only "y" or "yes" counts as confirmation.

    End of input counts as "no". This blocks on stdin; from async code use
    prompt_confirm_in_thread.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stdout.write(f"{message} [y/N] ")
    stdout.flush()
    answer = stdin.readline()
    return answer.strip().lower() in ("y", "yes")


async def ask(confirm: Confirmer, message: str) -> bool:
    """Call ``confirm`` and await its answer if it is awaitable."""
    answer = confirm(message)
    if inspect.isawaitable(answer):
        answer = await answer
    return bool(answer)


async def prompt_confirm_in_thread(message: str) -> bool:
    """``prompt_confirm`` run in a worker thread.

    Reading stdin blocks, so this keeps the event loop (and any pushes in
    flight) running while the user answers.
    """
    return await asyncio.to_thread(prompt_confirm, message)
