"""Comparison List Synchronizer: in-memory state mirrored to the store."""

import asyncio
import logging
from enum import Enum
from typing import Any, Callable, Protocol

from pievote import transforms
from pievote.confirm import Confirmer, ask
from pievote.models import Comparison, Side
from pievote.remote import RemoteStoreError
from pievote.transforms import Transform

logger = logging.getLogger(__name__)

RESET_PROMPT = "Reset votes?"
DELETE_PROMPT = "Delete this comparison?"


class StoreClient(Protocol):
    """What the synchronizer needs from a store client (see RemoteStore).

    Expected failures (transport errors, unreadable responses) must be
    raised as RemoteStoreError. ``load`` lets anything else propagate;
    background pushes log it since nobody awaits them.
    """

    async def fetch_list(self) -> Any: ...

    async def push(self, records: list[dict[str, Any]]) -> Any: ...


class SyncState(str, Enum):
    IDLE = "idle"
    SYNCING = "syncing"


Listener = Callable[["ComparisonSynchronizer"], None]


def decode_collection(data: Any) -> list[Comparison]:
    """Turn a ``list`` response into records.

    Anything that is not a JSON array means "no records". Array items that
    are not objects are skipped.
    """
    if not isinstance(data, list):
        logger.warning("Store returned %s instead of a list, treating as empty",
                       type(data).__name__)
        return []

    comparisons = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning("Skipping malformed record at index %d: %r", index, item)
            continue
        comparisons.append(Comparison.from_dict(item))
    return comparisons


class ComparisonSynchronizer:
    """Holds the comparison list and mirrors every change to the store.

    The in-memory list is the source of truth. After each mutation the
    whole list is pushed to the store in a background task, without
    waiting for it: failed pushes are logged, never retried and never
    rolled back.

    Mutations are not serialised. Two quick mutations race two pushes and
    whichever request the store processes last wins, so an intermediate
    state can be lost remotely even though the local list is correct.

    ``mutate`` and the helpers built on it must be called while an asyncio
    event loop is running, since that is where the push task is scheduled.

    Example:
        >>> sync = ComparisonSynchronizer(store, confirm=always_yes)
        >>> await sync.load()
        >>> record = sync.add_comparison("Classic", "Frangipane")
        >>> sync.vote(record.id, "A")
    """

    def __init__(self, store: StoreClient, confirm: Confirmer):
        self._store = store
        self._confirm = confirm
        self._comparisons: tuple[Comparison, ...] = ()
        self._listeners: list[Listener] = []
        self._loading = False
        self._in_flight = 0
        self._push_tasks: set[asyncio.Task] = set()

    # --- observable state ---

    @property
    def comparisons(self) -> tuple[Comparison, ...]:
        return self._comparisons

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def saving(self) -> bool:
        return self._in_flight > 0

    @property
    def pending_pushes(self) -> int:
        return self._in_flight

    @property
    def state(self) -> SyncState:
        if self._loading or self._in_flight:
            return SyncState.SYNCING
        return SyncState.IDLE

    def get(self, comparison_id: str) -> Comparison | None:
        for c in self._comparisons:
            if c.id == comparison_id:
                return c
        return None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after every state change.

        Returns a function that unregisters it.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Listener %r failed", listener)

    # --- store round trips ---

    async def load(self) -> bool:
        """Replace the in-memory list with the store's.

        Returns True on success. On failure the current list is kept.
        """
        self._loading = True
        self._notify()
        loaded = False
        try:
            data = await self._store.fetch_list()
        except RemoteStoreError as e:
            logger.error("Failed to load sheet data: %s", e)
        else:
            self._comparisons = tuple(decode_collection(data))
            loaded = True
            logger.debug("Loaded %d comparisons", len(self._comparisons))
        finally:
            self._loading = False
            self._notify()
        return loaded

    def mutate(self, transform: Transform) -> tuple[Comparison, ...]:
        """Apply ``transform`` locally, then push the result in the background.

        Returns the new list straight away; the push is not awaited.
        """
        loop = asyncio.get_running_loop()
        self._comparisons = tuple(transform(list(self._comparisons)))
        snapshot = [c.to_dict() for c in self._comparisons]

        self._in_flight += 1
        task = loop.create_task(self._push(snapshot))
        self._push_tasks.add(task)
        task.add_done_callback(self._push_tasks.discard)

        self._notify()
        return self._comparisons

    async def _push(self, snapshot: list[dict[str, Any]]) -> None:
        try:
            await self._store.push(snapshot)
        except RemoteStoreError as e:
            logger.error("Failed to save sheet data: %s", e)
        except Exception:
            logger.exception("Unexpected error while saving sheet data")
        finally:
            self._in_flight -= 1
            self._notify()

    async def wait_idle(self) -> None:
        """Wait for every push currently in flight to finish."""
        while self._push_tasks:
            await asyncio.gather(*list(self._push_tasks))

    # --- user actions ---

    def add_comparison(self, a: str, b: str, a_img: str = "", b_img: str = "") -> Comparison:
        """Create a comparison, put it first and sync. Returns the new record.

        Raises:
            ValueError: If either name is blank
        """
        existing = {c.id for c in self._comparisons}
        record = Comparison.create(a, b, a_img, b_img, existing_ids=existing)
        self.mutate(transforms.prepend(record))
        return record

    def vote(self, comparison_id: str, side: Side | str) -> tuple[Comparison, ...]:
        """Add a vote. An unknown id changes nothing but still syncs.

        Raises:
            ValueError: If side is not A or B
        """
        return self.mutate(transforms.increment(comparison_id, side))

    async def reset_votes(self, comparison_id: str) -> bool:
        """Zero a comparison's votes once the user confirms.

        Returns whether the reset went ahead.
        """
        if not await ask(self._confirm, RESET_PROMPT):
            return False
        self.mutate(transforms.reset(comparison_id))
        return True

    async def delete_comparison(self, comparison_id: str) -> bool:
        """Remove a comparison once the user confirms.

        Returns whether the delete went ahead.
        """
        if not await ask(self._confirm, DELETE_PROMPT):
            return False
        self.mutate(transforms.remove(comparison_id))
        return True
