"""
Per-user store registry.

The API process keeps one FormStateStore per signed-in user so pending
autosaves and the celebration flag survive between requests. Gateways
are request-scoped (they carry the caller's token), so the registry
rebinds the store to the current request's gateway on every lookup.

Stores that sit idle with nothing left to save are evicted on the next
lookup; the user's following request simply loads a fresh one.
"""

import logging
import time
from typing import Callable, Optional

from modules.persistence.interfaces import IPersistenceBackend

from .scheduler import Scheduler
from .store import AUTOSAVE_DEBOUNCE_SECONDS, FormStateStore

logger = logging.getLogger(__name__)

STORE_IDLE_SECONDS = 1800.0


class FormStoreRegistry:
    """
    Owns the FormStateStore instances for the app session.

    Args:
        scheduler: Shared by every store for its autosave
        debounce_seconds: Autosave quiet period handed to new stores
        idle_seconds: How long an untouched store is kept
        clock: Monotonic time source, in seconds
    """

    def __init__(
        self,
        scheduler: Scheduler,
        debounce_seconds: float = AUTOSAVE_DEBOUNCE_SECONDS,
        idle_seconds: float = STORE_IDLE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._scheduler = scheduler
        self._debounce_seconds = debounce_seconds
        self._idle_seconds = idle_seconds
        self._clock = clock
        self._stores: dict[str, FormStateStore] = {}
        self._last_used: dict[str, float] = {}

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    async def get_store(self, user_id: str, gateway: IPersistenceBackend) -> FormStateStore:
        """
        Get the user's store, creating and loading it on first access.
        """
        self.evict_idle()

        store = self._stores.get(user_id)
        if store is None:
            store = FormStateStore(
                user_id,
                gateway,
                self._scheduler,
                debounce_seconds=self._debounce_seconds,
            )
            self._stores[user_id] = store
            logger.debug(f"Created form store for {user_id}")
        else:
            store.bind_gateway(gateway)
        self._last_used[user_id] = self._clock()

        await store.ensure_loaded()
        return store

    def peek(self, user_id: str) -> Optional[FormStateStore]:
        return self._stores.get(user_id)

    def evict_idle(self) -> int:
        """
        Drop stores unused for `idle_seconds` that have nothing to save.

        Returns:
            Number of stores evicted
        """
        now = self._clock()
        idle = [
            user_id
            for user_id, store in self._stores.items()
            if now - self._last_used.get(user_id, now) >= self._idle_seconds
            and not store.autosave_pending
            and not store.loading
        ]
        for user_id in idle:
            self.drop(user_id)
        if idle:
            logger.info(f"Evicted {len(idle)} idle form store(s)")
        return len(idle)

    def drop(self, user_id: str) -> None:
        """Close and forget a user's store (sign-out)."""
        self._last_used.pop(user_id, None)
        store = self._stores.pop(user_id, None)
        if store is not None:
            store.close()
            logger.debug(f"Dropped form store for {user_id}")

    def clear(self) -> None:
        for user_id in list(self._stores):
            self.drop(user_id)

    def __len__(self) -> int:
        return len(self._stores)
