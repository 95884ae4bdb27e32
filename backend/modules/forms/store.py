"""
Form state store.

Holds one client's working copy of their wedding form. Edits apply to the
local copy immediately and reach the persistence gateway through a
trailing-debounce autosave, so a burst of edits produces a single write
carrying the state after the last edit.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from modules.persistence.interfaces import IPersistenceBackend
from modules.persistence.models import FieldMap, FieldValue
from shared.exceptions import PortalError

from .completion import calculate_completion_percentage, section_progress
from .scheduler import ScheduledTask, Scheduler
from .sections import FIELD_NAMES, default_form_data
from .state import FormCommand, LoadForm, ResetForm, UpdateField, UpdateSection, apply

logger = logging.getLogger(__name__)

AUTOSAVE_DEBOUNCE_SECONDS = 2.0


class FormStateStore:
    """
    Working copy of a single user's FieldMap.

    Args:
        user_id: Owner of the wedding form
        gateway: Persistence backend used for load and save
        scheduler: Where the debounced autosave is scheduled
        debounce_seconds: Quiet period before an autosave fires
    """

    def __init__(
        self,
        user_id: str,
        gateway: IPersistenceBackend,
        scheduler: Scheduler,
        debounce_seconds: float = AUTOSAVE_DEBOUNCE_SECONDS,
    ):
        self.user_id = user_id
        self._gateway = gateway
        self._scheduler = scheduler
        self._debounce_seconds = debounce_seconds
        self._state: FieldMap = default_form_data()
        self._completion = calculate_completion_percentage(self._state)
        self._pending: Optional[ScheduledTask] = None
        self._celebrate = False
        # Keys edited locally; a retried load must not overwrite them
        self._touched: set[str] = set()
        self._load_lock = asyncio.Lock()
        self.loading = False
        self.loaded = False
        self.last_saved_at: Optional[datetime] = None

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def state(self) -> FieldMap:
        """Snapshot of the current FieldMap."""
        return dict(self._state)

    def get(self, name: str) -> Optional[FieldValue]:
        return self._state.get(name)

    def completion_percentage(self) -> int:
        return self._completion

    def section_progress(self) -> list[dict[str, Any]]:
        return section_progress(self._state)

    @property
    def autosave_pending(self) -> bool:
        return self._pending is not None and not self._pending.cancelled

    def consume_celebration(self) -> bool:
        """
        True exactly once after the form first reaches 100%.

        Dropping below 100 and climbing back arms it again.
        """
        celebrate, self._celebrate = self._celebrate, False
        return celebrate

    def bind_gateway(self, gateway: IPersistenceBackend) -> None:
        """Point the store at a fresh gateway (one per request)."""
        self._gateway = gateway

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    async def load(self) -> FieldMap:
        """
        Fetch the persisted form and merge it over the current state.

        Fails soft: a gateway error is logged and the defaults stay in place.
        Fields edited locally since the store was created keep their local
        values.
        """
        self.loading = True
        try:
            record = await self._gateway.get_wedding_form(self.user_id)
        except PortalError as e:
            logger.error(f"Failed to load wedding form for {self.user_id}: {e.message}")
            return self.state
        finally:
            self.loading = False

        if record and record.form_data:
            fetched = {k: v for k, v in record.form_data.items() if k not in self._touched}
            if fetched:
                self._dispatch(LoadForm(fetched), schedule_save=False)
        self.loaded = True
        return self.state

    async def ensure_loaded(self) -> FieldMap:
        """
        Load once, however many callers ask at the same time.

        Callers arriving while a load is in flight wait for it instead of
        reading the gateway again.
        """
        async with self._load_lock:
            if not self.loaded:
                await self.load()
        return self.state

    def update_field(self, name: str, value: FieldValue) -> FieldMap:
        """Set one field and schedule an autosave."""
        if name not in FIELD_NAMES:
            logger.warning(f"Unknown wedding form field '{name}' for user {self.user_id}")
        self._touched.add(name)
        self._dispatch(UpdateField(name, value))
        return self.state

    def update_section(self, values: Mapping[str, FieldValue]) -> FieldMap:
        """Merge several fields in one transition and schedule an autosave."""
        unknown = sorted(set(values) - FIELD_NAMES)
        if unknown:
            logger.warning(f"Unknown wedding form fields {unknown} for user {self.user_id}")
        self._touched.update(values)
        self._dispatch(UpdateSection(dict(values)))
        return self.state

    def reset(self) -> FieldMap:
        """Return to the schema defaults (nothing is persisted)."""
        self._cancel_pending()
        # A deliberate reset is not undone by a later load
        self.loaded = True
        self._dispatch(ResetForm(), schedule_save=False)
        return self.state

    async def save(self) -> bool:
        """
        Persist the full FieldMap now, skipping the debounce.

        Returns:
            True when the gateway accepted the write, False otherwise
        """
        self._cancel_pending()
        try:
            await self._persist()
        except PortalError as e:
            logger.error(f"Failed to save wedding form for {self.user_id}: {e.message}")
            return False
        return True

    def close(self) -> None:
        """Drop any pending autosave (sign-out teardown)."""
        self._cancel_pending()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _dispatch(self, command: FormCommand, schedule_save: bool = True) -> None:
        self._state = apply(self._state, command)
        previous = self._completion
        self._completion = calculate_completion_percentage(self._state)
        if previous < 100 and self._completion == 100:
            self._celebrate = True
        elif self._completion < 100:
            self._celebrate = False
        if schedule_save:
            self._schedule_autosave()

    def _schedule_autosave(self) -> None:
        self._cancel_pending()
        self._pending = self._scheduler.schedule(self._debounce_seconds, self._autosave)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    async def _autosave(self) -> None:
        self._pending = None
        try:
            await self._persist()
        except PortalError as e:
            # Best effort: the next edit schedules another attempt
            logger.error(f"Auto-save failed for {self.user_id}: {e.message}")

    async def _persist(self) -> None:
        snapshot = self.state
        await self._gateway.save_wedding_form(self.user_id, snapshot)
        self.last_saved_at = datetime.now(timezone.utc)
        logger.debug(f"Saved wedding form for {self.user_id}")
