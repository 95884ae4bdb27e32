"""
Wedding forms module.

Holds each client's working copy of their wedding details, computes
completion and autosaves through the persistence gateway.

Public API:
- FormStateStore: Per-user working copy with debounced autosave
- FormStoreRegistry: One store per signed-in user
- SECTIONS / FIELD_DEFAULTS: The form schema
- calculate_completion_percentage: Completion over the required fields
- AsyncioScheduler / ManualScheduler: Autosave schedulers
"""

from .sections import (
    FIELD_DEFAULTS,
    FIELD_NAMES,
    SECTIONS,
    SECTION_IDS,
    Section,
    default_form_data,
    get_section,
    resolve_section_index,
    get_adjacent_sections,
)
from .completion import (
    REQUIRED_FIELDS,
    calculate_completion_percentage,
    is_filled,
    section_progress,
)
from .state import (
    LoadForm,
    UpdateField,
    UpdateSection,
    ResetForm,
    apply,
)
from .scheduler import (
    Scheduler,
    ScheduledTask,
    AsyncioScheduler,
    ManualScheduler,
)
from .store import AUTOSAVE_DEBOUNCE_SECONDS, FormStateStore
from .registry import FormStoreRegistry
from .exceptions import FormSaveFailedError

__all__ = [
    # Schema
    "FIELD_DEFAULTS",
    "FIELD_NAMES",
    "SECTIONS",
    "SECTION_IDS",
    "Section",
    "default_form_data",
    "get_section",
    "resolve_section_index",
    "get_adjacent_sections",
    # Completion
    "REQUIRED_FIELDS",
    "calculate_completion_percentage",
    "is_filled",
    "section_progress",
    # State transitions
    "LoadForm",
    "UpdateField",
    "UpdateSection",
    "ResetForm",
    "apply",
    # Scheduling
    "Scheduler",
    "ScheduledTask",
    "AsyncioScheduler",
    "ManualScheduler",
    # Store
    "AUTOSAVE_DEBOUNCE_SECONDS",
    "FormStateStore",
    "FormStoreRegistry",
    # Exceptions
    "FormSaveFailedError",
]
