"""
Form state transitions.

The store never edits its FieldMap in place. Every change is expressed as
a command and applied by `apply`, which returns a new map.
"""

from dataclasses import dataclass, field
from typing import Mapping, Union

from modules.persistence.models import FieldMap, FieldValue

from .sections import default_form_data


@dataclass(frozen=True)
class LoadForm:
    """Merge a fetched record over the current state."""
    payload: Mapping[str, FieldValue] = field(default_factory=dict)


@dataclass(frozen=True)
class UpdateField:
    name: str
    value: FieldValue


@dataclass(frozen=True)
class UpdateSection:
    """Merge several fields in one transition."""
    payload: Mapping[str, FieldValue] = field(default_factory=dict)


@dataclass(frozen=True)
class ResetForm:
    pass


FormCommand = Union[LoadForm, UpdateField, UpdateSection, ResetForm]


def apply(state: FieldMap, command: FormCommand) -> FieldMap:
    """
    Pure transition function.

    Args:
        state: Current FieldMap (left untouched)
        command: What to change

    Returns:
        The next FieldMap
    """
    if isinstance(command, LoadForm):
        # Nulls in stored rows never replace a default
        loaded = {k: v for k, v in command.payload.items() if v is not None}
        return {**state, **loaded}
    if isinstance(command, UpdateField):
        return {**state, command.name: command.value}
    if isinstance(command, UpdateSection):
        return {**state, **command.payload}
    if isinstance(command, ResetForm):
        return default_form_data()
    raise TypeError(f"Unknown form command: {command!r}")
