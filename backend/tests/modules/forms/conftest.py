"""
Pytest fixtures for forms module tests.
"""

import pytest
from unittest.mock import AsyncMock

from modules.forms.scheduler import ManualScheduler
from modules.forms.store import FormStateStore
from modules.persistence.models import WeddingForm


COMPLETE_REQUIRED_FIELDS = {
    "bride_name": "Sarah",
    "groom_name": "Michael",
    "wedding_date": "2024-07-15",
    "venue_name": "Thornton Manor",
    "ceremony_time": "14:00",
    "reception_time": "18:00",
    "contact_phone": "+44 123 456 7890",
}


@pytest.fixture
def gateway():
    """Gateway double with no stored form."""
    mock = AsyncMock()
    mock.get_wedding_form.return_value = None
    mock.save_wedding_form.side_effect = lambda user_id, data: WeddingForm(
        user_id=user_id, form_data=data
    )
    return mock


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def store(gateway, scheduler):
    return FormStateStore("user-123", gateway, scheduler, debounce_seconds=2.0)


@pytest.fixture
def complete_required():
    """Every required field filled."""
    return dict(COMPLETE_REQUIRED_FIELDS)
