"""Fixtures for route unit tests."""

from dataclasses import dataclass
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from enrollflow.api.app import create_app
from enrollflow.api.dependencies import get_record_store, get_workflow
from enrollflow.config import Settings
from enrollflow.notifications import NotificationDispatcher, StaticEvidenceStore
from enrollflow.record_store import Account, Course, RecordStore
from enrollflow.referrals import ReferralLedger
from enrollflow.workflow import EnrollmentWorkflow


@dataclass
class RouteHarness:
    """Test client plus the objects behind it."""

    client: TestClient
    store: RecordStore
    sender: MagicMock
    learner: Account
    course: Course


@pytest.fixture
def store() -> RecordStore:
    """Create an in-memory RecordStore."""
    s = RecordStore(":memory:")
    yield s
    s.close()


@pytest.fixture
def api(store: RecordStore) -> RouteHarness:
    """The real app with its dependencies pointed at an in-memory store."""
    sender = MagicMock()
    workflow = EnrollmentWorkflow(
        store=store,
        ledger=ReferralLedger(store),
        notifier=NotificationDispatcher(sender, background=False),
        evidence_store=StaticEvidenceStore("https://cdn.example.com/evidence"),
    )
    app = create_app(Settings(db_path=":memory:"))

    def override_get_record_store():
        yield store

    def override_get_workflow():
        yield workflow

    app.dependency_overrides[get_record_store] = override_get_record_store
    app.dependency_overrides[get_workflow] = override_get_workflow

    return RouteHarness(
        client=TestClient(app),
        store=store,
        sender=sender,
        learner=store.create_account(name="Asha", email="asha@example.com"),
        course=store.create_course(title="Python Basics", duration="4 days"),
    )
