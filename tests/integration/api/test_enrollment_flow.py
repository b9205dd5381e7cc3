"""Integration tests for the enrollment flow through the REST API."""

import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from enrollflow.api import create_app
from enrollflow.config import Settings


@pytest.fixture
def temp_db_path() -> str:
    """Create a temporary database path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        return f.name


@pytest.fixture
def client(temp_db_path: str) -> TestClient:
    """TestClient running the app lifespan against a file database."""
    app = create_app(
        Settings(
            db_path=temp_db_path,
            evidence_base_url="https://evidence.example.com",
            notify_in_background=False,
        )
    )
    with TestClient(app) as c:
        yield c
    # Cleanup
    Path(temp_db_path).unlink(missing_ok=True)
    Path(f"{temp_db_path}-wal").unlink(missing_ok=True)
    Path(f"{temp_db_path}-shm").unlink(missing_ok=True)


def create_account(client: TestClient, name: str, email: str, **extra: str) -> dict:
    response = client.post("/api/v1/accounts", json={"name": name, "email": email, **extra})
    assert response.status_code == 201
    return response.json()["data"]


@pytest.mark.integration
class TestEnrollmentFlow:
    """Submit, review and track a learner end to end."""

    def test_referred_learner_completes_course(self, client: TestClient) -> None:
        """Submission through completion with a referral credited once."""
        referrer = create_account(client, "Ravi", "ravi@example.com", external_id="TSTRV01")
        learner = create_account(client, "Asha", "asha@example.com")
        course = client.post(
            "/api/v1/courses", json={"title": "Python Basics", "duration": "2 days"}
        ).json()["data"]

        submitted = client.post(
            "/api/v1/enrollment-requests",
            json={
                "account_id": learner["id"],
                "course": course["slug"],
                "payment_ref": "ABC123XYZ9",
                "evidence_ref": "proofs/abc.png",
                "referrer_code": "TSTRV01",
            },
        )
        assert submitted.status_code == 201
        request = submitted.json()["data"]
        assert request["status"] == "pending"

        pending = client.get(f"/api/v1/enrollments/{learner['id']}/{course['id']}")
        assert pending.json()["data"]["status"] == "pending"

        detail = client.get(f"/api/v1/enrollment-requests/{request['id']}").json()["data"]
        assert detail["evidence_url"] == "https://evidence.example.com/proofs/abc.png"

        first = client.post(f"/api/v1/enrollment-requests/{request['id']}/approve").json()["data"]
        second = client.post(f"/api/v1/enrollment-requests/{request['id']}/approve").json()["data"]
        assert first["already_approved"] is False
        assert first["referral_credited"] is True
        assert second["already_approved"] is True

        assert client.get(f"/api/v1/courses/{course['id']}").json()["data"]["students"] == 1
        assert client.get(f"/api/v1/accounts/{referrer['id']}").json()["data"]["referral_count"] == 1

        client.put(
            f"/api/v1/enrollments/{learner['id']}/{course['id']}/days/1", json={"completed": True}
        )
        done = client.put(
            f"/api/v1/enrollments/{learner['id']}/{course['id']}/days/2", json={"completed": True}
        ).json()["data"]
        assert done["status"] == "completed"
        assert done["progress"] == 100
        assert done["days_completed_per_duration"] == "2/2"

    def test_rejected_request_drops_pending_enrollment(self, client: TestClient) -> None:
        """Rejection removes the never-activated enrollment."""
        learner = create_account(client, "Asha", "asha@example.com")
        course = client.post(
            "/api/v1/courses", json={"title": "Python Basics", "duration": "2 days"}
        ).json()["data"]
        request = client.post(
            "/api/v1/enrollment-requests",
            json={
                "account_id": learner["id"],
                "course": course["id"],
                "payment_ref": "PAY001",
                "evidence_ref": "p.png",
            },
        ).json()["data"]

        response = client.post(
            f"/api/v1/enrollment-requests/{request['id']}/reject", json={"reason": "Unreadable"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["request"]["rejection_reason"] == "Unreadable"
        missing = client.get(f"/api/v1/enrollments/{learner['id']}/{course['id']}")
        assert missing.status_code == 404

    def test_archive_round_trip(self, client: TestClient) -> None:
        """Delete, restore and purge keep IDs and payment references consistent."""
        learner = create_account(client, "Asha", "asha@example.com")
        course = client.post(
            "/api/v1/courses", json={"title": "Python Basics", "duration": "2 days"}
        ).json()["data"]
        body = {
            "account_id": learner["id"],
            "course": course["id"],
            "payment_ref": "PAY001",
            "evidence_ref": "p.png",
        }
        request = client.post("/api/v1/enrollment-requests", json=body).json()["data"]

        client.post("/api/v1/enrollment-requests/delete", json={"ids": [request["id"]]})
        archived = client.get("/api/v1/archive").json()["data"]
        assert [entry["id"] for entry in archived] == [request["id"]]

        # Token is free again while archived
        reused = client.post("/api/v1/enrollment-requests", json=body)
        assert reused.status_code == 201

        restore = client.post("/api/v1/archive/restore", json={"ids": [request["id"]]}).json()["data"]
        assert restore["count"] == 0
        assert restore["conflicts"] == [request["id"]]

        purged = client.post("/api/v1/archive/purge", json={"ids": [request["id"]]}).json()["data"]
        assert purged["count"] == 1
        assert client.get("/api/v1/archive").json()["data"] == []

    def test_duplicate_payment_reference_conflict(self, client: TestClient) -> None:
        """A live payment reference cannot be submitted twice."""
        learner = create_account(client, "Asha", "asha@example.com")
        course = client.post(
            "/api/v1/courses", json={"title": "Python Basics", "duration": "2 days"}
        ).json()["data"]
        body = {
            "account_id": learner["id"],
            "course": course["id"],
            "payment_ref": "PAY001",
            "evidence_ref": "p.png",
        }
        client.post("/api/v1/enrollment-requests", json=body)

        response = client.post("/api/v1/enrollment-requests", json=body)

        assert response.status_code == 409
        assert response.json()["data"] is None
        assert response.json()["error"]
