"""
Letters API Tests

Exercises the session endpoints end to end with FastAPI's TestClient.
"""

import pytest
from fastapi.testclient import TestClient

from progress_letter import config
from progress_letter.main import app
from progress_letter.services.form_store import SessionRegistry, get_registry


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def registry():
    return SessionRegistry(max_sessions=10)


@pytest.fixture
def client(registry):
    app.dependency_overrides[get_registry] = lambda: registry
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def session(client):
    """A blank session; returns (session_id, first_student_id)."""
    body = client.post("/letters/sessions", params={"blank": True}).json()
    return body["session_id"], body["state"]["students"][0]["id"]


# =============================================================================
# SESSIONS
# =============================================================================

class TestSessions:

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"

    def test_create_seeded(self, client):
        response = client.post("/letters/sessions")
        assert response.status_code == 201
        state = response.json()["state"]
        assert state["recipient"] == config.DEFAULT_RECIPIENT
        assert state["signature"] == config.DEFAULT_SIGNATURE
        assert len(state["students"]) == 1

    def test_get_and_discard(self, client, session):
        sid, _ = session
        assert client.get(f"/letters/sessions/{sid}").status_code == 200
        assert client.delete(f"/letters/sessions/{sid}").status_code == 204
        assert client.get(f"/letters/sessions/{sid}").status_code == 404
        assert client.delete(f"/letters/sessions/{sid}").status_code == 404

    def test_unknown_session(self, client):
        assert client.get("/letters/sessions/nope").status_code == 404
        assert client.post("/letters/sessions/nope/students").status_code == 404
        assert client.get("/letters/sessions/nope/preview").status_code == 404


# =============================================================================
# EDITING
# =============================================================================

class TestEditing:

    def test_update_field(self, client, session):
        sid, _ = session
        response = client.put(f"/letters/sessions/{sid}/fields/recipient", json={"value": "Teacher"})
        assert response.status_code == 200
        assert response.json()["state"]["recipient"] == "Teacher"

    def test_update_unknown_field(self, client, session):
        sid, _ = session
        response = client.put(f"/letters/sessions/{sid}/fields/students", json={"value": "x"})
        assert response.status_code == 422

    def test_add_and_patch_student(self, client, session):
        sid, first = session
        response = client.post(f"/letters/sessions/{sid}/students")
        assert response.status_code == 201
        new_id = response.json()["student"]["id"]
        assert new_id != first

        response = client.patch(
            f"/letters/sessions/{sid}/students/{new_id}",
            json={"name": "Linh", "next_payment_amount": "3 triệu"},
        )
        students = response.json()["state"]["students"]
        assert students[0]["name"] == ""
        assert students[1]["name"] == "Linh"
        assert students[1]["next_payment_amount"] == "3 triệu"

    def test_patch_keeps_unsent_fields(self, client, session):
        sid, first = session
        client.patch(f"/letters/sessions/{sid}/students/{first}", json={"name": "Linh"})
        response = client.patch(f"/letters/sessions/{sid}/students/{first}", json={"note": "n"})
        student = response.json()["state"]["students"][0]
        assert student["name"] == "Linh"
        assert student["note"] == "n"

    def test_patch_rejects_unknown_field(self, client, session):
        sid, first = session
        response = client.patch(f"/letters/sessions/{sid}/students/{first}", json={"grade": "A"})
        assert response.status_code == 422

    def test_patch_unknown_student_is_noop(self, client, session):
        sid, _ = session
        before = client.get(f"/letters/sessions/{sid}").json()
        response = client.patch(f"/letters/sessions/{sid}/students/missing", json={"name": "X"})
        assert response.status_code == 200
        assert response.json() == before

    def test_remove_student(self, client, session):
        sid, first = session
        new_id = client.post(f"/letters/sessions/{sid}/students").json()["student"]["id"]
        response = client.delete(f"/letters/sessions/{sid}/students/{new_id}")
        assert response.status_code == 200
        assert [s["id"] for s in response.json()["state"]["students"]] == [first]

    def test_first_student_not_removable(self, client, session):
        sid, first = session
        response = client.delete(f"/letters/sessions/{sid}/students/{first}")
        assert response.status_code == 409
        assert len(client.get(f"/letters/sessions/{sid}").json()["state"]["students"]) == 1

    def test_remove_unknown_student_is_noop(self, client, session):
        sid, _ = session
        assert client.delete(f"/letters/sessions/{sid}/students/missing").status_code == 200


# =============================================================================
# OUTPUT
# =============================================================================

class TestOutput:

    @pytest.fixture
    def filled(self, client, session):
        sid, first = session
        for field, value in [("recipient", "Teacher"), ("subject", "Update"), ("signature", "Mr. T")]:
            client.put(f"/letters/sessions/{sid}/fields/{field}", json={"value": value})
        client.patch(
            f"/letters/sessions/{sid}/students/{first}",
            json={"name": "Linh", "strengths": "good listening"},
        )
        return sid

    def test_preview(self, client, filled):
        body = client.get(f"/letters/sessions/{filled}/preview").json()
        assert body["content"] == (
            "Kính gửi Teacher,\n\nThư này là: Update\n\n"
            "A. Về bạn Linh:\n- Điểm mạnh: good listening\n\nKý tên:\nMr. T"
        )
        assert body["student_count"] == 1
        assert len(body["content_hash"]) == 16

    def test_download(self, client, filled):
        preview = client.get(f"/letters/sessions/{filled}/preview").json()["content"]
        response = client.get(f"/letters/sessions/{filled}/download", params={"context": "Cô Anna"})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        disposition = response.headers["content-disposition"]
        assert 'filename="Bao_cao_IELTS_Co_Anna_' in disposition
        assert response.content == preview.encode("utf-8")

    def test_stateless_render(self, client):
        response = client.post("/letters/render", json={
            "recipient": "Teacher",
            "subject": "Update",
            "students": [{"name": "Linh", "next_payment_period": "2/2"}],
            "signature": "Mr. T",
        })
        assert response.status_code == 200
        assert "- Cần đóng từ ngày: 2/2 với số tiền là ...\n" in response.json()["content"]

    def test_stateless_render_assigns_unique_ids(self, client):
        response = client.post("/letters/render", json={
            "students": [{"name": "A"}, {"name": "B"}, {"id": "x", "name": "C"}, {"id": "x", "name": "D"}],
        })
        assert response.status_code == 200
        ids = [s["id"] for s in response.json()["state"]["students"]]
        assert all(ids)
        assert len(set(ids)) == 4
        assert ids[2] == "x"
        assert "D. Về bạn D:" in response.json()["content"]

    def test_patch_null_leaves_field_unchanged(self, client, session):
        sid, first = session
        client.patch(f"/letters/sessions/{sid}/students/{first}", json={"name": "Linh"})
        response = client.patch(f"/letters/sessions/{sid}/students/{first}", json={"name": None})
        assert response.json()["state"]["students"][0]["name"] == "Linh"


# =============================================================================
# REGISTRY
# =============================================================================

class TestRegistry:

    def test_evicts_oldest(self):
        registry = SessionRegistry(max_sessions=2)
        first = registry.create()
        registry.create()
        registry.create()
        assert len(registry) == 2
        with pytest.raises(KeyError):
            registry.get(first.session_id)
