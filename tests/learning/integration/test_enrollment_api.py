"""Integration tests for Enrollments API endpoints via TestClient."""

import pytest
from academy.api import register_error_handlers
from academy.learning.api.routes import enrollment_router
from fastapi import FastAPI
from fastapi.testclient import TestClient


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(enrollment_router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def learner(make_user, make_course):
    return {"user_id": make_user(), "course_id": make_course(lessons=4, price=25.0)}


def _enroll(client, learner, **extra):
    return client.post(f"/enrollments/{learner['course_id']}", json={"user_id": learner["user_id"], **extra})


class TestEnrollAPI:
    def test_enroll_returns_201(self, client, learner):
        response = _enroll(client, learner)
        assert response.status_code == 201
        assert "enrollment_id" in response.json()

    def test_enroll_twice_returns_409(self, client, learner):
        _enroll(client, learner)
        response = _enroll(client, learner)
        assert response.status_code == 409
        assert response.json()["error"]["enrollment"] == ["You are already enrolled in this course."]

    def test_enroll_in_missing_course_returns_404(self, client, make_user):
        response = client.post("/enrollments/missing", json={"user_id": make_user()})
        assert response.status_code == 404

    def test_get_enrollment(self, client, learner):
        _enroll(client, learner)
        response = client.get(f"/enrollments/{learner['course_id']}", params={"user_id": learner["user_id"]})
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "active"
        assert body["price_paid"] == 25.0

    def test_unenroll(self, client, learner):
        _enroll(client, learner)
        response = client.delete(f"/enrollments/{learner['course_id']}", params={"user_id": learner["user_id"]})
        assert response.status_code == 200

        response = client.delete(f"/enrollments/{learner['course_id']}", params={"user_id": learner["user_id"]})
        assert response.status_code == 404


class TestProgressAPI:
    def test_progress_updates(self, client, learner):
        _enroll(client, learner)
        url = f"/enrollments/{learner['course_id']}/progress"

        client.patch(url, json={"user_id": learner["user_id"], "lesson_id": "L1", "completed": True})
        response = client.patch(url, json={"user_id": learner["user_id"], "lesson_id": "L2", "completed": False})
        assert response.status_code == 200
        assert response.json()["progress"] == 25.0

        response = client.patch(url, json={"user_id": learner["user_id"], "lesson_id": "L2", "completed": True})
        assert response.json()["progress"] == 50.0
        assert response.json()["lessons_progress"]["L2"]["completed"] is True

    def test_missing_lesson_id_returns_400(self, client, learner):
        _enroll(client, learner)
        response = client.patch(
            f"/enrollments/{learner['course_id']}/progress",
            json={"user_id": learner["user_id"], "completed": True},
        )
        assert response.status_code == 400
        assert response.json()["error"]["lesson_id"] == ["Lesson ID is required."]

    def test_progress_when_not_enrolled_returns_404(self, client, learner):
        response = client.patch(
            f"/enrollments/{learner['course_id']}/progress",
            json={"user_id": learner["user_id"], "lesson_id": "L1", "completed": True},
        )
        assert response.status_code == 404


class TestUpdateAPI:
    def test_patch_enrollment_with_ledger(self, client, learner):
        _enroll(client, learner)
        response = client.patch(
            f"/enrollments/{learner['course_id']}",
            json={
                "user_id": learner["user_id"],
                "lessons_progress": [
                    {"lesson_id": "L1", "completed": True},
                    {"lesson_id": "L2", "completed": True},
                ],
            },
        )
        assert response.status_code == 200
        assert response.json()["progress"] == 50.0

    def test_patch_completed_status_returns_400(self, client, learner):
        _enroll(client, learner)
        response = client.patch(
            f"/enrollments/{learner['course_id']}",
            json={"user_id": learner["user_id"], "status": "completed"},
        )
        assert response.status_code == 400

    @pytest.mark.parametrize(
        "ledger",
        [["L1"], {"L1": True}, {"L1": {"watched_duration": "abc"}}, [{"lesson_id": "L1", "completed": "no"}]],
    )
    def test_patch_ill_formed_ledger_returns_400(self, client, learner, ledger):
        _enroll(client, learner)
        response = client.patch(
            f"/enrollments/{learner['course_id']}",
            json={"user_id": learner["user_id"], "lessons_progress": ledger},
        )
        assert response.status_code == 400
        assert "error" in response.json()


class TestAdminAPI:
    def test_admin_create_list_update_delete(self, client, learner):
        response = client.post(
            "/enrollments/admin",
            json={
                "user_id": learner["user_id"],
                "course_id": learner["course_id"],
                "payment_status": "paid",
                "price_paid": 12.0,
            },
        )
        assert response.status_code == 201
        enrollment_id = response.json()["enrollment_id"]

        listing = client.get("/enrollments/admin").json()["enrollments"]
        assert [e["enrollment_id"] for e in listing] == [enrollment_id]
        assert listing[0]["payment_status"] == "paid"

        response = client.put(f"/enrollments/admin/{enrollment_id}", json={"payment_status": "refunded"})
        assert response.status_code == 200

        response = client.delete(f"/enrollments/admin/{enrollment_id}")
        assert response.status_code == 200
        assert client.get("/enrollments/admin").json()["enrollments"] == []

    def test_user_listing(self, client, learner):
        _enroll(client, learner)
        response = client.get(f"/enrollments/users/{learner['user_id']}")
        assert response.status_code == 200
        assert len(response.json()["enrollments"]) == 1
