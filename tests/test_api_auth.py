"""API tests for registration, login and credential handling."""

from datetime import datetime, timedelta

import pytest
import pytz


class TestRegister:
    def test_register_returns_201(self, client):
        response = client.post(
            "/api/users", json={"username": "alice", "password": "pw", "role": "teacher"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert len(body["user_id"]) == 24
        assert "password" not in response.text

    @pytest.mark.parametrize("role", [None, "admin", "Teacher", 5, False, ["teacher"]])
    def test_missing_or_unknown_role_defaults_to_student(self, client, role):
        body = {"username": "bob", "password": "pw"}
        if role is not None:
            body["role"] = role
        assert client.post("/api/users", json=body).status_code == 201

        response = client.post("/api/auth", json={"username": "bob", "password": "pw"})

        assert response.json()["role"] == "student"

    def test_duplicate_username_is_409(self, client):
        body = {"username": "alice", "password": "pw", "role": "student"}
        client.post("/api/users", json=body)

        response = client.post("/api/users", json=body)

        assert response.status_code == 409
        assert response.json()["detail"] == "Username already exists"

    @pytest.mark.parametrize(
        "body", [{"username": "alice"}, {"password": "pw"}, {"username": "", "password": "pw"}]
    )
    def test_missing_fields_are_400(self, client, body):
        response = client.post("/api/users", json=body)

        assert response.status_code == 400
        assert response.json()["errors"]


class TestLogin:
    @pytest.mark.parametrize("role", ["student", "teacher"])
    def test_login_token_carries_registered_role(self, client, codec, role):
        client.post("/api/users", json={"username": "carol", "password": "pw", "role": role})

        response = client.post("/api/auth", json={"username": "carol", "password": "pw"})

        assert response.status_code == 200
        body = response.json()
        assert body["username"] == "carol"
        assert body["role"] == role
        credential = codec.decode(body["token"])
        assert credential.role == role
        assert credential.subject_id == body["subjectId"]

    @pytest.mark.parametrize("username, password", [("carol", "wrong"), ("nobody", "pw")])
    def test_bad_login_is_401(self, client, username, password):
        client.post("/api/users", json={"username": "carol", "password": "pw"})

        response = client.post("/api/auth", json={"username": username, "password": password})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid username or password"

    def test_missing_password_is_400(self, client):
        response = client.post("/api/auth", json={"username": "carol"})

        assert response.status_code == 400


class TestCurrentUser:
    def test_me_with_bearer(self, client, login):
        headers, user_id = login("dave", "teacher")

        response = client.get("/api/auth/me", headers=headers)

        assert response.status_code == 200
        assert response.json()["subjectId"] == user_id
        assert response.json()["role"] == "teacher"

    def test_me_with_x_auth_header(self, client, login):
        headers, user_id = login("dave")
        token = headers["Authorization"].split(" ", 1)[1]

        response = client.get("/api/auth/me", headers={"x-auth": token})

        assert response.json()["subjectId"] == user_id

    def test_me_without_token_is_401(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_expired_token_is_401(self, client, codec, login):
        _, user_id = login("erin")
        issued = datetime.now(pytz.utc) - timedelta(hours=2)
        token = codec.issue(user_id, "erin", "student", now=issued)

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_garbage_token_is_401(self, client):
        response = client.get("/api/courses", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}
