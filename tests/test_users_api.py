# tests/test_users_api.py
import logging

from fastapi.testclient import TestClient


def test_register_validation_and_conflict(client: TestClient, login):
    r = client.post(
        "/api/auth/register",
        json={
            "email": "x@test.com",
            "username": "x",
            "password": "one",
            "confirm_password": "two",
        },
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Passwords do not match"}

    login(email="taken@test.com", username="taken")
    r = client.post(
        "/api/auth/register",
        json={
            "email": "TAKEN@test.com",
            "username": "someone-else",
            "password": "pw",
            "confirm_password": "pw",
        },
    )
    assert r.status_code == 409


def test_bad_credentials(client: TestClient, login):
    login()
    client.post("/api/auth/logout")
    r = client.post("/api/auth/login", json={"email": "t@test.com", "password": "nope"})
    assert r.status_code == 400
    assert client.get("/api/users/me").status_code == 401


def test_profile_read_and_patch(signed_in):
    client, user_id = signed_in

    r = client.get("/api/users/me")
    assert r.status_code == 200
    profile = r.json()
    assert profile["id"] == user_id
    assert profile["email"] == "t@test.com"
    assert "hashed_password" not in profile
    assert "password" not in profile

    r = client.patch("/api/users/me", json={"fullname": "Renamed"})
    assert r.status_code == 200
    assert r.json()["fullname"] == "Renamed"
    assert r.json()["username"] == "tester"

    r = client.patch(
        "/api/users/me", json={"password": "brand-new", "confirm_password": "brand-new"}
    )
    assert r.status_code == 200

    client.post("/api/auth/logout")
    r = client.post(
        "/api/auth/login", json={"email": "t@test.com", "password": "brand-new"}
    )
    assert r.status_code == 200


def test_patch_username_conflict(client: TestClient, login):
    login(email="first@test.com", username="first")
    client.post("/api/auth/logout")
    login(email="second@test.com", username="second")

    r = client.patch("/api/users/me", json={"username": "first"})
    assert r.status_code == 409


def test_delete_account_removes_reports_and_signs_out(signed_in):
    client, _ = signed_in
    for month in ("january", "february"):
        r = client.post(
            "/api/reports",
            json={
                "month": month,
                "year": 2025,
                "incomes": [{"concept": "salary", "amount": 100}],
            },
        )
        assert r.status_code == 201

    r = client.delete("/api/users/me")
    assert r.status_code == 200
    assert r.json()["deleted_reports"] == 2

    assert client.get("/api/users/me").status_code == 401
    r = client.post("/api/auth/login", json={"email": "t@test.com", "password": "pw123456"})
    assert r.status_code == 400


def test_delete_account_without_reports(signed_in):
    client, _ = signed_in
    r = client.delete("/api/users/me")
    assert r.status_code == 200
    assert r.json()["deleted_reports"] == 0


def test_request_log_names_signed_in_user(signed_in, caplog):
    client, user_id = signed_in
    caplog.set_level(logging.INFO, logger="finances.req")

    r = client.get("/api/users/me")
    assert r.status_code == 200

    lines = [rec.getMessage() for rec in caplog.records if rec.name == "finances.req"]
    assert any(
        line.startswith("GET /api/users/me -> 200") and line.endswith(f"user={user_id}")
        for line in lines
    )
