from datetime import timedelta

from sqlalchemy.exc import IntegrityError, OperationalError

from conftest import at, auth_headers, create_session_token, failing_commit_db, load_profile, make_profile
from dashboard.core.config import settings
from dashboard.core.security import create_signup_token
from dashboard.db.session import get_db
from dashboard.main import app
from dashboard.models.profile import UserRole


def signup(client, user_id: str, **body):
    return client.post(
        "/profile",
        json={"userId": user_id, **body},
        headers={"X-Signup-Token": create_signup_token(user_id)},
    )


def test_get_own_profile(client, user_headers):
    r = client.get("/profile", headers=user_headers)
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["userId"] == "user-1"
    assert data["firstName"] == "Ada"
    assert data["lastName"] == "Lovelace"
    assert data["avatarUrl"] == "/avatars/ada.png"
    assert data["role"] == "USER"
    assert data["active"] is True


def test_get_own_profile_missing_is_404(client):
    r = client.get("/profile", headers=auth_headers("nobody"))
    assert r.status_code == 404
    assert r.json()["error"]["message"] == "Profile not found"


def test_update_only_active_leaves_other_fields(client, user_headers):
    r = client.put("/profile", json={"active": False}, headers=user_headers)
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["active"] is False
    assert data["firstName"] == "Ada"
    assert data["lastName"] == "Lovelace"
    assert data["avatarUrl"] == "/avatars/ada.png"

    stored = load_profile("user-1")
    assert stored.active is False
    assert stored.first_name == "Ada"


def test_update_names_and_clear_avatar(client, user_headers):
    r = client.put(
        "/profile",
        json={"firstName": "Augusta", "avatarUrl": None},
        headers=user_headers,
    )
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["firstName"] == "Augusta"
    assert data["lastName"] == "Lovelace"
    assert data["avatarUrl"] is None
    assert data["active"] is True


def test_update_cannot_change_role(client, user_headers):
    r = client.put("/profile", json={"role": "SUPERADMIN"}, headers=user_headers)
    assert r.status_code == 200
    assert r.json()["role"] == "USER"


def test_update_null_active_is_400(client, user_headers):
    r = client.put("/profile", json={"active": None}, headers=user_headers)
    assert r.status_code == 400
    assert [d["field"] for d in r.json()["error"]["details"]] == ["active"]


def test_update_missing_profile_is_404(client):
    r = client.put("/profile", json={"firstName": "X"}, headers=auth_headers("nobody"))
    assert r.status_code == 404


def test_create_profile_then_conflict(client):
    r = signup(client, "u1")
    assert r.status_code == 201, r.text
    data = r.json()
    assert data["userId"] == "u1"
    assert data["role"] == "USER"
    assert data["active"] is True
    assert data["firstName"] is None

    r2 = signup(client, "u1")
    assert r2.status_code == 409
    assert r2.json()["error"]["message"] == "Profile already exists"


def test_create_profile_blank_names_stored_as_null(client):
    r = signup(client, "u2", firstName="", lastName="Hopper", avatarUrl="")
    assert r.status_code == 201, r.text
    data = r.json()
    assert data["firstName"] is None
    assert data["lastName"] == "Hopper"
    assert data["avatarUrl"] is None


def test_create_profile_with_matching_session(client):
    r = client.post("/profile", json={"userId": "u3", "firstName": "Grace"}, headers=auth_headers("u3"))
    assert r.status_code == 201, r.text
    assert r.json()["firstName"] == "Grace"


def test_create_profile_for_other_session_user_is_403(client):
    r = client.post("/profile", json={"userId": "victim"}, headers=auth_headers("attacker"))
    assert r.status_code == 403
    assert load_profile("victim") is None


def test_create_profile_with_foreign_signup_token_is_403(client):
    r = client.post(
        "/profile",
        json={"userId": "victim"},
        headers={"X-Signup-Token": create_signup_token("attacker")},
    )
    assert r.status_code == 403
    assert load_profile("victim") is None


def test_create_profile_without_proof_is_401(client):
    r = client.post("/profile", json={"userId": "u4"})
    assert r.status_code == 401
    assert load_profile("u4") is None


def test_create_profile_with_bad_signup_token_is_401(client):
    r = client.post("/profile", json={"userId": "u4"}, headers={"X-Signup-Token": "nope"})
    assert r.status_code == 401


def test_create_profile_missing_user_id_is_400(client):
    r = client.post("/profile", json={"firstName": "NoId"})
    assert r.status_code == 400
    assert [d["field"] for d in r.json()["error"]["details"]] == ["userId"]


def test_list_profiles_filters_and_orders_newest_first(client, superadmin_headers):
    make_profile("old", created_at=at(2024, 1, 1))
    make_profile("mid", active=False, created_at=at(2024, 6, 1))
    make_profile("new", created_at=at(2025, 1, 1))

    r = client.get("/profiles", headers=superadmin_headers)
    assert r.status_code == 200, r.text
    ids = [p["userId"] for p in r.json()["profiles"]]
    assert ids.index("new") < ids.index("mid") < ids.index("old")

    r = client.get("/profiles", params={"role": "USER", "active": "true"}, headers=superadmin_headers)
    assert [p["userId"] for p in r.json()["profiles"]] == ["new", "old"]

    r = client.get("/profiles", params={"active": "false"}, headers=superadmin_headers)
    assert [p["userId"] for p in r.json()["profiles"]] == ["mid"]

    r = client.get("/profiles", params={"role": "SUPERADMIN"}, headers=superadmin_headers)
    assert [p["userId"] for p in r.json()["profiles"]] == ["admin-1"]


def test_list_profiles_unknown_role_is_400(client, superadmin_headers):
    r = client.get("/profiles", params={"role": "ROOT"}, headers=superadmin_headers)
    assert r.status_code == 400
    assert [d["field"] for d in r.json()["error"]["details"]] == ["role"]


def test_list_profiles_requires_superadmin(client):
    make_profile("user-9", role=UserRole.USER)
    r = client.get("/profiles", headers=auth_headers("user-9"))
    assert r.status_code == 403


def test_signup_with_stale_session_cookie_uses_signup_token(client):
    stale = create_session_token("u9", expires_delta=timedelta(minutes=-10))
    client.cookies.set(settings.session_cookie_name, stale)
    r = client.post(
        "/profile",
        json={"userId": "u9"},
        headers={"X-Signup-Token": create_signup_token("u9")},
    )
    assert r.status_code == 201, r.text
    assert r.json()["userId"] == "u9"


def test_signup_with_stale_session_cookie_and_no_token_is_401(client):
    client.cookies.set(settings.session_cookie_name, "garbage")
    r = client.post("/profile", json={"userId": "u9"})
    assert r.status_code == 401
    assert load_profile("u9") is None


def test_create_profile_overlong_user_id_is_400(client):
    long_id = "u" * 256
    r = client.post("/profile", json={"userId": long_id}, headers={"X-Signup-Token": create_signup_token(long_id)})
    assert r.status_code == 400
    assert [d["field"] for d in r.json()["error"]["details"]] == ["userId"]


def test_update_overlong_fields_are_400(client, user_headers):
    r = client.put(
        "/profile",
        json={"firstName": "x" * 256, "avatarUrl": "/a" * 600},
        headers=user_headers,
    )
    assert r.status_code == 400
    assert sorted(d["field"] for d in r.json()["error"]["details"]) == ["avatarUrl", "firstName"]
    assert load_profile("user-1").first_name == "Ada"


def test_create_profile_store_failure_is_opaque_500(client):
    app.dependency_overrides[get_db] = failing_commit_db(
        OperationalError("INSERT INTO profiles", {}, Exception("FATAL: password authentication failed for user app"))
    )
    r = signup(client, "u5")
    assert r.status_code == 500
    error = r.json()["error"]
    assert error["code"] == "STORE_ERROR"
    assert error["message"] == "Internal error"
    assert error["details"] is None
    assert "password authentication" not in r.text


def test_create_profile_concurrent_insert_is_409(client):
    app.dependency_overrides[get_db] = failing_commit_db(
        IntegrityError("INSERT INTO profiles", {}, Exception("UNIQUE constraint failed: profiles.user_id"))
    )
    r = signup(client, "u6")
    assert r.status_code == 409
    assert r.json()["error"]["message"] == "Profile already exists"
    assert "UNIQUE constraint" not in r.text
    assert load_profile("u6") is None


def test_update_store_failure_is_opaque_500(client, user_headers):
    app.dependency_overrides[get_db] = failing_commit_db(
        OperationalError("UPDATE profiles", {}, Exception("server closed the connection unexpectedly"))
    )
    r = client.put("/profile", json={"firstName": "Changed"}, headers=user_headers)
    assert r.status_code == 500
    assert r.json()["error"]["message"] == "Internal error"
    assert "server closed" not in r.text
    assert load_profile("user-1").first_name == "Ada"
