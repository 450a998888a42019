"""
Smoke tests for registration, login and the current-user endpoints.
"""
from conftest import auth_headers, register
from app.api.routes import auth as auth_routes
from app.db.models.user import User
from app.db.models.user_stats import UserStats
from app.db.models.audit_log import AuditLog
from app.services.audit_service import log_user_action


def test_register_creates_user_and_zeroed_stats(client, db):
    data = register(client)

    assert data["token_type"] == "bearer"
    assert len(data["access_token"]) > 0
    assert data["user"]["email"] == "jane@example.com"
    assert data["user"]["role"] == "user"

    user = db.query(User).filter(User.email == "jane@example.com").first()
    stats = db.query(UserStats).filter(UserStats.user_id == user.id).first()
    assert user.password_hash != "testpass123"
    assert stats.resumes_analyzed == 0
    assert stats.avg_score == 0
    assert stats.version == 0


def test_register_duplicate_email(client):
    register(client)
    response = client.post(
        "/auth/register",
        json={"username": "other", "email": "JANE@example.com", "password": "testpass123"},
    )
    assert response.status_code == 409


def test_register_duplicate_username(client):
    register(client)
    response = client.post(
        "/auth/register",
        json={"username": "jane", "email": "other@example.com", "password": "testpass123"},
    )
    assert response.status_code == 409


def test_register_rejects_short_password(client):
    response = client.post(
        "/auth/register",
        json={"username": "jane", "email": "jane@example.com", "password": "123"},
    )
    assert response.status_code == 422


def test_login_success(client, db):
    register(client)
    response = client.post(
        "/auth/login",
        data={"username": "jane@example.com", "password": "testpass123"},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )

    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"
    user = db.query(User).filter(User.email == "jane@example.com").first()
    assert user.last_login_at is not None


def test_login_wrong_password(client):
    register(client)
    response = client.post("/auth/login", data={"username": "jane@example.com", "password": "wrongpass"})
    assert response.status_code == 401


def test_login_unknown_user(client):
    response = client.post("/auth/login", data={"username": "nobody@example.com", "password": "testpass123"})
    assert response.status_code == 401


def test_me_requires_token(client):
    assert client.get("/auth/me").status_code == 401
    assert client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401


def test_me_and_activity(client, db):
    token = register(client)
    headers = auth_headers(token)

    me = client.get("/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["username"] == "jane"

    activity = client.get("/auth/me/activity", headers=headers)
    assert activity.status_code == 200
    actions = [entry["action"] for entry in activity.json()]
    assert actions == ["register"]
    assert db.query(AuditLog).count() == 1


def test_audit_details_do_not_leak_secrets(client, db):
    token = register(client)
    user_id = token["user"]["id"]
    entry = log_user_action(db, user_id, "custom", {"password": "hunter2", "industry": "finance"})

    assert entry.details == {"password": "***REDACTED***", "industry": "finance"}


def test_register_race_returns_conflict(client, db, monkeypatch):
    real_hash_password = auth_routes.hash_password

    def hash_after_competing_signup(password):
        # Another request registers the same email between the checks and the insert
        db.add(User(username="jane-elsewhere", email="jane@example.com", password_hash="x", role="user"))
        db.commit()
        return real_hash_password(password)

    monkeypatch.setattr(auth_routes, "hash_password", hash_after_competing_signup)

    response = client.post(
        "/auth/register",
        json={"username": "jane", "email": "jane@example.com", "password": "testpass123"},
    )

    assert response.status_code == 409
    assert db.query(User).filter(User.username == "jane").first() is None
    assert db.query(User).count() == 1
    assert db.query(UserStats).count() == 0
