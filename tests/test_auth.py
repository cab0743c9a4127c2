"""
Authentication tests: service layer and the login/logout/user/change-password endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from realty.config import Settings
from realty.main import create_app
from realty.services.auth import AuthService
from realty.sessions import MemorySessionStore
from realty.utils.auth import hash_password, verify_password
from realty.utils.exceptions import InvalidCredentialsError, NotFoundError
from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD


@pytest.fixture
def auth_service(memory_storage, settings) -> AuthService:
    """Create an auth service on memory backends."""
    return AuthService(memory_storage, MemorySessionStore(), settings)


class TestPasswordHashing:
    """Test bcrypt helpers."""

    def test_hash_and_verify(self):
        hashed = hash_password("Segredo#123")

        assert hashed != "Segredo#123"
        assert verify_password("Segredo#123", hashed) is True
        assert verify_password("segredo#123", hashed) is False

    def test_empty_password_rejected(self):
        with pytest.raises(ValueError):
            hash_password("")


class TestAuthService:
    """Test AuthService against memory storage."""

    @pytest.mark.asyncio
    async def test_bootstrap_creates_admin_once(self, auth_service):
        created = await auth_service.bootstrap_admin()
        again = await auth_service.bootstrap_admin()

        assert created is not None
        assert created.email == ADMIN_EMAIL
        assert again is None
        assert len(await auth_service.storage.users.list()) == 1

    @pytest.mark.asyncio
    async def test_bootstrap_skipped_without_credentials(self, memory_storage):
        settings = Settings(environment="testing", storage_backend="memory", session_store="memory")
        service = AuthService(memory_storage, MemorySessionStore(), settings)

        assert await service.bootstrap_admin() is None
        assert await memory_storage.users.list() == []

    @pytest.mark.asyncio
    async def test_login_creates_session(self, auth_service):
        await auth_service.bootstrap_admin()

        user, sid, expires_at = await auth_service.login(ADMIN_EMAIL, ADMIN_PASSWORD)

        assert user.email == ADMIN_EMAIL
        assert not hasattr(user, "password_hash")
        payload = await auth_service.session_store.get(sid)
        assert payload["user"]["id"] == user.id

    @pytest.mark.asyncio
    async def test_login_email_case_insensitive(self, auth_service):
        await auth_service.bootstrap_admin()

        user, _, _ = await auth_service.login(ADMIN_EMAIL.upper(), ADMIN_PASSWORD)

        assert user.email == ADMIN_EMAIL

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, auth_service):
        await auth_service.bootstrap_admin()

        with pytest.raises(InvalidCredentialsError):
            await auth_service.login(ADMIN_EMAIL, "wrong-password")

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, auth_service):
        with pytest.raises(InvalidCredentialsError):
            await auth_service.login("nobody@example.com", ADMIN_PASSWORD)

    @pytest.mark.asyncio
    async def test_change_password(self, auth_service):
        admin = await auth_service.bootstrap_admin()

        await auth_service.change_password(admin.id, ADMIN_PASSWORD, "Nova#Senha2025")

        stored = await auth_service.storage.get_user(admin.id)
        assert verify_password("Nova#Senha2025", stored.password_hash)

    @pytest.mark.asyncio
    async def test_change_password_wrong_current_keeps_hash(self, auth_service):
        admin = await auth_service.bootstrap_admin()

        with pytest.raises(InvalidCredentialsError):
            await auth_service.change_password(admin.id, "wrong", "Nova#Senha2025")

        stored = await auth_service.storage.get_user(admin.id)
        assert stored.password_hash == admin.password_hash

    @pytest.mark.asyncio
    async def test_change_password_missing_user(self, auth_service):
        with pytest.raises(NotFoundError):
            await auth_service.change_password("missing", ADMIN_PASSWORD, "Nova#Senha2025")

    @pytest.mark.asyncio
    async def test_resolve_session_rejects_forged_cookie(self, auth_service):
        assert await auth_service.resolve_session(None) is None
        assert await auth_service.resolve_session("forged") is None


class TestAuthEndpoints:
    """Test the authentication API."""

    def test_login_sets_cookie(self, client: TestClient, settings):
        response = client.post("/api/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == ADMIN_EMAIL
        assert data["name"] == "Test Admin"
        assert "password_hash" not in data
        assert settings.session_cookie_name in response.cookies
        set_cookie = response.headers["set-cookie"].lower()
        assert "httponly" in set_cookie
        assert "samesite=lax" in set_cookie

    def test_login_invalid_credentials(self, client: TestClient):
        response = client.post("/api/login", json={"email": ADMIN_EMAIL, "password": "wrong"})

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHORIZED"

    def test_login_malformed_body(self, client: TestClient):
        response = client.post("/api/login", json={"email": "not-an-email"})

        assert response.status_code == 400
        fields = {error["field"] for error in response.json()["errors"]}
        assert {"email", "password"} <= fields

    def test_current_user(self, auth_client: TestClient):
        response = auth_client.get("/api/user")

        assert response.status_code == 200
        assert response.json()["email"] == ADMIN_EMAIL

    def test_current_user_requires_session(self, client: TestClient):
        response = client.get("/api/user")

        assert response.status_code == 401
        assert response.json()["message"] == "Not authenticated"

    def test_forged_cookie_rejected(self, client: TestClient, settings):
        client.cookies.set(settings.session_cookie_name, "forged-value")

        assert client.get("/api/user").status_code == 401

    def test_logout_destroys_session(self, auth_client: TestClient, settings):
        cookie = auth_client.cookies.get(settings.session_cookie_name)

        response = auth_client.post("/api/logout")

        assert response.status_code == 200
        assert response.json()["message"] == "Logged out successfully"
        # Replaying the old cookie no longer works
        auth_client.cookies.set(settings.session_cookie_name, cookie)
        assert auth_client.get("/api/user").status_code == 401

    def test_logout_without_session(self, client: TestClient):
        assert client.post("/api/logout").status_code == 200

    def test_change_password_flow(self, auth_client: TestClient):
        response = auth_client.post("/api/change-password", json={
            "current_password": ADMIN_PASSWORD,
            "new_password": "Nova#Senha2025",
        })
        assert response.status_code == 200

        auth_client.post("/api/logout")
        old = auth_client.post("/api/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
        new = auth_client.post("/api/login", json={"email": ADMIN_EMAIL, "password": "Nova#Senha2025"})
        assert old.status_code == 401
        assert new.status_code == 200

    def test_change_password_wrong_current(self, auth_client: TestClient):
        response = auth_client.post("/api/change-password", json={
            "current_password": "wrong",
            "new_password": "Nova#Senha2025",
        })

        assert response.status_code == 401
        assert response.json()["message"] == "Current password is incorrect"

    @pytest.mark.parametrize("weak_password", ["Sh0rt#", "alllowercase1#", "ALLUPPERCASE1#", "NoDigits#here", "NoSymbols123"])
    def test_change_password_strength(self, auth_client: TestClient, weak_password):
        response = auth_client.post("/api/change-password", json={
            "current_password": ADMIN_PASSWORD,
            "new_password": weak_password,
        })

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "new_password"

    def test_change_password_requires_session(self, client: TestClient):
        response = client.post("/api/change-password", json={
            "current_password": ADMIN_PASSWORD,
            "new_password": "Nova#Senha2025",
        })

        assert response.status_code == 401


class TestRollingSessions:
    """Test cookie re-issue when rolling sessions are enabled."""

    def test_cookie_refreshed_on_authenticated_request(self, settings):
        app = create_app(settings.model_copy(update={"session_rolling": True}))
        with TestClient(app) as client:
            client.post("/api/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

            response = client.get("/api/user")

            assert response.status_code == 200
            assert settings.session_cookie_name in response.cookies

    def test_cookie_not_refreshed_by_default(self, auth_client: TestClient, settings):
        response = auth_client.get("/api/user")

        assert settings.session_cookie_name not in response.cookies
