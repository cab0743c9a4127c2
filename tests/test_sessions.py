"""
Session store and session cookie tests.
"""

import asyncio
import pytest
from datetime import timedelta
from typing import AsyncGenerator

from realty.config import Settings
from realty.database import utcnow
from realty.sessions import MemorySessionStore, SQLSessionStore, SessionStore, create_session_store
from realty.utils.auth import new_session_id, sign_session_id, unsign_session_id


@pytest.fixture(params=["memory", "database"])
async def session_store(request, tmp_path) -> AsyncGenerator[SessionStore, None]:
    """Run the test once per session store."""
    if request.param == "memory":
        store = MemorySessionStore()
    else:
        store = SQLSessionStore(f"sqlite+aiosqlite:///{tmp_path / 'sessions.db'}")
    await store.initialize()
    yield store
    await store.close()


class TestSessionStore:
    """Test session persistence with lazy expiry."""

    @pytest.mark.asyncio
    async def test_set_and_get(self, session_store):
        payload = {"user": {"id": "u1", "email": "admin@example.com", "name": "Admin"}}
        await session_store.set("sid-1", payload, utcnow() + timedelta(hours=1))

        assert await session_store.get("sid-1") == payload

    @pytest.mark.asyncio
    async def test_missing_session(self, session_store):
        assert await session_store.get("unknown") is None

    @pytest.mark.asyncio
    async def test_last_write_wins(self, session_store):
        expires_at = utcnow() + timedelta(hours=1)
        await session_store.set("sid-1", {"user": {"id": "a"}}, expires_at)
        await session_store.set("sid-1", {"user": {"id": "b"}}, expires_at)

        assert (await session_store.get("sid-1"))["user"]["id"] == "b"

    @pytest.mark.asyncio
    async def test_expired_session_reads_as_absent(self, session_store):
        await session_store.set("sid-1", {"user": {"id": "u1"}}, utcnow() - timedelta(seconds=1))

        assert await session_store.get("sid-1") is None
        # Removed on read, so a second lookup is also empty
        assert await session_store.get("sid-1") is None

    @pytest.mark.asyncio
    async def test_destroy(self, session_store):
        await session_store.set("sid-1", {"user": {"id": "u1"}}, utcnow() + timedelta(hours=1))

        await session_store.destroy("sid-1")
        await session_store.destroy("sid-1")

        assert await session_store.get("sid-1") is None

    @pytest.mark.asyncio
    async def test_touch_extends_expiry(self, session_store):
        await session_store.set("sid-1", {"user": {"id": "u1"}}, utcnow() + timedelta(seconds=1))

        await session_store.touch("sid-1", utcnow() + timedelta(hours=1))
        await asyncio.sleep(1.1)

        assert await session_store.get("sid-1") is not None

    @pytest.mark.asyncio
    async def test_payload_is_copied(self):
        store = MemorySessionStore()
        payload = {"user": {"id": "u1"}}
        await store.set("sid-1", payload, utcnow() + timedelta(hours=1))

        payload["user"]["id"] = "changed"
        fetched = await store.get("sid-1")
        fetched["user"]["id"] = "also-changed"

        assert (await store.get("sid-1"))["user"]["id"] == "u1"


class TestSessionStoreSelection:
    """Test which session store the settings produce."""

    def test_memory_when_configured(self):
        settings = Settings(environment="testing", storage_backend="sqlite", session_store="memory")
        assert isinstance(create_session_store(settings), MemorySessionStore)

    def test_database_falls_back_without_sql_storage(self):
        settings = Settings(environment="testing", storage_backend="memory", session_store="database")
        assert isinstance(create_session_store(settings), MemorySessionStore)

    def test_database_uses_storage_database(self, tmp_path):
        settings = Settings(
            environment="testing",
            storage_backend="sqlite",
            sqlite_file=str(tmp_path / "site.db"),
            session_store="database",
        )
        store = create_session_store(settings)

        assert isinstance(store, SQLSessionStore)
        assert store.name == "database"


class TestSessionCookieSigning:
    """Test signing and unsigning of the session id cookie."""

    def test_round_trip(self):
        sid = new_session_id()
        token = sign_session_id(sid, "secret", utcnow() + timedelta(hours=1))

        assert unsign_session_id(token, "secret") == sid

    def test_wrong_secret(self):
        token = sign_session_id("sid-1", "secret", utcnow() + timedelta(hours=1))

        assert unsign_session_id(token, "other-secret") is None

    def test_expired_token(self):
        token = sign_session_id("sid-1", "secret", utcnow() - timedelta(minutes=1))

        assert unsign_session_id(token, "secret") is None

    def test_tampered_token(self):
        token = sign_session_id("sid-1", "secret", utcnow() + timedelta(hours=1))

        header, payload, signature = token.split(".")
        assert unsign_session_id(f"{header}.{payload}.{signature[::-1]}", "secret") is None
        assert unsign_session_id("not-a-token", "secret") is None

    def test_session_ids_are_unique(self):
        assert len({new_session_id() for _ in range(50)}) == 50
