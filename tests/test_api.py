from decimal import Decimal

import httpx
import pytest
import pytest_asyncio

from ledgerdesk.database import get_db
from ledgerdesk.main import app
from tests.conftest import ADMIN, ALICE, BOB


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


def as_user(principal) -> dict:
    return {"X-User-Id": principal.user_id}


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        r = await client.get("/health")

        assert r.status_code == 200
        assert r.json() == {"status": "ok"}


class TestRequestFlow:
    @pytest.mark.asyncio
    async def test_withdraw_request_then_admin_approval(self, client):
        recharge = await client.post(
            f"/api/v1/admin/users/{ALICE.user_id}/recharge", json={"amount": "100.00"}, headers=as_user(ADMIN)
        )
        assert recharge.json()["success"] is True

        created = await client.post("/api/v1/transactions/withdraw", json={"amount": 50}, headers=as_user(ALICE))
        body = created.json()
        assert created.status_code == 200
        assert body["success"] is True
        assert body["data"]["status"] == "pending"
        tx_id = body["data"]["id"]

        pending = await client.get("/api/v1/admin/transactions/pending", headers=as_user(ADMIN))
        assert [t["id"] for t in pending.json()["data"]] == [tx_id]
        assert pending.json()["data"][0]["user"]["full_name"] == "Alice"

        reviewed = await client.post(
            f"/api/v1/admin/transactions/{tx_id}/review", json={"decision": "approve"}, headers=as_user(ADMIN)
        )
        assert reviewed.json()["success"] is True
        assert reviewed.json()["data"]["status"] == "approved"

        account = await client.get("/api/v1/account", headers=as_user(ALICE))
        assert Decimal(account.json()["data"]["balance"]) == Decimal("50.00")

        again = await client.post(
            f"/api/v1/admin/transactions/{tx_id}/review", json={"decision": "reject"}, headers=as_user(ADMIN)
        )
        assert again.json()["success"] is False
        assert "cannot be reviewed" in again.json()["error"]

    @pytest.mark.asyncio
    async def test_insufficient_balance_is_an_envelope(self, client):
        r = await client.post("/api/v1/transactions/withdraw", json={"amount": "150"}, headers=as_user(BOB))

        assert r.status_code == 200
        assert r.json() == {"success": False, "data": None, "error": "Insufficient balance, current balance: 0.00"}

    @pytest.mark.asyncio
    async def test_non_numeric_amount_is_an_envelope(self, client):
        r = await client.post("/api/v1/transactions/deposit", json={"amount": "lots"}, headers=as_user(BOB))

        assert r.status_code == 200
        assert r.json()["success"] is False
        assert "must be a number" in r.json()["error"]


class TestAuthentication:
    @pytest.mark.asyncio
    async def test_missing_header(self, client):
        r = await client.get("/api/v1/transactions")

        assert r.json()["success"] is False
        assert "authentication" in r.json()["error"]

    @pytest.mark.asyncio
    async def test_unknown_user(self, client):
        r = await client.get("/api/v1/account", headers={"X-User-Id": "mallory"})

        assert r.json()["success"] is False

    @pytest.mark.asyncio
    async def test_user_cannot_review(self, client):
        created = await client.post("/api/v1/transactions/deposit", json={"amount": "5"}, headers=as_user(BOB))
        tx_id = created.json()["data"]["id"]

        r = await client.post(
            f"/api/v1/admin/transactions/{tx_id}/review", json={"decision": "approve"}, headers=as_user(BOB)
        )

        assert r.json()["success"] is False
        assert "only administrators" in r.json()["error"]


class TestAdminEndpoints:
    @pytest.mark.asyncio
    async def test_transaction_search_query_params(self, client):
        await client.post("/api/v1/transactions/deposit", json={"amount": "5"}, headers=as_user(BOB))
        await client.post("/api/v1/transactions/deposit", json={"amount": "6"}, headers=as_user(ALICE))

        r = await client.get(
            "/api/v1/admin/transactions",
            params={"type": "deposit", "status": "all", "user_id": BOB.user_id},
            headers=as_user(ADMIN),
        )

        data = r.json()["data"]
        assert len(data) == 1
        assert data[0]["user_id"] == BOB.user_id

    @pytest.mark.asyncio
    async def test_create_list_and_update_users(self, client):
        created = await client.post(
            "/api/v1/admin/users",
            json={"user_id": "carol", "full_name": "Carol", "email": "Carol@Example.com"},
            headers=as_user(ADMIN),
        )
        assert created.json()["success"] is True
        assert created.json()["data"]["email"] == "carol@example.com"
        assert Decimal(created.json()["data"]["balance"]) == 0

        duplicate = await client.post(
            "/api/v1/admin/users", json={"user_id": "carol"}, headers=as_user(ADMIN)
        )
        assert duplicate.json()["success"] is False
        assert "already exists" in duplicate.json()["error"]

        updated = await client.patch(
            "/api/v1/admin/users/carol", json={"full_name": "  "}, headers=as_user(ADMIN)
        )
        assert updated.json()["data"]["full_name"] is None

        users = await client.get("/api/v1/admin/users", headers=as_user(ADMIN))
        assert {u["user_id"] for u in users.json()["data"]} >= {"carol", ALICE.user_id, BOB.user_id}

    @pytest.mark.asyncio
    async def test_update_unknown_user(self, client):
        r = await client.patch("/api/v1/admin/users/nobody", json={"full_name": "X"}, headers=as_user(ADMIN))

        assert r.json()["success"] is False
        assert "not found" in r.json()["error"]

    @pytest.mark.asyncio
    async def test_stats(self, client):
        r = await client.get("/api/v1/admin/stats", headers=as_user(ADMIN))

        body = r.json()
        assert body["success"] is True
        assert body["data"]["total_users"] == 4
        assert len(body["data"]["daily_stats"]) == 30


class TestTodoEndpoints:
    @pytest.mark.asyncio
    async def test_todo_lifecycle(self, client):
        created = await client.post("/api/v1/todos", json={"title": "ship it"}, headers=as_user(ALICE))
        todo_id = created.json()["data"]["id"]

        toggled = await client.post(f"/api/v1/todos/{todo_id}/toggle", headers=as_user(ALICE))
        assert toggled.json()["data"]["is_complete"] is True

        listed = await client.get("/api/v1/todos", headers=as_user(ALICE))
        assert [t["id"] for t in listed.json()["data"]] == [todo_id]

        deleted = await client.delete(f"/api/v1/todos/{todo_id}", headers=as_user(ALICE))
        assert deleted.json() == {"success": True, "data": None, "error": None}
