"""Account registration and admin user management."""
import pytest

from ledgerdesk import actions
from ledgerdesk.repositories import account_repo
from tests.conftest import ADMIN, ALICE


async def _no_account(db, key):
    return None


class TestCreateAccount:
    @pytest.mark.asyncio
    async def test_new_account_starts_empty(self, db):
        result = await actions.create_account(db, ADMIN, "carol", full_name=" Carol ", email="Carol@Example.com")

        assert result.success, result.error
        assert result.data.user_id == "carol"
        assert result.data.full_name == "Carol"
        assert result.data.email == "carol@example.com"
        assert str(result.data.balance) == "0.00"

    @pytest.mark.asyncio
    async def test_duplicate_user_id(self, db):
        result = await actions.create_account(db, ADMIN, ALICE.user_id)

        assert result.success is False
        assert result.error == "Account alice already exists"

    @pytest.mark.asyncio
    async def test_duplicate_email(self, db):
        result = await actions.create_account(db, ADMIN, "carol", email="ALICE@example.com")

        assert result.success is False
        assert result.error == "This email address is already in use"

    @pytest.mark.asyncio
    async def test_email_taken_after_lookup_is_a_conflict(self, db, monkeypatch):
        # Another registration commits between the lookup and the insert.
        monkeypatch.setattr(account_repo, "get_by_email", _no_account)

        result = await actions.create_account(db, ADMIN, "carol", email="alice@example.com")

        assert result.success is False
        assert "already registered" in result.error
        assert await account_repo.get_by_user_id(db, "carol") is None

    @pytest.mark.asyncio
    async def test_user_id_taken_after_lookup_is_a_conflict(self, db, monkeypatch):
        monkeypatch.setattr(account_repo, "get_by_user_id", _no_account)

        result = await actions.create_account(db, ADMIN, ALICE.user_id)

        assert result.success is False
        assert result.error == "Account alice or its email address is already registered"

    @pytest.mark.asyncio
    async def test_admin_only(self, db):
        result = await actions.create_account(db, ALICE, "carol")

        assert result.success is False
        assert result.error == "Permission denied: only administrators can create accounts"
