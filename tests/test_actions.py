"""The action boundary: envelopes, rollback and the audit log observer."""
import logging

import pytest
from sqlalchemy.exc import OperationalError

from ledgerdesk import actions
from ledgerdesk.config import settings
from ledgerdesk.repositories import todo_repo
from ledgerdesk.services.errors import NotFoundError
from tests.conftest import ALICE


@actions.server_action("Broken store")
async def _broken_store(db, principal):
    await todo_repo.create(db, principal.user_id, "written before the failure")
    raise OperationalError("INSERT INTO todos ...", {}, Exception("disk I/O error"))


@actions.server_action("Buggy service")
async def _buggy(db, principal):
    await todo_repo.create(db, principal.user_id, "written before the bug")
    raise KeyError("user_id")


@actions.server_action("Missing thing")
async def _missing(db, thing_id, password=None):
    raise NotFoundError(f"Thing {thing_id} not found")


class TestEnvelope:
    @pytest.mark.asyncio
    async def test_store_failure_is_generic_and_logged(self, db, caplog):
        with caplog.at_level(logging.ERROR, logger="ledgerdesk.actions"):
            result = await _broken_store(db, ALICE)

        assert result.success is False
        assert result.data is None
        assert "disk I/O" not in result.error
        assert "storage error" in result.error
        assert any("store failure" in r.getMessage() for r in caplog.records)
        assert any(r.exc_info for r in caplog.records)

    @pytest.mark.asyncio
    async def test_store_failure_rolls_back(self, db):
        await _broken_store(db, ALICE)

        assert (await actions.list_todos(db, ALICE)).data == []

    @pytest.mark.asyncio
    async def test_unexpected_error_is_contained(self, db, caplog):
        with caplog.at_level(logging.ERROR, logger="ledgerdesk.actions"):
            result = await _buggy(db, ALICE)

        assert result.success is False
        assert result.data is None
        assert "user_id" not in result.error
        assert "unexpected error" in result.error
        assert any(r.exc_info and r.exc_info[0] is KeyError for r in caplog.records)
        assert (await actions.list_todos(db, ALICE)).data == []

    @pytest.mark.asyncio
    async def test_ledger_error_becomes_message(self, db):
        result = await _missing(db, 42)

        assert result.model_dump() == {"success": False, "data": None, "error": "Thing 42 not found"}

    @pytest.mark.asyncio
    async def test_success_envelope(self, db):
        result = await actions.add_todo(db, ALICE, "x")

        assert result.success is True
        assert result.error is None
        assert result.data.title == "x"


class TestAuditLog:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("level", ["off", "minimal", "full"])
    async def test_log_level_does_not_change_result(self, db, monkeypatch, level):
        monkeypatch.setattr(settings, "action_log_level", level)

        result = await _missing(db, 7)

        assert result.success is False
        assert result.error == "Thing 7 not found"

    @pytest.mark.asyncio
    async def test_minimal_logs_outcome_and_duration(self, db, monkeypatch, caplog):
        monkeypatch.setattr(settings, "action_log_level", "minimal")

        with caplog.at_level(logging.INFO, logger="ledgerdesk.actions"):
            await _missing(db, 7)

        messages = [r.getMessage() for r in caplog.records]
        assert any("Missing thing" in m and "not_found" in m and "ms)" in m for m in messages)

    @pytest.mark.asyncio
    async def test_full_masks_sensitive_arguments(self, db, monkeypatch, caplog):
        monkeypatch.setattr(settings, "action_log_level", "full")

        with caplog.at_level(logging.INFO, logger="ledgerdesk.actions"):
            await _missing(db, 7, password="hunter2")

        text = "\n".join(r.getMessage() for r in caplog.records)
        assert "password=***" in text
        assert "hunter2" not in text
        assert "result:" in text

    @pytest.mark.asyncio
    async def test_off_logs_nothing(self, db, monkeypatch, caplog):
        monkeypatch.setattr(settings, "action_log_level", "off")

        with caplog.at_level(logging.DEBUG, logger="ledgerdesk.actions"):
            await _missing(db, 7)

        assert [r for r in caplog.records if r.name == "ledgerdesk.actions"] == []
