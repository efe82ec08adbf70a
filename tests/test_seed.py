from decimal import Decimal

import pytest

from ledgerdesk import actions
from ledgerdesk.models import AccountRole
from ledgerdesk.seed import ADMIN_ID, run_seed
from ledgerdesk.services import account_service


class TestSeed:
    @pytest.mark.asyncio
    async def test_seed_is_idempotent(self, db):
        first = await run_seed(db)
        await db.commit()
        second = await run_seed(db)

        assert first.startswith("Seeded")
        assert second == "Already seeded"

    @pytest.mark.asyncio
    async def test_seeded_balances_have_deposit_records(self, db):
        await run_seed(db)
        await db.commit()
        alice = await account_service.resolve_principal(db, "user_alice")
        admin = await account_service.resolve_principal(db, ADMIN_ID)

        account = await actions.get_account(db, alice)
        history = await actions.list_user_transactions(db, alice)

        assert admin.role == AccountRole.ADMIN
        assert account.data.balance == Decimal("100.00")
        assert [t.amount for t in history.data] == [Decimal("100.00")]
