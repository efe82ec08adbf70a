from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerdesk.database import get_db
from ledgerdesk.services import account_service
from ledgerdesk.services.auth import Principal


async def get_principal(
    x_user_id: str | None = Header(None, description="Verified user id from the identity provider"),
    db: AsyncSession = Depends(get_db),
) -> Principal | None:
    """None when the caller is unknown; the actions report that as an authentication failure."""
    return await account_service.resolve_principal(db, x_user_id)
