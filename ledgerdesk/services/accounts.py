"""Account registration, lookup and profile administration."""
import re

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerdesk.models import Account, AccountRole
from ledgerdesk.repositories import account_repo
from ledgerdesk.services.auth import Principal, require_admin, require_principal
from ledgerdesk.services.errors import ConflictError, InvalidInputError, NotFoundError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class AccountService:
    async def resolve_principal(self, db: AsyncSession, user_id: str | None) -> Principal | None:
        """Map the identity provider's user id onto a principal; None when unknown."""
        if not user_id:
            return None
        account = await account_repo.get_by_user_id(db, user_id)
        if account is None:
            return None
        return Principal(user_id=account.user_id, role=account.role)

    async def register_account(
        self,
        db: AsyncSession,
        user_id: str,
        role: AccountRole = AccountRole.USER,
        full_name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
    ) -> Account:
        user_id = (user_id or "").strip()
        if not user_id:
            raise InvalidInputError("User id cannot be empty")
        if email is not None:
            email = email.strip().lower() or None
        if email is not None and not EMAIL_RE.match(email):
            raise InvalidInputError("Email address is not valid")
        if await account_repo.get_by_user_id(db, user_id) is not None:
            raise ConflictError(f"Account {user_id} already exists")
        if email is not None and await account_repo.get_by_email(db, email) is not None:
            raise ConflictError("This email address is already in use")
        try:
            return await account_repo.create(
                db,
                user_id=user_id,
                role=role,
                full_name=(full_name or "").strip() or None,
                email=email,
                phone=phone,
            )
        except IntegrityError:
            # A concurrent registration took the id or email between the checks above and the insert.
            raise ConflictError(f"Account {user_id} or its email address is already registered") from None

    async def create_account(
        self,
        db: AsyncSession,
        principal: Principal | None,
        user_id: str,
        full_name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
    ) -> Account:
        require_admin(principal, "create accounts")
        return await self.register_account(
            db, user_id, AccountRole.USER, full_name=full_name, email=email, phone=phone
        )

    async def get_account(self, db: AsyncSession, principal: Principal | None) -> Account:
        principal = require_principal(principal)
        account = await account_repo.refresh(db, principal.user_id)
        if account is None:
            raise NotFoundError(f"Account {principal.user_id} not found")
        return account

    async def list_accounts(self, db: AsyncSession, principal: Principal | None) -> list[Account]:
        require_admin(principal, "view all users")
        return await account_repo.list_all(db)

    async def update_profile(
        self,
        db: AsyncSession,
        principal: Principal | None,
        user_id: str,
        full_name: str | None,
    ) -> Account:
        require_admin(principal, "update user profiles")
        if not await account_repo.update_full_name(db, user_id, (full_name or "").strip() or None):
            raise NotFoundError(f"Account {user_id} not found")
        return await account_repo.refresh(db, user_id)


account_service = AccountService()
