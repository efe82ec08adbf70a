"""Principal passed in by the identity layer, and the authorization guards."""
from dataclasses import dataclass

from ledgerdesk.models import AccountRole
from ledgerdesk.services.errors import ForbiddenError, UnauthenticatedError


@dataclass(frozen=True)
class Principal:
    user_id: str
    role: AccountRole

    @property
    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN


def require_principal(principal: Principal | None) -> Principal:
    if principal is None:
        raise UnauthenticatedError()
    return principal


def require_admin(principal: Principal | None, action: str) -> Principal:
    """Single guard for every admin-only operation."""
    principal = require_principal(principal)
    if not principal.is_admin:
        raise ForbiddenError(f"Permission denied: only administrators can {action}")
    return principal
