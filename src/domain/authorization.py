"""Administrative authorization predicate."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SingleAdminPolicy:
    """
    Implements AdminPolicy protocol for a single administrative address.

    Addresses compare case-insensitively. An empty admin address
    authorizes nobody.
    """

    admin_address: str

    def is_admin(self, principal: str) -> bool:
        admin = self.admin_address.strip().lower()
        if not admin:
            return False
        return principal.strip().lower() == admin
