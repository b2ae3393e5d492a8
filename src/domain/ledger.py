"""
Token ledger domain service.

Authoritative record of which principal minted each token identifier.
Ownership is write-once: there is no burn or transfer.
"""

import logging
from dataclasses import dataclass

from .exceptions import AlreadyMinted
from .ports import Clock, EventPublisher, StakingRepository

logger = logging.getLogger(__name__)


@dataclass
class TokenLedger:
    """Domain service for minting tokens."""

    repository: StakingRepository
    events: EventPublisher
    clock: Clock

    def mint(self, principal: str, token_id: int) -> None:
        """
        Register `token_id` as owned by `principal`.

        Raises:
            AlreadyMinted: If the token already has an owner (including the caller)
        """
        minted = self.repository.mint_token(token_id, principal, self.clock.now())
        if not minted:
            logger.info("Mint rejected: token %s already minted", token_id)
            raise AlreadyMinted(token_id)

        self.events.token_minted(principal, token_id)

    def owner_of(self, token_id: int) -> str | None:
        """Return the principal that minted `token_id`, or None."""
        return self.repository.get_token_owner(token_id)
