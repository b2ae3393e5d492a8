"""
Console event publisher adapter - Implements EventPublisher protocol.

This module provides a console-based implementation of the domain's
event publisher port, logging each staking notification for observers
that tail the service logs.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleEventPublisher:
    """
    Implements EventPublisher protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Each event is one INFO record: ``[EVENT] <Name> key=value ...``.
    """

    def token_minted(self, owner: str, token_id: int) -> None:
        logger.info("[EVENT] NFTMinted owner=%s token_id=%s", owner, token_id)

    def token_staked(self, staker: str, token_id: int) -> None:
        logger.info("[EVENT] NFTStaked staker=%s token_id=%s", staker, token_id)

    def stake_delegated(self, staker: str, token_id: int, delegate: str) -> None:
        logger.info(
            "[EVENT] StakeDelegated staker=%s token_id=%s delegate=%s",
            staker,
            token_id,
            delegate,
        )

    def email_registered(self, principal: str, email: str) -> None:
        logger.info("[EVENT] EmailRegistered principal=%s email=%s", principal, email)

    def min_stake_duration_updated(self, admin: str, seconds: int) -> None:
        logger.info("[EVENT] MinStakeTimeUpdated admin=%s seconds=%s", admin, seconds)
