"""
Stake registry domain service - Staking state machine implementation.

This module contains the core business logic for staking, delegation and
stake-gated email registration.

Staking State Machine (per principal, forward-only)
===================================================

States:
- UNSTAKED: No stake record exists for the principal
- STAKED: Stake record exists (direct or delegated), start_time fixed
- STAKED + EMAIL_REGISTERED: An email is permanently bound to the principal

Valid Transitions:
    UNSTAKED -> STAKED                      (stake / delegate_stake)
    STAKED   -> STAKED + EMAIL_REGISTERED   (register_email, once eligible)

Invalid Transitions (never allowed):
    STAKED -> UNSTAKED   (there is no unstake)
    STAKED -> STAKED     (a second stake is rejected with AlreadyStaked)

Email bindings are write-once per email, not per principal: the same
principal may bind several distinct emails, but an email is never rebound.

Eligibility: now - stake.start_time >= min_stake_duration, boundary
inclusive. The duration is read at check time, so an administrative update
applies to stakes created before it.

Note: Check-and-write atomicity is enforced by the repository. This service
samples the clock once per operation and maps repository results to
domain exceptions.
"""

import logging
from dataclasses import dataclass

from .exceptions import (
    AlreadyStaked,
    EmailAlreadyRegistered,
    NotStaked,
    StakingPeriodNotMet,
    Unauthorized,
)
from .ports import AdminPolicy, Clock, EmailClaimResult, EventPublisher, Stake, StakingRepository

logger = logging.getLogger(__name__)


@dataclass
class StakeRegistry:
    """
    Domain service for staking and email registration.

    Owns the minimum stake duration through the repository; it is only
    mutated by update_min_stake_duration.
    """

    repository: StakingRepository
    events: EventPublisher
    clock: Clock
    admin_policy: AdminPolicy

    def stake(self, principal: str, token_id: int) -> Stake:
        """
        Stake `token_id` directly.

        The token does not have to be minted by the caller.

        Raises:
            AlreadyStaked: If principal already has a stake record
        """
        stake = self._create(principal, token_id, delegate=None)
        self.events.token_staked(principal, token_id)
        return stake

    def delegate_stake(self, principal: str, token_id: int, delegate: str) -> Stake:
        """
        Stake `token_id` with staking authority delegated to `delegate`.

        The record stays keyed by `principal`; the delegate gets no stake
        record of its own.

        Raises:
            AlreadyStaked: If principal already has a stake record
        """
        stake = self._create(principal, token_id, delegate=delegate)
        self.events.stake_delegated(principal, token_id, delegate)
        return stake

    def get_stake(self, principal: str) -> Stake | None:
        """Return the principal's stake record, or None."""
        return self.repository.get_stake(principal)

    def eligible_at(self, principal: str) -> int | None:
        """
        Earliest time at which principal may register an email.

        Returns:
            start_time + current duration, or None if principal has no stake
        """
        stake = self.repository.get_stake(principal)
        if stake is None:
            return None
        return stake.start_time + self.repository.get_min_stake_duration()

    def register_email(self, principal: str, email: str) -> str:
        """
        Permanently bind an email address to principal.

        Args:
            principal: Registering principal
            email: Email address (will be normalized)

        Returns:
            Normalized email address

        Raises:
            NotStaked: If principal has no stake record
            StakingPeriodNotMet: If the stake is younger than the minimum duration
            EmailAlreadyRegistered: If the email is bound to anyone, including principal
        """
        normalized_email = self._normalize_email(email)
        result = self.repository.claim_email(normalized_email, principal, self.clock.now())

        if result == EmailClaimResult.NOT_STAKED:
            logger.info("Email registration rejected for %s: not staked", principal)
            raise NotStaked(principal)
        if result == EmailClaimResult.PERIOD_NOT_MET:
            logger.info("Email registration rejected for %s: staking period not met", principal)
            raise StakingPeriodNotMet(principal)
        if result == EmailClaimResult.ALREADY_REGISTERED:
            logger.info("Email registration rejected for %s: email taken", principal)
            raise EmailAlreadyRegistered(normalized_email)

        self.events.email_registered(principal, normalized_email)
        return normalized_email

    def email_owner(self, email: str) -> str | None:
        """Return the principal bound to email, or None."""
        return self.repository.get_email_owner(self._normalize_email(email))

    def is_email_registered(self, email: str) -> bool:
        """True iff the email has any binding."""
        return self.email_owner(email) is not None

    def verify_email(self, principal: str, email: str) -> bool:
        """True iff the email is bound to exactly principal. Never raises."""
        return self.email_owner(email) == principal

    def min_stake_duration(self) -> int:
        """Current minimum stake duration in seconds."""
        return self.repository.get_min_stake_duration()

    def update_min_stake_duration(self, admin: str, seconds: int) -> None:
        """
        Overwrite the minimum stake duration.

        No bounds are enforced; zero and very large values are accepted.

        Raises:
            Unauthorized: If admin is not the administrative principal
        """
        if not self.admin_policy.is_admin(admin):
            logger.info("Duration update rejected: %s is not admin", admin)
            raise Unauthorized(admin)

        self.repository.set_min_stake_duration(seconds)
        self.events.min_stake_duration_updated(admin, seconds)

    def _create(self, principal: str, token_id: int, delegate: str | None) -> Stake:
        stake = Stake(
            staker=principal,
            token_id=token_id,
            owner=principal,
            delegated=delegate is not None,
            delegated_wallet=delegate,
            start_time=self.clock.now(),
        )
        if not self.repository.create_stake(stake):
            logger.info("Stake rejected: %s already staked", principal)
            raise AlreadyStaked(principal)
        return stake

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase
        """
        return email.strip().lower()
