"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure, plus the value types that cross them.
Adapters implement these protocols.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


@dataclass(frozen=True)
class Stake:
    """
    Stake record, one per staking principal.

    `staker` is the principal that invoked stake/delegate and is the record key.
    `owner` is always equal to `staker`. `delegated_wallet` is None unless
    `delegated` is True. `start_time` is in UNIX seconds.
    """

    staker: str
    token_id: int
    owner: str
    delegated: bool
    delegated_wallet: str | None
    start_time: int


class EmailClaimResult(Enum):
    """
    Result of an atomic email claim.

    Checks run in this order; the first failing one wins:
    NOT_STAKED, PERIOD_NOT_MET, ALREADY_REGISTERED.
    """

    SUCCESS = "success"
    NOT_STAKED = "not_staked"
    PERIOD_NOT_MET = "period_not_met"
    ALREADY_REGISTERED = "already_registered"


class StakingRepository(Protocol):
    """Port interface for token, stake, email and config persistence."""

    def mint_token(self, token_id: int, owner: str, now: int) -> bool:
        """
        Atomically record token ownership.

        Returns:
            True if minted, False if the token already has an owner
        """
        ...

    def get_token_owner(self, token_id: int) -> str | None:
        """Return the owner of a token, or None if never minted."""
        ...

    def create_stake(self, stake: Stake) -> bool:
        """
        Atomically create a stake record keyed by `stake.staker`.

        Returns:
            True if created, False if the staker already has a stake
        """
        ...

    def get_stake(self, staker: str) -> Stake | None:
        """Return the staker's record, or None if never staked."""
        ...

    def claim_email(self, email: str, principal: str, now: int) -> EmailClaimResult:
        """
        Atomically check eligibility and bind email to principal.

        The stake lookup, the duration read and the insert happen as one
        unit. A concurrent duration update is serialized with the claim.

        Args:
            email: Normalized email address
            principal: Registering principal
            now: Current time in UNIX seconds, sampled once by the caller

        Returns:
            EmailClaimResult indicating success or the first failed check
        """
        ...

    def get_email_owner(self, email: str) -> str | None:
        """Return the principal bound to a normalized email, or None."""
        ...

    def get_min_stake_duration(self) -> int:
        """Return the current minimum stake duration in seconds."""
        ...

    def set_min_stake_duration(self, seconds: int) -> None:
        """Overwrite the minimum stake duration."""
        ...

    def ensure_min_stake_duration(self, default: int) -> None:
        """Seed the duration with `default` unless a value already exists."""
        ...

    def ping(self) -> None:
        """Raise if the backing store is unreachable."""
        ...


class EventPublisher(Protocol):
    """Port interface for one-way notifications of successful mutations."""

    def token_minted(self, owner: str, token_id: int) -> None: ...

    def token_staked(self, staker: str, token_id: int) -> None: ...

    def stake_delegated(self, staker: str, token_id: int, delegate: str) -> None: ...

    def email_registered(self, principal: str, email: str) -> None: ...

    def min_stake_duration_updated(self, admin: str, seconds: int) -> None: ...


class Clock(Protocol):
    """Port interface for the execution environment's notion of now."""

    def now(self) -> int:
        """Current time in integer UNIX seconds."""
        ...


class AdminPolicy(Protocol):
    """Port interface for the administrative authorization predicate."""

    def is_admin(self, principal: str) -> bool: ...
