"""
In-memory repository adapter - Implements StakingRepository protocol.

Every mutation runs under a single lock, so the check-then-write sequences
in mint, stake and email claim cannot interleave. Reads are single dict
lookups and take no lock.

State does not survive process restart; use the PostgreSQL adapter for that.
"""

import threading

from src.domain.ports import EmailClaimResult, Stake


class InMemoryStakingRepository:
    """
    Implements StakingRepository protocol with process-local dicts.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, min_stake_duration: int | None = None) -> None:
        """
        Initialize empty tables.

        Args:
            min_stake_duration: Optional initial duration; otherwise seed it
                with ensure_min_stake_duration before use
        """
        self._lock = threading.Lock()
        self._token_owners: dict[int, str] = {}
        self._stakes: dict[str, Stake] = {}
        self._email_owners: dict[str, str] = {}
        self._min_stake_duration = min_stake_duration

    def mint_token(self, token_id: int, owner: str, now: int) -> bool:
        with self._lock:
            if token_id in self._token_owners:
                return False
            self._token_owners[token_id] = owner
            return True

    def get_token_owner(self, token_id: int) -> str | None:
        return self._token_owners.get(token_id)

    def create_stake(self, stake: Stake) -> bool:
        with self._lock:
            if stake.staker in self._stakes:
                return False
            self._stakes[stake.staker] = stake
            return True

    def get_stake(self, staker: str) -> Stake | None:
        return self._stakes.get(staker)

    def claim_email(self, email: str, principal: str, now: int) -> EmailClaimResult:
        with self._lock:
            stake = self._stakes.get(principal)
            if stake is None:
                return EmailClaimResult.NOT_STAKED
            if now - stake.start_time < self._duration():
                return EmailClaimResult.PERIOD_NOT_MET
            if email in self._email_owners:
                return EmailClaimResult.ALREADY_REGISTERED
            self._email_owners[email] = principal
            return EmailClaimResult.SUCCESS

    def get_email_owner(self, email: str) -> str | None:
        return self._email_owners.get(email)

    def get_min_stake_duration(self) -> int:
        return self._duration()

    def set_min_stake_duration(self, seconds: int) -> None:
        with self._lock:
            self._min_stake_duration = seconds

    def ensure_min_stake_duration(self, default: int) -> None:
        with self._lock:
            if self._min_stake_duration is None:
                self._min_stake_duration = default

    def ping(self) -> None:
        """No external resource to check."""

    def _duration(self) -> int:
        if self._min_stake_duration is None:
            raise RuntimeError("Minimum stake duration has not been initialized")
        return self._min_stake_duration
