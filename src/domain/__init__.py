"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for token custody, staking
and stake-gated email registration. It defines its own port interfaces for
infrastructure abstraction, ensuring true hexagonal architecture decoupling.
"""

from .authorization import SingleAdminPolicy
from .exceptions import (
    AlreadyMinted,
    AlreadyStaked,
    EmailAlreadyRegistered,
    NotStaked,
    StakingError,
    StakingPeriodNotMet,
    Unauthorized,
)
from .ledger import TokenLedger
from .ports import (
    AdminPolicy,
    Clock,
    EmailClaimResult,
    EventPublisher,
    Stake,
    StakingRepository,
)
from .staking import StakeRegistry

__all__ = [
    "AdminPolicy",
    "AlreadyMinted",
    "AlreadyStaked",
    "Clock",
    "EmailAlreadyRegistered",
    "EmailClaimResult",
    "EventPublisher",
    "NotStaked",
    "SingleAdminPolicy",
    "Stake",
    "StakeRegistry",
    "StakingError",
    "StakingPeriodNotMet",
    "StakingRepository",
    "TokenLedger",
    "Unauthorized",
]
