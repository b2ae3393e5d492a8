"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

import re

from fastapi import Depends, Header, HTTPException, Request, status

from src.adapters.clock import SystemClock
from src.adapters.events.console import ConsoleEventPublisher
from src.api.models import ADDRESS_PATTERN
from src.config.settings import get_settings
from src.domain.authorization import SingleAdminPolicy
from src.domain.ledger import TokenLedger
from src.domain.ports import AdminPolicy, Clock, StakingRepository
from src.domain.staking import StakeRegistry

# Module-level singletons - both adapters are stateless
_event_publisher = ConsoleEventPublisher()
_clock = SystemClock()

_address_re = re.compile(ADDRESS_PATTERN)


def get_repository(request: Request) -> StakingRepository:
    """
    Get repository from app state.

    The repository is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.repository


def get_event_publisher() -> ConsoleEventPublisher:
    """Get console event publisher (singleton)."""
    return _event_publisher


def get_clock() -> Clock:
    """Get system clock (singleton)."""
    return _clock


def get_admin_policy() -> AdminPolicy:
    """Build the admin predicate from the configured admin address."""
    return SingleAdminPolicy(get_settings().admin_address)


def get_token_ledger(request: Request, clock: Clock = Depends(get_clock)) -> TokenLedger:
    """Create token ledger with injected dependencies."""
    return TokenLedger(
        repository=get_repository(request),
        events=get_event_publisher(),
        clock=clock,
    )


def get_stake_registry(
    request: Request,
    clock: Clock = Depends(get_clock),
    admin_policy: AdminPolicy = Depends(get_admin_policy),
) -> StakeRegistry:
    """
    Create stake registry with injected dependencies.

    Wires together the repository, event publisher, clock and admin policy.
    """
    return StakeRegistry(
        repository=get_repository(request),
        events=get_event_publisher(),
        clock=clock,
        admin_policy=admin_policy,
    )


def get_principal(x_wallet_address: str | None = Header(default=None)) -> str:
    """
    Extract and normalize the caller's wallet address.

    The address header is set by the upstream authentication layer and is
    trusted as-is once it is well formed.

    Returns:
        Lowercased, stripped wallet address

    Raises:
        HTTPException: 401 if the header is missing or malformed
    """
    if x_wallet_address is None or not _address_re.match(x_wallet_address.strip()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid wallet address",
        )
    return x_wallet_address.strip().lower()
