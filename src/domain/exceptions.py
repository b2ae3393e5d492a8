"""
Domain exceptions - Semantic error types for staking and email registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Every rejected call raises exactly one of these; no state is changed.
"""


class StakingError(Exception):
    """Base class for staking domain errors."""

    pass


class AlreadyMinted(StakingError):
    """Token identifier is already owned by some principal."""

    pass


class AlreadyStaked(StakingError):
    """Principal already holds an active stake record."""

    pass


class NotStaked(StakingError):
    """Principal has no stake record."""

    pass


class StakingPeriodNotMet(StakingError):
    """Elapsed time since stake start is below the minimum stake duration."""

    pass


class EmailAlreadyRegistered(StakingError):
    """Email is already bound to a principal."""

    pass


class Unauthorized(StakingError):
    """Caller is not the administrative principal."""

    pass
