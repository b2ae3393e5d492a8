"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A deterministic clock
- In-memory repository and domain services
- Well-formed wallet addresses
- PostgreSQL pool and repository (skipped without a database)
"""

import threading
from collections.abc import Generator
from unittest.mock import Mock

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.memory import InMemoryStakingRepository
from src.adapters.repository.postgres import PostgresStakingRepository, run_migrations
from src.config.settings import get_settings
from src.domain.authorization import SingleAdminPolicy
from src.domain.ledger import TokenLedger
from src.domain.staking import StakeRegistry

ONE_WEEK = 7 * 24 * 60 * 60

ADMIN = "0x" + "a" * 40
ALICE = "0x" + "1" * 40
BOB = "0x" + "2" * 40
CAROL = "0x" + "3" * 40


class FakeClock:
    """Settable clock; implements Clock protocol."""

    def __init__(self, start: int = 0) -> None:
        self._now = start
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            return self._now

    def set(self, value: int) -> None:
        with self._lock:
            self._now = value

    def advance(self, seconds: int) -> None:
        with self._lock:
            self._now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Clock starting at t=0."""
    return FakeClock()


@pytest.fixture
def repository() -> InMemoryStakingRepository:
    """In-memory repository seeded with a one-week minimum stake duration."""
    return InMemoryStakingRepository(min_stake_duration=ONE_WEEK)


@pytest.fixture
def events() -> Mock:
    """Mock event publisher recording every notification."""
    return Mock()


@pytest.fixture
def ledger(repository: InMemoryStakingRepository, events: Mock, clock: FakeClock) -> TokenLedger:
    return TokenLedger(repository=repository, events=events, clock=clock)


@pytest.fixture
def registry(
    repository: InMemoryStakingRepository, events: Mock, clock: FakeClock
) -> StakeRegistry:
    return StakeRegistry(
        repository=repository,
        events=events,
        clock=clock,
        admin_policy=SingleAdminPolicy(ADMIN),
    )


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Connection pool with migrations applied; skips when PostgreSQL is unreachable."""
    settings = get_settings()
    try:
        with psycopg.connect(settings.database_url, connect_timeout=2):
            pass
    except psycopg.OperationalError:
        pytest.skip("PostgreSQL not reachable")

    pool = ConnectionPool(conninfo=settings.database_url, min_size=1, max_size=10, open=True)
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def pg_repository(pool: ConnectionPool) -> PostgresStakingRepository:
    """PostgreSQL repository over empty tables, seeded with a one-week duration."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM email_registrations")
        conn.execute("DELETE FROM stakes")
        conn.execute("DELETE FROM tokens")
        conn.execute("DELETE FROM staking_config")
        conn.commit()
    repository = PostgresStakingRepository(pool)
    repository.ensure_min_stake_duration(ONE_WEEK)
    return repository
