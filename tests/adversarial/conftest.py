"""
Shared fixtures for adversarial tests.

Each attack runs against both storage adapters: the in-memory repository
always, PostgreSQL when a database is reachable.
"""

from unittest.mock import Mock

import pytest

from src.adapters.repository.memory import InMemoryStakingRepository
from src.domain.authorization import SingleAdminPolicy
from src.domain.ledger import TokenLedger
from src.domain.ports import StakingRepository
from src.domain.staking import StakeRegistry
from tests.conftest import ADMIN, ONE_WEEK, FakeClock

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture(params=["memory", "postgres"])
def attack_repository(request: pytest.FixtureRequest) -> StakingRepository:
    """Repository under attack, seeded with a one-week duration."""
    if request.param == "postgres":
        return request.getfixturevalue("pg_repository")
    return InMemoryStakingRepository(min_stake_duration=ONE_WEEK)


@pytest.fixture
def attack_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def attack_registry(attack_repository: StakingRepository, attack_clock: FakeClock) -> StakeRegistry:
    return StakeRegistry(
        repository=attack_repository,
        events=Mock(),
        clock=attack_clock,
        admin_policy=SingleAdminPolicy(ADMIN),
    )


@pytest.fixture
def attack_ledger(attack_repository: StakingRepository, attack_clock: FakeClock) -> TokenLedger:
    return TokenLedger(repository=attack_repository, events=Mock(), clock=attack_clock)


def principal(i: int) -> str:
    """Distinct well-formed wallet address per attacker."""
    return f"0x{i + 1:040x}"
