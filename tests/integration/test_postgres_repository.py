"""
Integration tests for PostgresStakingRepository.

Tests repository operations against a real PostgreSQL database.
Skipped when no database is reachable at DATABASE_URL.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from src.adapters.repository.postgres import PostgresStakingRepository
from src.domain.ports import EmailClaimResult, Stake
from tests.conftest import ALICE, BOB, ONE_WEEK

pytestmark = pytest.mark.postgres


def make_stake(staker: str, token_id: int = 1, start_time: int = 0) -> Stake:
    return Stake(
        staker=staker,
        token_id=token_id,
        owner=staker,
        delegated=False,
        delegated_wallet=None,
        start_time=start_time,
    )


class TestMintToken:
    """Tests for mint_token / get_token_owner."""

    def test_mint_returns_true(self, pg_repository: PostgresStakingRepository) -> None:
        assert pg_repository.mint_token(1, ALICE, now=10) is True
        assert pg_repository.get_token_owner(1) == ALICE

    def test_duplicate_mint_returns_false(self, pg_repository: PostgresStakingRepository) -> None:
        pg_repository.mint_token(1, ALICE, now=10)
        assert pg_repository.mint_token(1, BOB, now=11) is False
        assert pg_repository.get_token_owner(1) == ALICE

    def test_uint256_token_id_round_trips(
        self, pg_repository: PostgresStakingRepository
    ) -> None:
        token_id = 2**256 - 1
        pg_repository.mint_token(token_id, ALICE, now=0)
        assert pg_repository.get_token_owner(token_id) == ALICE

    def test_unminted_token(self, pg_repository: PostgresStakingRepository) -> None:
        assert pg_repository.get_token_owner(42) is None


class TestCreateStake:
    """Tests for create_stake / get_stake."""

    def test_create_and_read_back(self, pg_repository: PostgresStakingRepository) -> None:
        stake = Stake(ALICE, 2**200, ALICE, True, BOB, 1_700_000_000)
        assert pg_repository.create_stake(stake) is True

        stored = pg_repository.get_stake(ALICE)
        assert stored == stake
        assert isinstance(stored.token_id, int)

    def test_second_stake_returns_false(self, pg_repository: PostgresStakingRepository) -> None:
        pg_repository.create_stake(make_stake(ALICE, token_id=1, start_time=5))
        assert pg_repository.create_stake(make_stake(ALICE, token_id=2, start_time=9)) is False
        assert pg_repository.get_stake(ALICE).start_time == 5

    def test_missing_stake(self, pg_repository: PostgresStakingRepository) -> None:
        assert pg_repository.get_stake(ALICE) is None


class TestClaimEmail:
    """Tests for the atomic email claim."""

    def test_not_staked(self, pg_repository: PostgresStakingRepository) -> None:
        result = pg_repository.claim_email("test@example.com", ALICE, now=10**10)
        assert result == EmailClaimResult.NOT_STAKED

    def test_period_not_met(self, pg_repository: PostgresStakingRepository) -> None:
        pg_repository.create_stake(make_stake(ALICE))
        result = pg_repository.claim_email("test@example.com", ALICE, now=ONE_WEEK - 1)
        assert result == EmailClaimResult.PERIOD_NOT_MET
        assert pg_repository.get_email_owner("test@example.com") is None

    def test_boundary_inclusive(self, pg_repository: PostgresStakingRepository) -> None:
        pg_repository.create_stake(make_stake(ALICE))
        result = pg_repository.claim_email("test@example.com", ALICE, now=ONE_WEEK)
        assert result == EmailClaimResult.SUCCESS
        assert pg_repository.get_email_owner("test@example.com") == ALICE

    def test_already_registered(self, pg_repository: PostgresStakingRepository) -> None:
        pg_repository.create_stake(make_stake(ALICE))
        pg_repository.create_stake(make_stake(BOB))
        pg_repository.claim_email("test@example.com", ALICE, now=ONE_WEEK)

        result = pg_repository.claim_email("test@example.com", BOB, now=ONE_WEEK)
        assert result == EmailClaimResult.ALREADY_REGISTERED
        assert pg_repository.get_email_owner("test@example.com") == ALICE

    def test_updated_duration_applies_to_existing_stake(
        self, pg_repository: PostgresStakingRepository
    ) -> None:
        pg_repository.create_stake(make_stake(ALICE))
        pg_repository.set_min_stake_duration(2 * ONE_WEEK)

        assert (
            pg_repository.claim_email("test@example.com", ALICE, now=ONE_WEEK)
            == EmailClaimResult.PERIOD_NOT_MET
        )
        assert (
            pg_repository.claim_email("test@example.com", ALICE, now=2 * ONE_WEEK)
            == EmailClaimResult.SUCCESS
        )


class TestMinStakeDuration:
    """Tests for the config row."""

    def test_seeded_value(self, pg_repository: PostgresStakingRepository) -> None:
        assert pg_repository.get_min_stake_duration() == ONE_WEEK

    def test_ensure_does_not_overwrite(self, pg_repository: PostgresStakingRepository) -> None:
        pg_repository.set_min_stake_duration(60)
        pg_repository.ensure_min_stake_duration(ONE_WEEK)
        assert pg_repository.get_min_stake_duration() == 60

    def test_large_duration(self, pg_repository: PostgresStakingRepository) -> None:
        pg_repository.set_min_stake_duration(2**255)
        assert pg_repository.get_min_stake_duration() == 2**255


class TestConcurrentOperations:
    """Basic concurrency checks; see tests/adversarial for attack simulations."""

    def test_concurrent_mints_single_winner(
        self, pg_repository: PostgresStakingRepository
    ) -> None:
        principals = [f"0x{i:040x}" for i in range(5)]

        with ThreadPoolExecutor(max_workers=5) as executor:
            results = list(executor.map(lambda p: pg_repository.mint_token(7, p, 0), principals))

        assert results.count(True) == 1
        assert pg_repository.get_token_owner(7) in principals
