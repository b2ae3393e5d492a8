"""
PostgreSQL repository adapter - Implements StakingRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Concurrency Design:
-------------------
1. **Write-once records**: tokens, stakes and email bindings are inserted
   with ``INSERT ... ON CONFLICT DO NOTHING``. The primary key decides the
   single winner; losers see ``rowcount == 0`` and no row is touched.

2. **Email claim**: the config row is read ``FOR SHARE`` in the same
   transaction as the stake lookup and the insert. A concurrent duration
   update (which needs a row lock) waits until the claim commits, so a claim
   never mixes an old duration with a new one.

3. **Caller-supplied time**: ``now`` is passed in by the domain service,
   never read from ``NOW()``, so one operation sees exactly one instant.

Large integers (token ids, durations) are stored as NUMERIC(78, 0) and come
back from psycopg as Decimal; they are converted to int on the way out.
"""

import logging
from pathlib import Path

from psycopg_pool import ConnectionPool

from src.domain.ports import EmailClaimResult, Stake

logger = logging.getLogger(__name__)


class PostgresStakingRepository:
    """
    Implements StakingRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def mint_token(self, token_id: int, owner: str, now: int) -> bool:
        sql = """
            INSERT INTO tokens (token_id, owner, minted_at)
            VALUES (%s, %s, %s)
            ON CONFLICT (token_id) DO NOTHING
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (token_id, owner, now))
            conn.commit()
            return cursor.rowcount == 1

    def get_token_owner(self, token_id: int) -> str | None:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute("SELECT owner FROM tokens WHERE token_id = %s", (token_id,))
            row = cursor.fetchone()
        return row[0] if row is not None else None

    def create_stake(self, stake: Stake) -> bool:
        """
        Atomically create a stake record.

        The PRIMARY KEY on staker guarantees at most one record per staker,
        even under concurrent stake/delegate calls from the same principal.
        """
        sql = """
            INSERT INTO stakes (staker, token_id, owner, delegated, delegated_wallet, start_time)
            VALUES (%s, %s, %s, %s, %s, %s)
            ON CONFLICT (staker) DO NOTHING
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(
                sql,
                (
                    stake.staker,
                    stake.token_id,
                    stake.owner,
                    stake.delegated,
                    stake.delegated_wallet,
                    stake.start_time,
                ),
            )
            conn.commit()
            return cursor.rowcount == 1

    def get_stake(self, staker: str) -> Stake | None:
        sql = """
            SELECT staker, token_id, owner, delegated, delegated_wallet, start_time
            FROM stakes
            WHERE staker = %s
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (staker,))
            row = cursor.fetchone()

        if row is None:
            return None
        return Stake(
            staker=row[0],
            token_id=int(row[1]),
            owner=row[2],
            delegated=row[3],
            delegated_wallet=row[4],
            start_time=int(row[5]),
        )

    def claim_email(self, email: str, principal: str, now: int) -> EmailClaimResult:
        """
        Check eligibility and bind email to principal in one transaction.

        Check order: stake exists, period met, email free. The email
        PRIMARY KEY makes concurrent claims for one email resolve to a
        single SUCCESS.
        """
        config_sql = "SELECT min_stake_duration FROM staking_config WHERE id FOR SHARE"
        stake_sql = "SELECT start_time FROM stakes WHERE staker = %s"
        insert_sql = """
            INSERT INTO email_registrations (email, principal, registered_at)
            VALUES (%s, %s, %s)
            ON CONFLICT (email) DO NOTHING
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(config_sql)
            config = cursor.fetchone()
            if config is None:
                raise RuntimeError("Minimum stake duration has not been initialized")
            min_duration = int(config[0])

            cursor.execute(stake_sql, (principal,))
            row = cursor.fetchone()
            if row is None:
                conn.commit()
                return EmailClaimResult.NOT_STAKED

            if now - int(row[0]) < min_duration:
                conn.commit()
                return EmailClaimResult.PERIOD_NOT_MET

            cursor.execute(insert_sql, (email, principal, now))
            conn.commit()
            if cursor.rowcount == 1:
                return EmailClaimResult.SUCCESS
            return EmailClaimResult.ALREADY_REGISTERED

    def get_email_owner(self, email: str) -> str | None:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(
                "SELECT principal FROM email_registrations WHERE email = %s", (email,)
            )
            row = cursor.fetchone()
        return row[0] if row is not None else None

    def get_min_stake_duration(self) -> int:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute("SELECT min_stake_duration FROM staking_config WHERE id")
            row = cursor.fetchone()
        if row is None:
            raise RuntimeError("Minimum stake duration has not been initialized")
        return int(row[0])

    def set_min_stake_duration(self, seconds: int) -> None:
        sql = """
            INSERT INTO staking_config (id, min_stake_duration)
            VALUES (TRUE, %s)
            ON CONFLICT (id) DO UPDATE
            SET min_stake_duration = EXCLUDED.min_stake_duration
        """

        with self._pool.connection() as conn:
            conn.execute(sql, (seconds,))
            conn.commit()

    def ensure_min_stake_duration(self, default: int) -> None:
        sql = """
            INSERT INTO staking_config (id, min_stake_duration)
            VALUES (TRUE, %s)
            ON CONFLICT (id) DO NOTHING
        """

        with self._pool.connection() as conn:
            conn.execute(sql, (default,))
            conn.commit()

    def ping(self) -> None:
        """Raise if the database is unreachable."""
        with self._pool.connection() as conn:
            conn.execute("SELECT 1")


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            with pool.connection() as conn:
                conn.execute(sql_file.read_text())
            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
