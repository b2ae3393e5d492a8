"""Repository adapters - Storage implementations."""

from .memory import InMemoryStakingRepository
from .postgres import PostgresStakingRepository, run_migrations

__all__ = ["InMemoryStakingRepository", "PostgresStakingRepository", "run_migrations"]
