"""Storage adapters."""

from sleep_cycle_server.repositories.profile import (
    InMemoryProfileRepository,
    ProfileRepository,
    SQLAlchemyProfileRepository,
)

__all__ = [
    "InMemoryProfileRepository",
    "ProfileRepository",
    "SQLAlchemyProfileRepository",
]
