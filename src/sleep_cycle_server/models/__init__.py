"""Database models."""

from sleep_cycle_server.models.base import Base
from sleep_cycle_server.models.profile import SleepProfileRecord

__all__ = [
    "Base",
    "SleepProfileRecord",
]
