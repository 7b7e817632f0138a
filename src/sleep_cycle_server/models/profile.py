"""Stored sleep profile model."""

from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from sleep_cycle_server.domain.profile import Gender, SleepProfile
from sleep_cycle_server.models.base import Base, TimestampMixin, UserScopedMixin


class SleepProfileRecord(Base, UserScopedMixin, TimestampMixin):
    """A user's biometric profile and onboarding state.

    One row per user. Derived parameters are never stored; they are
    recomputed from these columns on every calculation. The biometric
    columns stay empty until the user saves a profile, so a row may
    exist for the onboarding flag alone.
    """

    __tablename__ = "sleep_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    age: Mapped[int | None] = mapped_column(Integer, nullable=True, comment="Age in years")
    weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    height_cm: Mapped[float | None] = mapped_column(Float, nullable=True)
    gender: Mapped[str | None] = mapped_column(
        String(10),
        nullable=True,
        comment="male, female or other",
    )

    has_seen_onboarding: Mapped[bool] = mapped_column(default=False, nullable=False)

    @property
    def has_profile(self) -> bool:
        """Whether the user has saved a profile."""
        return self.age is not None

    def to_profile(self) -> SleepProfile | None:
        """Convert the row to a domain profile, or None if none was saved."""
        if not self.has_profile:
            return None
        return SleepProfile(
            age=self.age,
            weight_kg=self.weight_kg,
            height_cm=self.height_cm,
            gender=Gender(self.gender),
        )

    def __repr__(self) -> str:
        """String representation."""
        return f"<SleepProfileRecord(user_id={self.user_id}, age={self.age})>"
