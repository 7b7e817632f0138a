"""Pydantic schemas for sleep profile requests and responses."""

from pydantic import BaseModel, Field

from sleep_cycle_server.domain.profile import (
    BMICategory,
    DerivedProfile,
    Gender,
    SleepProfile,
)


class SleepProfileIn(BaseModel):
    """Profile form input. Validation happens here, not in the engine."""

    age: int = Field(ge=1, le=120, description="Age in years")
    weight_kg: float = Field(gt=0, description="Body weight in kilograms")
    height_cm: float = Field(gt=0, description="Height in centimeters")
    gender: Gender = Field(description="male, female or other")

    def to_domain(self) -> SleepProfile:
        """Convert to the immutable domain profile."""
        return SleepProfile(
            age=self.age,
            weight_kg=self.weight_kg,
            height_cm=self.height_cm,
            gender=self.gender,
        )

    @classmethod
    def from_domain(cls, profile: SleepProfile) -> "SleepProfileIn":
        """Build from a domain profile."""
        return cls(
            age=profile.age,
            weight_kg=profile.weight_kg,
            height_cm=profile.height_cm,
            gender=profile.gender,
        )


class DerivedProfileOut(BaseModel):
    """Derived sleep parameters."""

    bmi: float = Field(description="Body mass index")
    bmi_category: BMICategory = Field(description="BMI band")
    adjusted_cycle_minutes: int = Field(description="Sleep cycle length (minutes)")
    sleep_efficiency: float = Field(description="Fraction of time in bed spent asleep")
    latency_minutes: int = Field(description="Time to fall asleep (minutes)")

    @classmethod
    def from_domain(cls, derived: DerivedProfile) -> "DerivedProfileOut":
        """Build from a domain derived profile."""
        return cls(
            bmi=derived.bmi,
            bmi_category=derived.bmi_category,
            adjusted_cycle_minutes=derived.adjusted_cycle_minutes,
            sleep_efficiency=derived.sleep_efficiency,
            latency_minutes=derived.latency_minutes,
        )


class ProfileResponse(BaseModel):
    """A user's profile together with its derived parameters."""

    user_id: str
    is_default: bool = Field(description="True when the user has not saved a profile yet")
    profile: SleepProfileIn
    derived: DerivedProfileOut


class OnboardingStatus(BaseModel):
    """Onboarding flag for a user."""

    user_id: str
    has_seen_onboarding: bool
