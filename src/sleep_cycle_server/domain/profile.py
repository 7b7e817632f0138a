"""Biometric sleep profile and the parameters derived from it.

All functions here are pure: the derived profile is recomputed from the raw
profile on every call and nothing is cached.
"""

import math
from dataclasses import dataclass
from enum import Enum


class Gender(str, Enum):
    """Gender as captured by the profile form."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class BMICategory(str, Enum):
    """WHO-style BMI bands."""

    UNDERWEIGHT = "underweight"  # < 18.5
    NORMAL = "normal"  # < 25
    OVERWEIGHT = "overweight"  # < 30
    OBESE = "obese"  # >= 30


@dataclass(frozen=True)
class SleepProfile:
    """Raw biometric profile supplied by the user.

    Values are assumed to be validated by the caller (age 1-120,
    weight and height strictly positive).
    """

    age: int
    weight_kg: float
    height_cm: float
    gender: Gender


@dataclass(frozen=True)
class DerivedProfile:
    """Sleep parameters derived from a SleepProfile."""

    bmi: float
    bmi_category: BMICategory
    adjusted_cycle_minutes: int
    sleep_efficiency: float
    latency_minutes: int


DEFAULT_PROFILE = SleepProfile(age=30, weight_kg=70.0, height_cm=170.0, gender=Gender.MALE)


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """BMI = weight / height_m^2.

    Returns 0.0 instead of failing when the height is zero.
    """
    h = height_cm / 100
    if not h or math.isnan(h):
        return 0.0
    return weight_kg / (h * h)


def categorize_bmi(bmi: float) -> BMICategory:
    """Map a BMI value to its category. Lower bounds are inclusive."""
    if bmi < 18.5:
        return BMICategory.UNDERWEIGHT
    if bmi < 25:
        return BMICategory.NORMAL
    if bmi < 30:
        return BMICategory.OVERWEIGHT
    return BMICategory.OBESE


def get_adjusted_cycle_minutes(age: int) -> int:
    """Sleep cycle length in minutes, by age tier."""
    if age < 1:
        return 50
    if age <= 18:
        return 95
    if age <= 60:
        return 90
    return 85


def get_latency_minutes(age: int, gender: Gender | str) -> int:
    """Approximate time to fall asleep, never below 5 minutes."""
    base = 15

    if age < 18:
        base -= 2
    if age >= 60:
        base += 5

    if Gender(gender) == Gender.FEMALE:
        base += 2

    return max(5, base)


def get_base_sleep_efficiency(age: int) -> float:
    """Fraction of time in bed spent asleep, before BMI adjustment."""
    if age < 18:
        return 0.9
    if age <= 40:
        return 0.88
    if age <= 60:
        return 0.86
    return 0.82


def adjust_efficiency_for_bmi(base: float, bmi: float) -> float:
    """Penalize efficiency for overweight (-0.03) and obese (-0.06) BMI."""
    if bmi < 25:
        return base
    if bmi < 30:
        return base - 0.03
    return base - 0.06


def build_derived_profile(profile: SleepProfile) -> DerivedProfile:
    """Derive cycle length, efficiency and latency from a raw profile.

    Args:
        profile: Raw biometric profile

    Returns:
        Derived sleep parameters
    """
    bmi = calculate_bmi(profile.weight_kg, profile.height_cm)
    base_efficiency = get_base_sleep_efficiency(profile.age)

    return DerivedProfile(
        bmi=bmi,
        bmi_category=categorize_bmi(bmi),
        adjusted_cycle_minutes=get_adjusted_cycle_minutes(profile.age),
        sleep_efficiency=adjust_efficiency_for_bmi(base_efficiency, bmi),
        latency_minutes=get_latency_minutes(profile.age, profile.gender),
    )
