"""
Domain service: Weather-threshold disease risk scoring.

Each disease profile defines a set of favourable weather conditions. A day is
scored by counting how many of the profile's defined conditions it meets:

- Temperature window (always evaluated)
- Minimum mean relative humidity
- Minimum rainfall
- Dew point window (only when both ends are defined)
- Minimum leaf wetness hours

The match rate (matches / evaluated conditions) maps to a risk level.
"""
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from ricecare.config import settings
from ricecare.domain.disease_profiles import DISEASE_PROFILES
from ricecare.domain.models import DiseaseProfile, RiskLevel, RiskResult, WeatherDay

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RiskThresholds:
    """Match-rate cut-offs for risk levels (both inclusive)."""

    high: float = 0.8
    """Minimum match rate classified as HIGH"""

    moderate: float = 0.5
    """Minimum match rate classified as MODERATE"""


@dataclass(frozen=True)
class ConditionCheck:
    """Outcome of one evaluated profile condition."""
    name: str
    matched: bool


class RiskScoringEngine:
    """
    Stateless scorer for (weather day, disease profile) pairs.

    Safe to share and call concurrently: it never mutates its profiles
    or thresholds.
    """

    def __init__(
        self,
        profiles: Optional[Mapping[str, DiseaseProfile]] = None,
        thresholds: Optional[RiskThresholds] = None,
    ):
        """
        Initialize the engine.

        Args:
            profiles: Disease profiles by code (defaults to the built-in table)
            thresholds: Risk level cut-offs (defaults to configured values)
        """
        self.profiles = profiles if profiles is not None else DISEASE_PROFILES
        self.thresholds = thresholds or RiskThresholds(
            high=settings.risk_high_threshold,
            moderate=settings.risk_moderate_threshold,
        )

    def evaluate_conditions(
        self,
        day: WeatherDay,
        profile: DiseaseProfile,
    ) -> list[ConditionCheck]:
        """
        Evaluate every condition the profile defines against one day.

        Conditions whose thresholds are absent are skipped, not failed.
        """
        checks = [
            ConditionCheck(
                "temperature",
                day.temp_min >= profile.temp_min and day.temp_max <= profile.temp_max,
            )
        ]

        if profile.rh_min is not None:
            checks.append(ConditionCheck("humidity", day.rh_avg >= profile.rh_min))

        if profile.rain_min is not None:
            checks.append(ConditionCheck("rainfall", day.rain_sum >= profile.rain_min))

        if profile.dewpoint_min is not None and profile.dewpoint_max is not None:
            checks.append(ConditionCheck(
                "dewpoint",
                profile.dewpoint_min <= day.dewpoint_avg <= profile.dewpoint_max,
            ))

        if profile.leaf_wetness_min is not None:
            checks.append(ConditionCheck(
                "leaf_wetness",
                day.leaf_wetness_hours >= profile.leaf_wetness_min,
            ))

        return checks

    def classify(self, match_count: int, total_conditions: int) -> RiskLevel:
        """Map a match count to a risk level."""
        match_rate = match_count / total_conditions

        if match_rate >= self.thresholds.high:
            return RiskLevel.HIGH
        if match_rate >= self.thresholds.moderate:
            return RiskLevel.MODERATE
        return RiskLevel.LOW

    def score(self, day: WeatherDay, profile: DiseaseProfile) -> RiskResult:
        """
        Score one weather day against one disease profile.

        Args:
            day: Aggregated forecast day
            profile: Disease thresholds

        Returns:
            RiskResult with risk level and match counts
        """
        checks = self.evaluate_conditions(day, profile)
        match_count = sum(1 for check in checks if check.matched)
        total_conditions = len(checks)

        risk = self.classify(match_count, total_conditions)

        logger.debug(
            f"{profile.code} on {day.date}: "
            + ", ".join(f"{c.name}={'y' if c.matched else 'n'}" for c in checks)
            + f" -> {match_count}/{total_conditions} {risk.value}"
        )

        return RiskResult(
            code=profile.code,
            risk=risk,
            match_count=match_count,
            total_conditions=total_conditions,
        )

    def score_code(self, day: WeatherDay, code: str) -> RiskResult:
        """
        Score a day for a disease code.

        Unknown codes are treated as "no evidence" and yield LOW with
        zero matches instead of raising.
        """
        profile = self.profiles.get(code)
        if profile is None:
            logger.warning(f"Unknown disease code '{code}', scoring as LOW")
            return RiskResult(
                code=code,
                risk=RiskLevel.LOW,
                match_count=0,
                total_conditions=0,
            )
        return self.score(day, profile)
