"""
Domain service: Rank risk across all monitored diseases.
"""
import logging
from typing import Optional, Sequence

from ricecare.domain.models import DayRiskAssessment, RiskLevel, RiskResult, WeatherDay
from ricecare.services.domain.risk_engine import RiskScoringEngine

logger = logging.getLogger(__name__)

RISK_WEIGHT: dict[RiskLevel, int] = {
    RiskLevel.HIGH: 3,
    RiskLevel.MODERATE: 2,
    RiskLevel.LOW: 1,
}


class RiskAggregator:
    """
    Scores every monitored disease for a day and orders the results for display.

    Ordering is by risk weight, highest first. The sort is stable, so diseases
    with the same risk keep the order the caller listed them in.
    """

    def __init__(self, engine: Optional[RiskScoringEngine] = None):
        self.engine = engine or RiskScoringEngine()

    def assess_day(
        self,
        day: WeatherDay,
        monitored_codes: Sequence[str],
    ) -> list[RiskResult]:
        """
        Compute and rank risk for each monitored disease on one day.

        Args:
            day: Aggregated forecast day
            monitored_codes: Disease codes in the caller's preferred order

        Returns:
            RiskResults sorted by descending risk weight
        """
        results = [self.engine.score_code(day, code) for code in monitored_codes]
        return sorted(results, key=lambda r: RISK_WEIGHT[r.risk], reverse=True)

    def assess_forecast(
        self,
        days: Sequence[WeatherDay],
        monitored_codes: Sequence[str],
    ) -> list[DayRiskAssessment]:
        """Rank risk for every day of a forecast, keeping day order."""
        assessments = [
            DayRiskAssessment(date=day.date, results=self.assess_day(day, monitored_codes))
            for day in days
        ]

        high_days = sum(
            1 for a in assessments
            if any(r.risk is RiskLevel.HIGH for r in a.results)
        )
        logger.info(
            f"Assessed {len(monitored_codes)} diseases over {len(days)} days, "
            f"{high_days} day(s) with HIGH risk"
        )

        return assessments
