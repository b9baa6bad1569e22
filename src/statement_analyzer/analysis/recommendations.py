"""Rule-based recommendations derived from aggregate metrics."""
from typing import List, Optional

from ..config import AppSettings, get_settings
from ..utils.logger import get_logger
from .schema import AnalysisResult, Recommendation

logger = get_logger()

PRIORITY_RANK = {"high": 0, "medium": 1, "low": 2}


def _slug(name: str) -> str:
    return "-".join("".join(c if c.isalnum() else " " for c in name.lower()).split())


class RecommendationGenerator:
    """Evaluates a fixed, ordered rule set against an analysis result."""

    def __init__(self, settings: Optional[AppSettings] = None):
        self.settings = settings or get_settings()

    def generate(self, result: AnalysisResult) -> List[Recommendation]:
        """
        Build recommendations for a result.

        Rules are independent and evaluated in order; the output is sorted
        by priority (stable) and capped.

        Args:
            result: Aggregated metrics

        Returns:
            At most `max_recommendations` recommendations, highest priority first
        """
        recommendations = []
        recommendations.extend(self._savings_rate_rule(result))
        recommendations.extend(self._category_rules(result))
        recommendations.extend(self._frequency_rule(result))

        recommendations.sort(key=lambda r: PRIORITY_RANK.get(r.priority, len(PRIORITY_RANK)))
        capped = recommendations[:self.settings.max_recommendations]

        logger.debug(f"Generated {len(recommendations)} recommendations, kept {len(capped)}")
        return capped

    def _savings_rate_rule(self, result: AnalysisResult) -> List[Recommendation]:
        target = self.settings.savings_target_percent

        if result.savings_rate < target:
            gap = result.total_income * target / 100 - result.total_savings
            return [Recommendation(
                id="improve-savings-rate",
                category="savings",
                title="Improve your savings rate",
                body=(
                    f"Your current savings rate is {result.savings_rate:.1f}%. "
                    f"Financial advisors recommend saving at least {target:.0f}% of your income."
                ),
                impact=f"Reaching {target:.0f}% would let you save an extra ${gap:,.0f} per month",
                priority="high"
            )]

        return [Recommendation(
            id="savings-rate-on-track",
            category="praise",
            title="Excellent savings rate!",
            body=(
                f"Your savings rate of {result.savings_rate:.1f}% is above "
                f"the recommended {target:.0f}% target."
            ),
            impact="Keep these saving habits to maintain your financial health",
            priority="low"
        )]

    def _category_rules(self, result: AnalysisResult) -> List[Recommendation]:
        rules = {rule.category: rule for rule in self.settings.category_alerts}
        recommendations = []

        for stat in result.category_breakdown[:self.settings.top_categories]:
            rule = rules.get(stat.name)
            if rule is None or stat.percentage_of_expenses <= rule.threshold_percent:
                continue

            recommendations.append(Recommendation(
                id=f"{_slug(stat.name)}-high",
                category="spending-alert",
                title=rule.title,
                body=(
                    f"{stat.name} accounts for {stat.percentage_of_expenses:.1f}% "
                    f"of your expenses. {rule.advice}"
                ),
                impact=f"You could save about ${stat.total_amount * rule.savings_share:,.0f} per month",
                priority=rule.priority
            ))

        return recommendations

    def _frequency_rule(self, result: AnalysisResult) -> List[Recommendation]:
        if result.transaction_count <= self.settings.high_transaction_count:
            return []

        return [Recommendation(
            id="consolidate-purchases",
            category="savings",
            title="Consolidate your purchases",
            body=(
                f"You made {result.transaction_count} transactions. Grouping small purchases "
                f"helps you save and keep better control."
            ),
            impact="Better financial organization and fewer impulse purchases",
            priority="low"
        )]
