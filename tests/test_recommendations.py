"""Tests for recommendation generator."""
import unittest
from dataclasses import replace

from statement_analyzer.analysis import AnalysisResult, RecommendationGenerator
from statement_analyzer.analysis.schema import CategoryStat
from statement_analyzer.config import get_settings


def make_result(income, expenses, breakdown=(), count=10):
    savings = income - expenses
    return AnalysisResult(
        analysis_id="analysis-1",
        total_income=income,
        total_expenses=expenses,
        total_savings=savings,
        savings_rate=savings / income * 100 if income else 0.0,
        transaction_count=count,
        average_transaction_amount=0.0,
        category_breakdown=[
            CategoryStat(
                name=name,
                total_amount=expenses * pct / 100,
                percentage_of_expenses=pct,
                transaction_count=1,
                color_token="#000000"
            )
            for name, pct in breakdown
        ]
    )


class TestRecommendationGenerator(unittest.TestCase):
    """Test RecommendationGenerator functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.generator = RecommendationGenerator()

    def test_low_savings_rate(self):
        """Test high-priority savings advice below target."""
        recommendations = self.generator.generate(make_result(1000000, 950000))

        self.assertEqual(recommendations[0].id, "improve-savings-rate")
        self.assertEqual(recommendations[0].category, "savings")
        self.assertEqual(recommendations[0].priority, "high")
        # 20% of income minus current savings
        self.assertIn("150,000", recommendations[0].impact)

    def test_healthy_savings_rate(self):
        """Test praise at or above target."""
        recommendations = self.generator.generate(make_result(1000000, 800000))

        self.assertEqual(len(recommendations), 1)
        self.assertEqual(recommendations[0].id, "savings-rate-on-track")
        self.assertEqual(recommendations[0].category, "praise")
        self.assertEqual(recommendations[0].priority, "low")

    def test_category_alerts(self):
        """Test alerts for top categories above their threshold."""
        result = make_result(1000000, 500000, [("Food & Dining", 40.0), ("Transport", 25.0), ("Entertainment", 5.0)])
        ids = [r.id for r in self.generator.generate(result)]

        self.assertIn("food-dining-high", ids)
        self.assertIn("transport-high", ids)
        self.assertNotIn("entertainment-high", ids)

    def test_alert_only_for_top_categories(self):
        """Test categories beyond the top three are ignored."""
        result = make_result(1000000, 500000, [
            ("Shopping", 30.0), ("Health", 25.0), ("Utilities", 20.0), ("Entertainment", 15.0)
        ])
        ids = [r.id for r in self.generator.generate(result)]

        self.assertNotIn("entertainment-high", ids)

    def test_consolidate_purchases(self):
        """Test habit advice for many transactions."""
        ids = [r.id for r in self.generator.generate(make_result(1000000, 500000, count=150))]
        self.assertIn("consolidate-purchases", ids)

        ids = [r.id for r in self.generator.generate(make_result(1000000, 500000, count=100))]
        self.assertNotIn("consolidate-purchases", ids)

    def test_sorted_by_priority(self):
        """Test high before medium before low."""
        result = make_result(1000000, 950000, [("Entertainment", 40.0), ("Food & Dining", 30.0)], count=150)
        priorities = [r.priority for r in self.generator.generate(result)]

        self.assertEqual(priorities, ["high", "medium", "low", "low"])

    def test_capped(self):
        """Test the maximum number of recommendations."""
        generator = RecommendationGenerator(replace(get_settings(), max_recommendations=2))
        result = make_result(1000000, 950000, [("Entertainment", 40.0), ("Food & Dining", 30.0)], count=150)

        self.assertEqual(len(generator.generate(result)), 2)


if __name__ == "__main__":
    unittest.main()
