"""
Tests for heat index computation and risk classification.
"""

from __future__ import annotations

import math

import pytest

from dogwalk_safety import heat_index
from dogwalk_safety.heat_index import (
    ADVISORIES,
    classify,
    evaluate,
    linear_heat_index,
    regression_heat_index,
)
from dogwalk_safety.schemas import RiskTier


class TestFormulas:
    """Test the two heat index regimes."""

    def test_linear_formula(self) -> None:
        # 0.5 * (70 + 61 + 2.4 + 4.7)
        assert linear_heat_index(70, 50) == pytest.approx(69.05)

    def test_regression_value(self) -> None:
        """Rothfusz value for 95 F at 70% RH."""
        assert regression_heat_index(95, 70) == pytest.approx(122.6, abs=0.1)

    def test_formulas_diverge(self) -> None:
        assert abs(linear_heat_index(100, 60) - regression_heat_index(100, 60)) > 5

    @pytest.mark.parametrize("temp", [40, 60, 75, 79, 79.9])
    def test_linear_below_80(self, temp: float) -> None:
        assert heat_index.heat_index_f(temp, 60) == linear_heat_index(temp, 60)

    @pytest.mark.parametrize("temp", [80, 85, 95, 110])
    def test_regression_at_and_above_80(self, temp: float) -> None:
        assert heat_index.heat_index_f(temp, 60) == regression_heat_index(temp, 60)

    def test_evaluate_uses_regime(self) -> None:
        """Rounded result follows the selected formula on each side of 80 F."""
        below = evaluate(75, 90)
        above = evaluate(90, 90)
        assert below.heat_index_f == math.floor(linear_heat_index(75, 90) + 0.5)
        assert above.heat_index_f == math.floor(regression_heat_index(90, 90) + 0.5)


class TestClassify:
    """Test the four-tier table."""

    @pytest.mark.parametrize(
        ("value", "tier"),
        [
            (-20.0, RiskTier.SAFE),
            (79.99, RiskTier.SAFE),
            (80.0, RiskTier.CAUTION),
            (89.99, RiskTier.CAUTION),
            (90.0, RiskTier.DANGER),
            (124.99, RiskTier.DANGER),
            (125.0, RiskTier.EXTREME),
            (150.0, RiskTier.EXTREME),
        ],
    )
    def test_boundaries(self, value: float, tier: RiskTier) -> None:
        assert classify(value) is tier

    def test_classifies_unrounded_value(self) -> None:
        """80 F / 40% gives 79.93: rounds to 80 but is still safe."""
        result = evaluate(80, 40)
        assert result.heat_index_f == 80
        assert result.risk_tier is RiskTier.SAFE


class TestEvaluate:
    """Test the full evaluation."""

    def test_hot_humid_is_danger(self) -> None:
        result = evaluate(95, 70)
        assert result.risk_tier is RiskTier.DANGER
        assert result.heat_index_f == 123

    def test_mild_is_safe(self) -> None:
        result = evaluate(70, 50)
        assert result.risk_tier is RiskTier.SAFE
        assert result.heat_index_f == 69
        assert result.advisory == "It's a great day for a walk!"

    def test_caution(self) -> None:
        assert evaluate(86, 40).risk_tier is RiskTier.CAUTION

    def test_extreme(self) -> None:
        result = evaluate(100, 60)
        assert result.risk_tier is RiskTier.EXTREME
        assert result.advisory.startswith("Extreme danger")

    def test_negative_temperature(self) -> None:
        result = evaluate(-10, 50)
        assert result.risk_tier is RiskTier.SAFE
        assert result.heat_index_f == -19

    def test_out_of_range_humidity_does_not_fail(self) -> None:
        result = evaluate(100, 150)
        assert isinstance(result.heat_index_f, int)
        assert evaluate(100, -5).risk_tier in RiskTier

    def test_rounds_to_nearest(self) -> None:
        # 69.52 and 69.473
        assert evaluate(70, 60).heat_index_f == 70
        assert evaluate(70, 59).heat_index_f == 69

    def test_halves_round_up(self) -> None:
        assert heat_index._round_half_up(92.5) == 93
        assert heat_index._round_half_up(93.5) == 94


class TestAdvisories:
    """Advisory text per tier."""

    def test_every_tier_has_text(self) -> None:
        for tier in RiskTier:
            assert ADVISORIES[tier]

    def test_texts_are_distinct(self) -> None:
        assert len(set(ADVISORIES.values())) == len(RiskTier)

    def test_urgency_increases(self) -> None:
        assert "great day" in ADVISORIES[RiskTier.SAFE]
        assert ADVISORIES[RiskTier.CAUTION].startswith("Caution")
        assert ADVISORIES[RiskTier.DANGER].startswith("Danger")
        assert "Avoid outdoor activity" in ADVISORIES[RiskTier.EXTREME]

    def test_tier_severity_order(self) -> None:
        severities = [tier.severity for tier in RiskTier]
        assert severities == sorted(severities) == [0, 1, 2, 3]
