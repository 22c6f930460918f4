"""
Tests for the consulting ROI scenarios.
"""

import math

import pytest

from app.core.exceptions import InvalidInputError
from app.schemas.calculation import ConsultingInputs
from app.schemas.roi import ScenarioName
from app.services.roi_model import compute_roi, payback_months

DEFAULT_WASTE = 538024


class TestScenarioShape:
    """Ordering, labels and reduction fractions."""

    def test_three_scenarios_in_fixed_order(self):
        scenarios = compute_roi(DEFAULT_WASTE)

        assert [scenario.name for scenario in scenarios] == [
            ScenarioName.CONSERVATIVE,
            ScenarioName.REALISTIC,
            ScenarioName.OPTIMISTIC,
        ]
        assert [scenario.label for scenario in scenarios] == [
            "Conservative Impact",
            "Realistic Impact",
            "Optimistic Impact",
        ]

    def test_reduction_fractions(self):
        scenarios = compute_roi(DEFAULT_WASTE, ConsultingInputs(expected_waste_reduction=50))

        assert [scenario.waste_reduction for scenario in scenarios] == [0.25, 0.5, 0.75]

    def test_optimistic_reduction_is_capped(self):
        conservative, realistic, optimistic = compute_roi(DEFAULT_WASTE, ConsultingInputs(expected_waste_reduction=80))

        assert conservative.waste_reduction == pytest.approx(0.4)
        assert realistic.waste_reduction == pytest.approx(0.8)
        assert optimistic.waste_reduction == 0.9
        assert optimistic.description == "90% waste reduction - Exceptional results"

    def test_descriptions(self):
        conservative, realistic, optimistic = compute_roi(DEFAULT_WASTE)

        assert conservative.description == "30% waste reduction - Basic improvements"
        assert realistic.description == "60% waste reduction - Full implementation"
        assert optimistic.description == "90% waste reduction - Exceptional results"

    def test_savings_increase_across_scenarios(self):
        conservative, realistic, optimistic = compute_roi(DEFAULT_WASTE)
        assert conservative.annual_savings < realistic.annual_savings < optimistic.annual_savings


class TestDefaultEngagement:
    """Default consulting terms against the default project."""

    def test_conservative(self):
        conservative = compute_roi(DEFAULT_WASTE)[0]

        assert conservative.annual_savings == 645629
        assert conservative.net_savings == 545629
        assert conservative.roi_percent == 546
        assert conservative.payback_months == 2
        assert conservative.total_investment == 100000
        assert conservative.consulting_fee == 75000
        assert conservative.support_cost == 25000

    def test_realistic(self):
        realistic = compute_roi(DEFAULT_WASTE)[1]

        assert realistic.annual_savings == 1291258
        assert realistic.net_savings == 1191258
        assert realistic.roi_percent == 1191
        assert realistic.payback_months == 1

    def test_projects_per_year_scales_savings(self):
        single = compute_roi(DEFAULT_WASTE, projects_per_year=1)[1]
        four = compute_roi(DEFAULT_WASTE, projects_per_year=4)[1]

        assert four.annual_savings == pytest.approx(single.annual_savings * 4, abs=2)


class TestEdgeCases:
    """Zero investment, zero savings and bad inputs."""

    def test_zero_investment(self):
        scenarios = compute_roi(DEFAULT_WASTE, ConsultingInputs(consulting_fee=0, support_cost=0))

        for scenario in scenarios:
            assert scenario.total_investment == 0
            assert scenario.roi_percent == 0
            assert scenario.payback_months == 0

    def test_no_waste_never_pays_back(self):
        scenarios = compute_roi(0)

        for scenario in scenarios:
            assert scenario.annual_savings == 0
            assert scenario.net_savings == -100000
            assert scenario.roi_percent == -100
            assert scenario.payback_months is None

    def test_payback_rounds_up_partial_months(self):
        assert payback_months(100000, 120000) == 10
        assert payback_months(100000, 119999) == 11

    @pytest.mark.parametrize("reduction", [-1, 101])
    def test_reduction_outside_percentage_range(self, reduction):
        with pytest.raises(InvalidInputError) as exc_info:
            compute_roi(DEFAULT_WASTE, ConsultingInputs(expected_waste_reduction=reduction))

        assert exc_info.value.field == "expected_waste_reduction"

    def test_negative_fee_is_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            compute_roi(DEFAULT_WASTE, ConsultingInputs(consulting_fee=-5))

        assert exc_info.value.field == "consulting_fee"

    def test_non_finite_waste_is_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            compute_roi(math.inf)

        assert exc_info.value.field == "total_waste"
