"""
Tests for ranking waste categories into remediation opportunities.
"""

from app.schemas.calculation import WasteCategory
from app.schemas.opportunity import Priority
from app.services.cost_model import compute_costs
from app.services.opportunity_service import MAX_OPPORTUNITIES, OPPORTUNITY_PROFILES, rank_opportunities


class TestDefaultRanking:
    """Ranking the default project's waste."""

    def test_top_five_by_cost(self, default_inputs):
        result = compute_costs(default_inputs)
        opportunities = rank_opportunities(result.waste_breakdown, result.total_waste)

        assert [item.waste_category for item in opportunities] == [
            WasteCategory.COMMUNICATION_OVERHEAD,
            WasteCategory.PROCESS_INEFFICIENCIES,
            WasteCategory.RESOURCE_UNDERUTILIZATION,
            WasteCategory.QUALITY_REWORK,
            WasteCategory.IDLE_TIME,
        ]

    def test_figures_and_priorities(self, default_inputs):
        result = compute_costs(default_inputs)
        top = rank_opportunities(result.waste_breakdown, result.total_waste)

        communication, process = top[0], top[1]
        assert communication.category == "Communication Streamlining"
        assert communication.current_waste == 143616
        assert communication.impact_percentage == 27
        assert communication.potential_savings == 100531
        assert communication.priority == Priority.HIGH
        assert communication.time_to_implement == "1-2 months"

        assert process.impact_percentage == 20
        assert process.potential_savings == 75398
        assert process.priority == Priority.MEDIUM

    def test_total_defaults_to_breakdown_sum(self, default_inputs):
        result = compute_costs(default_inputs)
        assert rank_opportunities(result.waste_breakdown) == rank_opportunities(
            result.waste_breakdown, result.total_waste
        )


class TestFiltering:
    """Caps, floors and zero-cost categories."""

    def test_never_more_than_five(self):
        breakdown = {category: 100000 + index for index, category in enumerate(WasteCategory)}
        assert len(rank_opportunities(breakdown)) == MAX_OPPORTUNITIES

    def test_small_savings_are_dropped(self):
        breakdown = {
            WasteCategory.PROCESS_INEFFICIENCIES: 50000,
            WasteCategory.EXCESSIVE_MEETINGS: 1400,
            WasteCategory.IDLE_TIME: 1500,
        }
        opportunities = rank_opportunities(breakdown)

        # 1400 * 0.7 = 980 falls under the floor, 1500 * 0.7 = 1050 does not
        assert [item.waste_category for item in opportunities] == [
            WasteCategory.PROCESS_INEFFICIENCIES,
            WasteCategory.IDLE_TIME,
        ]

    def test_zero_cost_categories_are_skipped(self):
        breakdown = {category: 0 for category in WasteCategory}
        breakdown[WasteCategory.DELAY_PENALTIES] = 20000

        opportunities = rank_opportunities(breakdown)

        assert len(opportunities) == 1
        assert opportunities[0].impact_percentage == 100
        assert opportunities[0].priority == Priority.MEDIUM

    def test_ties_keep_breakdown_order(self):
        breakdown = {
            WasteCategory.OPPORTUNITY_COSTS: 10000,
            WasteCategory.QUALITY_REWORK: 10000,
            WasteCategory.IDLE_TIME: 10000,
        }
        opportunities = rank_opportunities(breakdown)

        assert [item.waste_category for item in opportunities] == list(breakdown)

    def test_string_keys_are_accepted(self):
        opportunities = rank_opportunities({"premium_resource_costs": 30000})
        assert opportunities[0].category == "Resource Planning"

    def test_empty_breakdown(self):
        assert rank_opportunities({}) == []


class TestPriorityThresholds:
    """Per-category impact thresholds."""

    def test_every_category_has_a_profile(self):
        assert set(OPPORTUNITY_PROFILES) == set(WasteCategory)

    def test_threshold_is_exclusive(self):
        profile = OPPORTUNITY_PROFILES[WasteCategory.PROCESS_INEFFICIENCIES]

        assert profile.priority_for(25) == Priority.MEDIUM
        assert profile.priority_for(26) == Priority.HIGH

    def test_low_priority_categories(self):
        profile = OPPORTUNITY_PROFILES[WasteCategory.OPPORTUNITY_COSTS]

        assert profile.priority_for(15) == Priority.LOW
        assert profile.priority_for(16) == Priority.MEDIUM
