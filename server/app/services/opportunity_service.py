from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from app.schemas.calculation import WasteCategory
from app.schemas.opportunity import Opportunity, Priority
from app.services.cost_model import RECOVERABLE_WASTE_SHARE, round_half_up, safe_ratio

MAX_OPPORTUNITIES = 5
MIN_MEANINGFUL_SAVINGS = 1000


@dataclass(frozen=True, slots=True)
class OpportunityProfile:
    label: str
    solution: str
    time_to_implement: str
    threshold: int
    above: Priority
    below: Priority

    def priority_for(self, impact_percentage: int) -> Priority:
        return self.above if impact_percentage > self.threshold else self.below


OPPORTUNITY_PROFILES: Mapping[WasteCategory, OpportunityProfile] = {
    WasteCategory.PROCESS_INEFFICIENCIES: OpportunityProfile(
        label="Process Optimization",
        solution="Implement standardized workflows, eliminate redundant steps, introduce automation where possible",
        time_to_implement="2-3 months",
        threshold=25,
        above=Priority.HIGH,
        below=Priority.MEDIUM,
    ),
    WasteCategory.EXCESSIVE_MEETINGS: OpportunityProfile(
        label="Meeting Efficiency",
        solution="Reduce meeting frequency by 40%, implement async updates, establish clear meeting protocols",
        time_to_implement="1 month",
        threshold=20,
        above=Priority.HIGH,
        below=Priority.MEDIUM,
    ),
    WasteCategory.COMMUNICATION_OVERHEAD: OpportunityProfile(
        label="Communication Streamlining",
        solution="Deploy collaboration tools, create communication standards, implement status dashboards",
        time_to_implement="1-2 months",
        threshold=15,
        above=Priority.HIGH,
        below=Priority.MEDIUM,
    ),
    WasteCategory.RESOURCE_UNDERUTILIZATION: OpportunityProfile(
        label="Resource Optimization",
        solution="Implement capacity planning, cross-train team members, optimize task allocation",
        time_to_implement="2-4 months",
        threshold=20,
        above=Priority.HIGH,
        below=Priority.MEDIUM,
    ),
    WasteCategory.IDLE_TIME: OpportunityProfile(
        label="Workflow Optimization",
        solution="Eliminate bottlenecks, implement parallel work streams, improve dependency management",
        time_to_implement="1-3 months",
        threshold=15,
        above=Priority.HIGH,
        below=Priority.MEDIUM,
    ),
    WasteCategory.QUALITY_REWORK: OpportunityProfile(
        label="Quality Management",
        solution="Implement quality gates, establish review processes, invest in upfront planning",
        time_to_implement="2-3 months",
        threshold=20,
        above=Priority.HIGH,
        below=Priority.MEDIUM,
    ),
    WasteCategory.DELAY_PENALTIES: OpportunityProfile(
        label="Timeline Management",
        solution="Improve project planning, implement milestone tracking, establish realistic timelines",
        time_to_implement="1-2 months",
        threshold=10,
        above=Priority.MEDIUM,
        below=Priority.LOW,
    ),
    WasteCategory.OPPORTUNITY_COSTS: OpportunityProfile(
        label="Strategic Planning",
        solution="Improve project prioritization, implement portfolio management, optimize resource allocation",
        time_to_implement="3-6 months",
        threshold=15,
        above=Priority.MEDIUM,
        below=Priority.LOW,
    ),
    WasteCategory.PREMIUM_RESOURCE_COSTS: OpportunityProfile(
        label="Resource Planning",
        solution="Improve resource forecasting, establish preferred vendor relationships, optimize hiring",
        time_to_implement="2-4 months",
        threshold=10,
        above=Priority.MEDIUM,
        below=Priority.LOW,
    ),
}


def rank_opportunities(
    waste_breakdown: Mapping[WasteCategory, int],
    total_waste: float | None = None,
) -> list[Opportunity]:
    """Turn the largest waste sources into prioritized remediation opportunities.

    Only the five costliest categories are considered, in descending cost
    order (ties keep breakdown order), and anything recovering $1,000 or less
    is dropped. The result is not re-sorted by priority.
    """
    if total_waste is None:
        total_waste = sum(waste_breakdown.values())

    ranked = sorted(
        ((WasteCategory(category), cost) for category, cost in waste_breakdown.items() if cost > 0),
        key=lambda item: item[1],
        reverse=True,
    )[:MAX_OPPORTUNITIES]

    opportunities: list[Opportunity] = []
    for category, cost in ranked:
        profile = OPPORTUNITY_PROFILES[category]
        impact_percentage = round_half_up(safe_ratio(cost, total_waste) * 100)
        opportunities.append(
            Opportunity(
                waste_category=category,
                category=profile.label,
                current_waste=cost,
                impact_percentage=impact_percentage,
                potential_savings=round_half_up(cost * RECOVERABLE_WASTE_SHARE),
                solution=profile.solution,
                time_to_implement=profile.time_to_implement,
                priority=profile.priority_for(impact_percentage),
            )
        )

    return [opportunity for opportunity in opportunities if opportunity.potential_savings > MIN_MEANINGFUL_SAVINGS]
