"""
Presentation feed for the results dashboard and document exporters.

Everything here is derived from a ``CalculationResult`` plus the inputs that
produced it. Percentages are rounded to one decimal place; shares of a zero
total are reported as 0.
"""

from __future__ import annotations

import math

from app.schemas.calculation import CalculationResult, ConsultingInputs, CostInputs, WasteCategory
from app.schemas.client import ClientInfo
from app.schemas.opportunity import Priority
from app.schemas.report import (
    Benchmark,
    BreakdownRow,
    ChartFeed,
    ClientReport,
    CostRollup,
    CostShare,
    KeyMetric,
    RiskFactor,
    TimelinePoint,
    WizardStep,
)
from app.services.cost_model import round_half_up, safe_ratio
from app.services.opportunity_service import rank_opportunities
from app.services.roi_model import compute_roi

BREAKDOWN_LABELS = {
    WasteCategory.PROCESS_INEFFICIENCIES: "Process Inefficiencies",
    WasteCategory.EXCESSIVE_MEETINGS: "Excessive Meetings",
    WasteCategory.COMMUNICATION_OVERHEAD: "Communication Overhead",
    WasteCategory.RESOURCE_UNDERUTILIZATION: "Resource Underutilization",
    WasteCategory.IDLE_TIME: "Idle Time",
    WasteCategory.QUALITY_REWORK: "Quality Rework",
    WasteCategory.DELAY_PENALTIES: "Delay Penalties",
    WasteCategory.OPPORTUNITY_COSTS: "Opportunity",
    WasteCategory.PREMIUM_RESOURCE_COSTS: "Premium Resource",
}

ROLLUP_GROUPS: tuple[tuple[str, tuple[WasteCategory, ...]], ...] = (
    ("Project Management", (WasteCategory.PROCESS_INEFFICIENCIES, WasteCategory.EXCESSIVE_MEETINGS)),
    ("Communication", (WasteCategory.COMMUNICATION_OVERHEAD,)),
    (
        "Resource Management",
        (
            WasteCategory.RESOURCE_UNDERUTILIZATION,
            WasteCategory.IDLE_TIME,
            WasteCategory.PREMIUM_RESOURCE_COSTS,
        ),
    ),
    ("Quality", (WasteCategory.QUALITY_REWORK,)),
    ("Timeline", (WasteCategory.DELAY_PENALTIES, WasteCategory.OPPORTUNITY_COSTS)),
)

# Extra cumulative share added per elapsed month; front-loads spend on the curve.
TIMELINE_RAMP_PER_MONTH = 2

RECOMMENDATION = (
    "Based on our analysis, we recommend implementing a comprehensive waste reduction program "
    "that could deliver 300-500% ROI in the first year. Our consulting services typically help "
    "clients recover 60-80% of identified waste within 3-6 months."
)
NEXT_STEPS = (
    "Schedule a free consultation to discuss your specific needs",
    "Implement proven waste reduction strategies",
    "Achieve 300-500% ROI within the first year",
    "Recover 60-80% of identified waste within 3-6 months",
)


def _share(value: float, total: float) -> float:
    return round(safe_ratio(value, total) * 100, 1)


def _number(value: float) -> str:
    return f"{value:g}"


def cost_split(calculations: CalculationResult) -> list[CostShare]:
    return [
        CostShare(
            name="Efficient Project Cost",
            value=calculations.efficient_cost,
            percentage=_share(calculations.efficient_cost, calculations.total_cost),
        ),
        CostShare(
            name="Current Waste",
            value=calculations.total_waste,
            percentage=_share(calculations.total_waste, calculations.total_cost),
        ),
    ]


def waste_breakdown_rows(calculations: CalculationResult) -> list[BreakdownRow]:
    return [
        BreakdownRow(
            category=category,
            label=BREAKDOWN_LABELS[category],
            value=calculations.waste_breakdown.get(category, 0),
            percentage=_share(calculations.waste_breakdown.get(category, 0), calculations.total_waste),
        )
        for category in WasteCategory
    ]


def cost_timeline(calculations: CalculationResult, project_duration: float) -> list[TimelinePoint]:
    """Cumulative spend per whole month of the project."""
    months = math.floor(project_duration) if project_duration > 0 else 0
    monthly = round_half_up(safe_ratio(calculations.total_cost, project_duration))
    points = []
    for month in range(1, months + 1):
        cumulative_share = min(100.0, month / project_duration * 100 + month * TIMELINE_RAMP_PER_MONTH)
        points.append(
            TimelinePoint(
                month=month,
                label=f"Month {month}",
                cumulative=round_half_up(calculations.total_cost * cumulative_share / 100),
                monthly=monthly,
            )
        )
    return points


def cost_rollup(calculations: CalculationResult) -> list[CostRollup]:
    return [
        CostRollup(
            group=group,
            value=sum(calculations.waste_breakdown.get(category, 0) for category in categories),
            categories=list(categories),
        )
        for group, categories in ROLLUP_GROUPS
    ]


def _level(value: float, high: float, medium: float, *, higher_is_worse: bool = True) -> Priority:
    if higher_is_worse:
        if value > high:
            return Priority.HIGH
        return Priority.MEDIUM if value > medium else Priority.LOW
    if value < high:
        return Priority.HIGH
    return Priority.MEDIUM if value < medium else Priority.LOW


def risk_factors(calculations: CalculationResult, inputs: CostInputs) -> list[RiskFactor]:
    breakdown = calculations.waste_breakdown
    return [
        RiskFactor(
            factor="Timeline Risk",
            level=_level(inputs.delay_percentage, 25, 15),
            impact=f"{_number(inputs.delay_percentage)}% delay probability",
            cost=breakdown.get(WasteCategory.DELAY_PENALTIES, 0) + breakdown.get(WasteCategory.OPPORTUNITY_COSTS, 0),
        ),
        RiskFactor(
            factor="Quality Risk",
            level=_level(inputs.defect_rate, 15, 8),
            impact=f"{_number(inputs.defect_rate)}% defect rate",
            cost=breakdown.get(WasteCategory.QUALITY_REWORK, 0),
        ),
        RiskFactor(
            factor="Resource Risk",
            level=_level(inputs.resource_utilization, 70, 85, higher_is_worse=False),
            impact=f"{_number(inputs.resource_utilization)}% utilization",
            cost=breakdown.get(WasteCategory.RESOURCE_UNDERUTILIZATION, 0) + breakdown.get(WasteCategory.IDLE_TIME, 0),
        ),
    ]


def benchmarks(inputs: CostInputs) -> list[Benchmark]:
    return [
        Benchmark(
            category="Process Efficiency",
            your_performance=max(30, 100 - inputs.inefficiency_percentage * 2.5),
            industry_average=80,
            best_practice=95,
        ),
        Benchmark(
            category="Meeting Efficiency",
            your_performance=max(25, 100 - inputs.meetings_per_week * 2.5),
            industry_average=75,
            best_practice=90,
        ),
        Benchmark(
            category="Communication",
            your_performance=max(35, 100 - inputs.communication_overhead * 1.5),
            industry_average=85,
            best_practice=95,
        ),
        Benchmark(
            category="Resource Utilization",
            your_performance=max(40, inputs.resource_utilization * 0.7),
            industry_average=80,
            best_practice=90,
        ),
        Benchmark(
            category="Quality Management",
            your_performance=max(35, 100 - inputs.defect_rate * 6),
            industry_average=92,
            best_practice=98,
        ),
        Benchmark(
            category="Timeline Management",
            your_performance=max(30, 100 - inputs.delay_percentage * 2),
            industry_average=85,
            best_practice=95,
        ),
    ]


def build_chart_feed(calculations: CalculationResult, inputs: CostInputs) -> ChartFeed:
    return ChartFeed(
        cost_split=cost_split(calculations),
        breakdown=waste_breakdown_rows(calculations),
        timeline=cost_timeline(calculations, inputs.project_duration),
        rollup=cost_rollup(calculations),
        risks=risk_factors(calculations, inputs),
        benchmarks=benchmarks(inputs),
    )


def wizard_progress(client_info: ClientInfo, calculations: CalculationResult | None) -> list[WizardStep]:
    return [
        WizardStep(step="Client Information", completed=client_info.is_captured),
        # Cost parameters always have defaults to work from.
        WizardStep(step="Cost Parameters", completed=True),
        WizardStep(step="Cost Analysis", completed=calculations is not None and calculations.total_cost > 0),
    ]


def executive_summary(calculations: CalculationResult, projects_per_year: float) -> str:
    metrics = calculations.metrics
    return (
        f"Your organization is currently losing ${metrics.annual_waste:,} annually across "
        f"{_number(projects_per_year)} similar projects. This represents {metrics.waste_percentage}% "
        "of your project budgets being wasted due to process inefficiencies."
    )


def key_metrics(calculations: CalculationResult) -> list[KeyMetric]:
    return [
        KeyMetric(label="Current Total Cost", amount=calculations.total_cost),
        KeyMetric(label="Current Waste", amount=calculations.total_waste),
        KeyMetric(label="Efficient Project Cost", amount=calculations.efficient_cost),
        KeyMetric(label="Annual Waste", amount=calculations.metrics.annual_waste),
        KeyMetric(label="Annual Savings Potential", amount=calculations.metrics.annual_potential_savings),
    ]


def build_report(
    client_info: ClientInfo,
    calculations: CalculationResult,
    cost_inputs: CostInputs,
    consulting_inputs: ConsultingInputs | None = None,
) -> ClientReport:
    consulting = consulting_inputs if consulting_inputs is not None else ConsultingInputs()
    return ClientReport(
        client_info=client_info,
        executive_summary=executive_summary(calculations, cost_inputs.projects_per_year),
        key_metrics=key_metrics(calculations),
        breakdown=waste_breakdown_rows(calculations),
        scenarios=compute_roi(calculations.total_waste, consulting, cost_inputs.projects_per_year),
        opportunities=rank_opportunities(calculations.waste_breakdown, calculations.total_waste),
        recommendations=[RECOMMENDATION, *NEXT_STEPS],
    )
