"""
Project cost and waste model.

Turns the cost inputs collected by the wizard into an "efficient" labour
baseline plus nine independent waste heuristics. Each heuristic only counts
cost above what a healthy project would carry anyway (utilization below 85%,
idle time above 5%, and so on), so a well-run project legitimately scores zero
waste.

The module is pure: no I/O, no shared state, and no storage or rendering
imports. Every call with the same inputs yields the same ``CalculationResult``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Mapping

from app.core.exceptions import InvalidInputError
from app.schemas.calculation import CalculationResult, CostInputs, CostMetrics, WasteCategory

WORKING_DAYS_PER_MONTH = 22
WORKING_HOURS_PER_DAY = 8
WEEKS_PER_MONTH = 4.33

EXCESSIVE_MEETING_SHARE = 0.15
UTILIZATION_THRESHOLD = 85
NORMAL_IDLE_PERCENTAGE = 5
PREMIUM_RATE_THRESHOLD = 10
PREMIUM_HOURS_SHARE = 0.1
RECOVERABLE_WASTE_SHARE = 0.7

# Fields that divide other figures; zero is rejected for these.
_POSITIVE_FIELDS = frozenset({"project_duration", "team_size"})


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    whole = math.floor(value)
    return whole + 1 if value - whole >= 0.5 else whole


def safe_ratio(numerator: float, denominator: float) -> float:
    """Divide, yielding 0 for a zero denominator so no NaN/inf reaches the output."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def validate_cost_inputs(inputs: CostInputs) -> None:
    for field in CostInputs.model_fields:
        value = getattr(inputs, field)
        if not isinstance(value, (int, float)) or isinstance(value, bool) or not math.isfinite(value):
            raise InvalidInputError(field, value, "must be a finite number")
        if value < 0:
            raise InvalidInputError(field, value, "must not be negative")
        if field in _POSITIVE_FIELDS and value == 0:
            raise InvalidInputError(field, value, "must be greater than zero")


@dataclass(frozen=True, slots=True)
class WorkloadBasis:
    """Shared quantities every waste heuristic is computed from."""

    inputs: CostInputs
    total_working_hours: float
    expected_delay_days: float

    @classmethod
    def from_inputs(cls, inputs: CostInputs) -> "WorkloadBasis":
        total_working_hours = (
            inputs.project_duration * WORKING_DAYS_PER_MONTH * WORKING_HOURS_PER_DAY * inputs.team_size
        )
        expected_delay_days = (inputs.project_duration * WORKING_DAYS_PER_MONTH) * (inputs.delay_percentage / 100)
        return cls(inputs=inputs, total_working_hours=total_working_hours, expected_delay_days=expected_delay_days)


def _process_inefficiencies(basis: WorkloadBasis) -> float:
    inputs = basis.inputs
    wasted_hours = basis.total_working_hours * (inputs.inefficiency_percentage / 100)
    return wasted_hours * inputs.hourly_rate


def _excessive_meetings(basis: WorkloadBasis) -> float:
    inputs = basis.inputs
    project_weeks = inputs.project_duration * WEEKS_PER_MONTH
    weekly_meeting_hours = inputs.meetings_per_week * inputs.meeting_duration * inputs.participants_per_meeting
    excessive_hours = weekly_meeting_hours * project_weeks * EXCESSIVE_MEETING_SHARE
    return excessive_hours * inputs.hourly_rate


def _communication_overhead(basis: WorkloadBasis) -> float:
    inputs = basis.inputs
    wasted_hours = basis.total_working_hours * (inputs.communication_overhead / 100)
    return wasted_hours * inputs.hourly_rate


def _resource_underutilization(basis: WorkloadBasis) -> float:
    inputs = basis.inputs
    shortfall = max(0, UTILIZATION_THRESHOLD - inputs.resource_utilization)
    return basis.total_working_hours * (shortfall / 100) * inputs.hourly_rate


def _idle_time(basis: WorkloadBasis) -> float:
    inputs = basis.inputs
    excess_idle = max(0, inputs.idle_time_percentage - NORMAL_IDLE_PERCENTAGE)
    return basis.total_working_hours * (excess_idle / 100) * inputs.hourly_rate


def _quality_rework(basis: WorkloadBasis) -> float:
    inputs = basis.inputs
    rework_hours = basis.total_working_hours * (inputs.defect_rate / 100)
    return rework_hours * inputs.hourly_rate * max(0, inputs.rework_cost_multiplier - 1)


def _delay_penalties(basis: WorkloadBasis) -> float:
    return basis.expected_delay_days * basis.inputs.penalty_cost_per_day


def _opportunity_costs(basis: WorkloadBasis) -> float:
    return basis.expected_delay_days * basis.inputs.opportunity_cost_per_day


def _premium_resource_costs(basis: WorkloadBasis) -> float:
    # Step function: a premium of $10/hr or less is ignored entirely.
    inputs = basis.inputs
    premium = max(0, inputs.resource_cost_per_hour - inputs.hourly_rate)
    if premium <= PREMIUM_RATE_THRESHOLD:
        return 0.0
    return basis.total_working_hours * PREMIUM_HOURS_SHARE * premium


WASTE_FORMULAS: Mapping[WasteCategory, Callable[[WorkloadBasis], float]] = {
    WasteCategory.PROCESS_INEFFICIENCIES: _process_inefficiencies,
    WasteCategory.EXCESSIVE_MEETINGS: _excessive_meetings,
    WasteCategory.COMMUNICATION_OVERHEAD: _communication_overhead,
    WasteCategory.RESOURCE_UNDERUTILIZATION: _resource_underutilization,
    WasteCategory.IDLE_TIME: _idle_time,
    WasteCategory.QUALITY_REWORK: _quality_rework,
    WasteCategory.DELAY_PENALTIES: _delay_penalties,
    WasteCategory.OPPORTUNITY_COSTS: _opportunity_costs,
    WasteCategory.PREMIUM_RESOURCE_COSTS: _premium_resource_costs,
}


def compute_waste_breakdown(basis: WorkloadBasis) -> dict[WasteCategory, int]:
    return {category: round_half_up(formula(basis)) for category, formula in WASTE_FORMULAS.items()}


def _compute_metrics(
    inputs: CostInputs,
    basis: WorkloadBasis,
    efficient_labor_cost: float,
    total_waste: int,
) -> CostMetrics:
    current_project_cost = efficient_labor_cost + total_waste
    projects = inputs.projects_per_year
    return CostMetrics(
        efficient_project_cost=round_half_up(efficient_labor_cost),
        current_project_cost=round_half_up(current_project_cost),
        total_waste=total_waste,
        waste_percentage=round_half_up(safe_ratio(total_waste, current_project_cost) * 100),
        monthly_waste=round_half_up(safe_ratio(total_waste, inputs.project_duration)),
        daily_waste=round_half_up(safe_ratio(total_waste, inputs.project_duration * WORKING_DAYS_PER_MONTH)),
        waste_per_resource=round_half_up(safe_ratio(total_waste, inputs.team_size)),
        efficiency_rating=max(0, round_half_up(safe_ratio(efficient_labor_cost, current_project_cost) * 100)),
        potential_savings=round_half_up(total_waste * RECOVERABLE_WASTE_SHARE),
        monthly_burn_rate=round_half_up(safe_ratio(current_project_cost, inputs.project_duration)),
        effective_hourly_rate=round_half_up(safe_ratio(current_project_cost, basis.total_working_hours)),
        annual_waste=round_half_up(total_waste * projects),
        annual_potential_savings=round_half_up(total_waste * RECOVERABLE_WASTE_SHARE * projects),
        annual_current_cost=round_half_up(current_project_cost * projects),
        annual_efficient_cost=round_half_up(efficient_labor_cost * projects),
    )


def compute_costs(inputs: CostInputs) -> CalculationResult:
    """Compute the cost breakdown and headline metrics for one project.

    Raises:
        InvalidInputError: a field is non-finite or negative, or the project
            duration / team size is zero.
    """
    validate_cost_inputs(inputs)

    basis = WorkloadBasis.from_inputs(inputs)
    efficient_labor_cost = basis.total_working_hours * inputs.hourly_rate

    waste_breakdown = compute_waste_breakdown(basis)
    total_waste = sum(waste_breakdown.values())
    efficient_cost = round_half_up(efficient_labor_cost)

    return CalculationResult(
        total_cost=efficient_cost + total_waste,
        efficient_cost=efficient_cost,
        total_waste=total_waste,
        total_working_hours=basis.total_working_hours,
        waste_breakdown=waste_breakdown,
        metrics=_compute_metrics(inputs, basis, efficient_labor_cost, total_waste),
    )
