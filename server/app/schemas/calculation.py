from __future__ import annotations

from enum import Enum
from typing import Dict

from pydantic import Field, field_validator, model_validator

from app.schemas.common import FrozenModel


class WasteCategory(str, Enum):
    """The nine waste heuristics, in breakdown order."""

    PROCESS_INEFFICIENCIES = "process_inefficiencies"
    EXCESSIVE_MEETINGS = "excessive_meetings"
    COMMUNICATION_OVERHEAD = "communication_overhead"
    RESOURCE_UNDERUTILIZATION = "resource_underutilization"
    IDLE_TIME = "idle_time"
    QUALITY_REWORK = "quality_rework"
    DELAY_PENALTIES = "delay_penalties"
    OPPORTUNITY_COSTS = "opportunity_costs"
    PREMIUM_RESOURCE_COSTS = "premium_resource_costs"


class CostInputs(FrozenModel):
    """Project parameters collected by the cost step of the wizard.

    Ranges in ``COST_INPUT_BOUNDS`` are form bounds only; the cost model accepts
    any finite, non-negative value and rejects the rest with
    ``InvalidInputError``.
    """

    # Project fundamentals
    project_duration: float = Field(description="months")
    team_size: float = Field(description="headcount")
    hourly_rate: float = Field(description="blended $/hour")
    inefficiency_percentage: float

    # Communication & collaboration
    meetings_per_week: float
    meeting_duration: float = Field(description="hours")
    participants_per_meeting: float
    communication_overhead: float

    # Resource management
    resource_utilization: float
    idle_time_percentage: float
    resource_cost_per_hour: float = Field(description="fully loaded $/hour")

    # Quality & risk
    defect_rate: float
    rework_cost_multiplier: float
    quality_assurance_hours: float = Field(description="display only")
    delay_percentage: float
    penalty_cost_per_day: float
    opportunity_cost_per_day: float

    # Organisational scale
    projects_per_year: float


class CostInputsUpdate(FrozenModel):
    project_duration: float | None = None
    team_size: float | None = None
    hourly_rate: float | None = None
    inefficiency_percentage: float | None = None
    meetings_per_week: float | None = None
    meeting_duration: float | None = None
    participants_per_meeting: float | None = None
    communication_overhead: float | None = None
    resource_utilization: float | None = None
    idle_time_percentage: float | None = None
    resource_cost_per_hour: float | None = None
    defect_rate: float | None = None
    rework_cost_multiplier: float | None = None
    quality_assurance_hours: float | None = None
    delay_percentage: float | None = None
    penalty_cost_per_day: float | None = None
    opportunity_cost_per_day: float | None = None
    projects_per_year: float | None = None


class ConsultingInputs(FrozenModel):
    consulting_fee: float = 75000
    support_cost: float = 25000
    implementation_timeframe: float = Field(default=6, description="months, display only")
    expected_waste_reduction: float = Field(default=60, description="percent of waste removed")
    ongoing_support_months: float = Field(default=12, description="display only")


class ConsultingInputsUpdate(FrozenModel):
    consulting_fee: float | None = None
    support_cost: float | None = None
    implementation_timeframe: float | None = None
    expected_waste_reduction: float | None = None
    ongoing_support_months: float | None = None


class CostMetrics(FrozenModel):
    efficient_project_cost: int
    current_project_cost: int
    total_waste: int
    waste_percentage: int
    monthly_waste: int
    daily_waste: int
    waste_per_resource: int
    efficiency_rating: int
    potential_savings: int
    monthly_burn_rate: int
    effective_hourly_rate: int
    annual_waste: int
    annual_potential_savings: int
    annual_current_cost: int
    annual_efficient_cost: int


class CalculationResult(FrozenModel):
    total_cost: int
    efficient_cost: int
    total_waste: int
    total_working_hours: float
    waste_breakdown: Dict[WasteCategory, int]
    metrics: CostMetrics

    @field_validator("waste_breakdown")
    @classmethod
    def require_every_category(cls, value: Dict[WasteCategory, int]) -> Dict[WasteCategory, int]:
        missing = [category.value for category in WasteCategory if category not in value]
        if missing:
            raise ValueError(f"waste_breakdown is missing categories: {', '.join(missing)}")
        return {category: value[category] for category in WasteCategory}

    @model_validator(mode="after")
    def check_totals(self) -> "CalculationResult":
        breakdown_total = sum(self.waste_breakdown.values())
        if self.total_waste != breakdown_total:
            raise ValueError(f"total_waste {self.total_waste} does not match the breakdown sum {breakdown_total}")
        if self.total_cost != self.efficient_cost + self.total_waste:
            raise ValueError("total_cost must equal efficient_cost plus total_waste")
        return self


# (min, max) as rendered by the cost inputs form
COST_INPUT_BOUNDS: dict[str, tuple[float, float]] = {
    "project_duration": (1, 60),
    "team_size": (1, 100),
    "hourly_rate": (25, 300),
    "inefficiency_percentage": (0, 50),
    "meetings_per_week": (1, 50),
    "meeting_duration": (0.25, 8),
    "participants_per_meeting": (2, 20),
    "communication_overhead": (0, 50),
    "resource_utilization": (30, 100),
    "idle_time_percentage": (0, 40),
    "resource_cost_per_hour": (30, 400),
    "defect_rate": (0, 30),
    "rework_cost_multiplier": (1, 5),
    "quality_assurance_hours": (50, 2000),
    "delay_percentage": (0, 100),
    "penalty_cost_per_day": (0, 10000),
    "opportunity_cost_per_day": (0, 20000),
    "projects_per_year": (1, 50),
}

CONSULTING_INPUT_BOUNDS: dict[str, tuple[float, float]] = {
    "consulting_fee": (10000, 500000),
    "support_cost": (0, 200000),
    "implementation_timeframe": (1, 24),
    "expected_waste_reduction": (20, 90),
    "ongoing_support_months": (0, 36),
}
