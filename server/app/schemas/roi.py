from enum import Enum

from app.schemas.common import FrozenModel


class ScenarioName(str, Enum):
    CONSERVATIVE = "conservative"
    REALISTIC = "realistic"
    OPTIMISTIC = "optimistic"


class ROIScenario(FrozenModel):
    name: ScenarioName
    label: str
    description: str
    waste_reduction: float
    annual_savings: int
    net_savings: int
    roi_percent: int
    # None means the engagement never pays back (no savings)
    payback_months: int | None
    consulting_fee: int
    support_cost: int
    total_investment: int
