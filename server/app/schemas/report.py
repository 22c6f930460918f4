from typing import List

from app.schemas.calculation import WasteCategory
from app.schemas.client import ClientInfo
from app.schemas.common import FrozenModel
from app.schemas.opportunity import Opportunity, Priority
from app.schemas.roi import ROIScenario


class CostShare(FrozenModel):
    name: str
    value: int
    percentage: float


class BreakdownRow(FrozenModel):
    category: WasteCategory
    label: str
    value: int
    percentage: float


class TimelinePoint(FrozenModel):
    month: int
    label: str
    cumulative: int
    monthly: int


class CostRollup(FrozenModel):
    group: str
    value: int
    categories: List[WasteCategory]


class RiskFactor(FrozenModel):
    factor: str
    level: Priority
    impact: str
    cost: int


class Benchmark(FrozenModel):
    category: str
    your_performance: float
    industry_average: int
    best_practice: int


class WizardStep(FrozenModel):
    step: str
    completed: bool


class ChartFeed(FrozenModel):
    cost_split: List[CostShare]
    breakdown: List[BreakdownRow]
    timeline: List[TimelinePoint]
    rollup: List[CostRollup]
    risks: List[RiskFactor]
    benchmarks: List[Benchmark]


class KeyMetric(FrozenModel):
    label: str
    amount: int


class ClientReport(FrozenModel):
    """Everything an exporter needs to render a client deliverable."""

    client_info: ClientInfo
    executive_summary: str
    key_metrics: List[KeyMetric]
    breakdown: List[BreakdownRow]
    scenarios: List[ROIScenario]
    opportunities: List[Opportunity]
    recommendations: List[str]
