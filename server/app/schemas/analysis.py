from typing import Dict, List

from pydantic import Field

from app.schemas.calculation import CalculationResult, ConsultingInputs, CostInputs, WasteCategory
from app.schemas.common import FrozenModel
from app.schemas.opportunity import Opportunity
from app.schemas.roi import ROIScenario


class AnalysisRequest(FrozenModel):
    cost_inputs: CostInputs
    consulting_inputs: ConsultingInputs = Field(default_factory=ConsultingInputs)


class ROIRequest(FrozenModel):
    total_waste: float
    consulting_inputs: ConsultingInputs = Field(default_factory=ConsultingInputs)
    projects_per_year: float = 4


class OpportunityRequest(FrozenModel):
    waste_breakdown: Dict[WasteCategory, int]
    total_waste: float | None = None


class AnalysisResult(FrozenModel):
    calculations: CalculationResult
    scenarios: List[ROIScenario]
    opportunities: List[Opportunity]


class DefaultInputs(FrozenModel):
    cost_inputs: CostInputs
    consulting_inputs: ConsultingInputs
