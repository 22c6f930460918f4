from __future__ import annotations

from app.schemas.analysis import AnalysisResult
from app.schemas.calculation import CalculationResult, ConsultingInputs, CostInputs
from app.services.cost_model import compute_costs
from app.services.opportunity_service import rank_opportunities
from app.services.roi_model import compute_roi


def analyze_calculation(
    calculations: CalculationResult,
    consulting_inputs: ConsultingInputs,
    projects_per_year: float,
) -> AnalysisResult:
    """Derive ROI scenarios and opportunities from an already computed result."""
    return AnalysisResult(
        calculations=calculations,
        scenarios=compute_roi(calculations.total_waste, consulting_inputs, projects_per_year),
        opportunities=rank_opportunities(calculations.waste_breakdown, calculations.total_waste),
    )


def run_analysis(cost_inputs: CostInputs, consulting_inputs: ConsultingInputs | None = None) -> AnalysisResult:
    calculations = compute_costs(cost_inputs)
    return analyze_calculation(
        calculations,
        consulting_inputs if consulting_inputs is not None else ConsultingInputs(),
        cost_inputs.projects_per_year,
    )
