from typing import List

from fastapi import APIRouter

from app.core.logging import get_logger
from app.schemas.analysis import AnalysisRequest, AnalysisResult, DefaultInputs, OpportunityRequest, ROIRequest
from app.schemas.calculation import CalculationResult, ConsultingInputs, CostInputs
from app.schemas.opportunity import Opportunity
from app.schemas.roi import ROIScenario
from app.services.analysis_service import run_analysis
from app.services.cost_model import compute_costs
from app.services.opportunity_service import rank_opportunities
from app.services.roi_model import compute_roi
from app.services.wizard_state import DEFAULT_COST_INPUTS

router = APIRouter(prefix="/calculations", tags=["calculations"])
logger = get_logger(__name__)


@router.get("/defaults", response_model=DefaultInputs)
async def default_inputs() -> DefaultInputs:
    return DefaultInputs(cost_inputs=DEFAULT_COST_INPUTS, consulting_inputs=ConsultingInputs())


@router.post("/costs", response_model=CalculationResult)
async def calculate_costs(payload: CostInputs) -> CalculationResult:
    result = compute_costs(payload)
    logger.info("calculation.completed", total_cost=result.total_cost, total_waste=result.total_waste)
    return result


@router.post("/roi", response_model=List[ROIScenario])
async def calculate_roi(payload: ROIRequest) -> List[ROIScenario]:
    return compute_roi(payload.total_waste, payload.consulting_inputs, payload.projects_per_year)


@router.post("/opportunities", response_model=List[Opportunity])
async def calculate_opportunities(payload: OpportunityRequest) -> List[Opportunity]:
    return rank_opportunities(payload.waste_breakdown, payload.total_waste)


@router.post("/analysis", response_model=AnalysisResult)
async def calculate_analysis(payload: AnalysisRequest) -> AnalysisResult:
    result = run_analysis(payload.cost_inputs, payload.consulting_inputs)
    logger.info(
        "analysis.completed",
        total_waste=result.calculations.total_waste,
        opportunities=len(result.opportunities),
    )
    return result
