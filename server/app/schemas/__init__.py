from app.schemas.analysis import AnalysisRequest, AnalysisResult, DefaultInputs, OpportunityRequest, ROIRequest
from app.schemas.calculation import CalculationResult, ConsultingInputs, CostInputs, CostMetrics, WasteCategory
from app.schemas.client import ClientCollection, ClientInfo, ClientRecordRead, ClientRecordWrite, ClientSummary
from app.schemas.opportunity import Opportunity, Priority
from app.schemas.report import ChartFeed, ClientReport
from app.schemas.roi import ROIScenario, ScenarioName

__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "CalculationResult",
    "ChartFeed",
    "ClientCollection",
    "ClientInfo",
    "ClientRecordRead",
    "ClientRecordWrite",
    "ClientReport",
    "ClientSummary",
    "ConsultingInputs",
    "CostInputs",
    "CostMetrics",
    "DefaultInputs",
    "Opportunity",
    "OpportunityRequest",
    "Priority",
    "ROIRequest",
    "ROIScenario",
    "ScenarioName",
    "WasteCategory",
]
