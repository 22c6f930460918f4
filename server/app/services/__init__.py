from app.services import (
    analysis_service,
    client_service,
    cost_model,
    opportunity_service,
    portfolio_service,
    report_service,
    roi_model,
    wizard_state,
)

__all__ = [
    "analysis_service",
    "client_service",
    "cost_model",
    "opportunity_service",
    "portfolio_service",
    "report_service",
    "roi_model",
    "wizard_state",
]
