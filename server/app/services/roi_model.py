from __future__ import annotations

import math
from dataclasses import dataclass

from app.core.exceptions import InvalidInputError
from app.schemas.calculation import ConsultingInputs
from app.schemas.roi import ROIScenario, ScenarioName
from app.services.cost_model import round_half_up, safe_ratio

OPTIMISTIC_REDUCTION_CAP = 0.9
DEFAULT_PROJECTS_PER_YEAR = 4


@dataclass(frozen=True, slots=True)
class ScenarioProfile:
    name: ScenarioName
    label: str
    multiplier: float
    outcome: str


SCENARIO_PROFILES: tuple[ScenarioProfile, ...] = (
    ScenarioProfile(ScenarioName.CONSERVATIVE, "Conservative Impact", 0.5, "Basic improvements"),
    ScenarioProfile(ScenarioName.REALISTIC, "Realistic Impact", 1.0, "Full implementation"),
    ScenarioProfile(ScenarioName.OPTIMISTIC, "Optimistic Impact", 1.5, "Exceptional results"),
)


def _require_finite(field: str, value: float, *, allow_negative: bool = False) -> None:
    if not isinstance(value, (int, float)) or isinstance(value, bool) or not math.isfinite(value):
        raise InvalidInputError(field, value, "must be a finite number")
    if not allow_negative and value < 0:
        raise InvalidInputError(field, value, "must not be negative")


def validate_consulting_inputs(consulting: ConsultingInputs) -> None:
    for field in ConsultingInputs.model_fields:
        _require_finite(field, getattr(consulting, field))
    if consulting.expected_waste_reduction > 100:
        raise InvalidInputError(
            "expected_waste_reduction", consulting.expected_waste_reduction, "must be between 0 and 100"
        )


def reduction_fraction(profile: ScenarioProfile, expected_reduction: float) -> float:
    fraction = expected_reduction * profile.multiplier
    if profile.name is ScenarioName.OPTIMISTIC:
        fraction = min(OPTIMISTIC_REDUCTION_CAP, fraction)
    return fraction


def payback_months(total_investment: float, annual_savings: float) -> int | None:
    """Whole months until savings cover the investment.

    0 when nothing was invested; None when there are no savings to pay it back.
    """
    if total_investment == 0:
        return 0
    if annual_savings <= 0:
        return None
    return math.ceil(total_investment / (annual_savings / 12))


def _build_scenario(
    profile: ScenarioProfile,
    *,
    total_waste: float,
    consulting: ConsultingInputs,
    projects_per_year: float,
) -> ROIScenario:
    total_investment = consulting.consulting_fee + consulting.support_cost
    fraction = reduction_fraction(profile, consulting.expected_waste_reduction / 100)

    annual_savings = total_waste * fraction * projects_per_year
    net_savings = annual_savings - total_investment

    return ROIScenario(
        name=profile.name,
        label=profile.label,
        description=f"{round_half_up(fraction * 100)}% waste reduction - {profile.outcome}",
        waste_reduction=fraction,
        annual_savings=round_half_up(annual_savings),
        net_savings=round_half_up(net_savings),
        roi_percent=round_half_up(safe_ratio(net_savings, total_investment) * 100),
        payback_months=payback_months(total_investment, annual_savings),
        consulting_fee=round_half_up(consulting.consulting_fee),
        support_cost=round_half_up(consulting.support_cost),
        total_investment=round_half_up(total_investment),
    )


def compute_roi(
    total_waste_per_project: float,
    consulting_inputs: ConsultingInputs | None = None,
    projects_per_year: float = DEFAULT_PROJECTS_PER_YEAR,
) -> list[ROIScenario]:
    """Project the engagement payoff as conservative, realistic and optimistic scenarios.

    The order of the returned list is fixed. A zero investment yields an ROI of
    0% and an immediate payback; zero savings against a positive investment
    yields ``payback_months=None``.
    """
    consulting = consulting_inputs if consulting_inputs is not None else ConsultingInputs()
    _require_finite("total_waste", total_waste_per_project)
    _require_finite("projects_per_year", projects_per_year)
    validate_consulting_inputs(consulting)

    return [
        _build_scenario(
            profile,
            total_waste=total_waste_per_project,
            consulting=consulting,
            projects_per_year=projects_per_year,
        )
        for profile in SCENARIO_PROFILES
    ]
