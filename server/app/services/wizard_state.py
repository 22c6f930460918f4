"""
Client wizard state as an immutable value.

Each wizard step (client info, cost inputs, consulting inputs) produces a new
``WizardState`` through one of the transition functions below; nothing is
mutated in place. Saving goes through an injected ``ClientRepository`` whose
``save`` is an upsert keyed by client id, and ``save_wizard_state`` serializes
saves per client id so two steps saving back to back cannot interleave. The
last write wins.
"""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Protocol
from weakref import WeakValueDictionary

from app.core.logging import get_logger
from app.models.client import ClientStatus
from app.schemas.calculation import (
    CalculationResult,
    ConsultingInputs,
    ConsultingInputsUpdate,
    CostInputs,
    CostInputsUpdate,
)
from app.schemas.client import ClientInfo, ClientRecordRead, ClientRecordWrite
from app.services.cost_model import compute_costs

logger = get_logger(__name__)

DEFAULT_COST_INPUTS = CostInputs(
    project_duration=6,
    team_size=8,
    hourly_rate=85,
    inefficiency_percentage=15,
    meetings_per_week=12,
    meeting_duration=1,
    participants_per_meeting=4,
    communication_overhead=20,
    resource_utilization=75,
    idle_time_percentage=12,
    resource_cost_per_hour=110,
    defect_rate=6,
    rework_cost_multiplier=2.2,
    quality_assurance_hours=160,
    delay_percentage=25,
    penalty_cost_per_day=800,
    opportunity_cost_per_day=1500,
    projects_per_year=4,
)


def new_client_id() -> str:
    return str(uuid.uuid4())


def derive_status(calculations: CalculationResult | None) -> ClientStatus:
    """Completed once a positive total cost has been calculated, draft otherwise."""
    if calculations is not None and calculations.total_cost > 0:
        return ClientStatus.COMPLETED
    return ClientStatus.DRAFT


@dataclass(frozen=True, slots=True)
class WizardState:
    # Generated locally; the backend upserts under the same id.
    client_id: str = field(default_factory=new_client_id)
    client_info: ClientInfo = field(default_factory=ClientInfo)
    cost_inputs: CostInputs = DEFAULT_COST_INPUTS
    consulting_inputs: ConsultingInputs = field(default_factory=ConsultingInputs)
    calculations: CalculationResult | None = None

    @property
    def status(self) -> ClientStatus:
        return derive_status(self.calculations)


def _changes(update: Mapping[str, Any] | CostInputsUpdate | ConsultingInputsUpdate) -> dict[str, Any]:
    if isinstance(update, Mapping):
        return {key: value for key, value in update.items() if value is not None}
    return update.model_dump(exclude_none=True)


def start_new_client(state: WizardState | None = None) -> WizardState:
    """Begin a fresh client; consulting terms carry over from the previous client."""
    if state is None:
        return WizardState()
    return WizardState(consulting_inputs=state.consulting_inputs)


def reset(state: WizardState | None = None) -> WizardState:  # noqa: ARG001
    return WizardState()


def load_client(record: ClientRecordRead) -> WizardState:
    return WizardState(
        client_id=record.id,
        client_info=record.client_info,
        cost_inputs=record.cost_inputs or DEFAULT_COST_INPUTS,
        consulting_inputs=record.consulting_inputs or ConsultingInputs(),
        calculations=record.calculations,
    )


def update_client_info(state: WizardState, changes: Mapping[str, Any]) -> WizardState:
    info = ClientInfo.model_validate({**state.client_info.model_dump(), **dict(changes)})
    return replace(state, client_info=info)


def update_cost_inputs(state: WizardState, update: Mapping[str, Any] | CostInputsUpdate) -> WizardState:
    """Merge new cost inputs and recompute the calculations for them.

    Raises ``InvalidInputError`` and leaves the caller's state untouched when the
    merged inputs cannot be modelled.
    """
    cost_inputs = CostInputs.model_validate({**state.cost_inputs.model_dump(), **_changes(update)})
    return replace(state, cost_inputs=cost_inputs, calculations=compute_costs(cost_inputs))


def update_consulting_inputs(
    state: WizardState,
    update: Mapping[str, Any] | ConsultingInputsUpdate,
) -> WizardState:
    consulting = ConsultingInputs.model_validate({**state.consulting_inputs.model_dump(), **_changes(update)})
    return replace(state, consulting_inputs=consulting)


def update_calculations(state: WizardState, calculations: CalculationResult | None) -> WizardState:
    return replace(state, calculations=calculations)


def to_record_payload(state: WizardState) -> ClientRecordWrite:
    return ClientRecordWrite(
        client_info=state.client_info,
        cost_inputs=state.cost_inputs,
        consulting_inputs=state.consulting_inputs,
        calculations=state.calculations,
    )


class ClientRepository(Protocol):
    async def save(self, client_id: str, payload: ClientRecordWrite) -> ClientRecordRead:
        """Create or replace the record stored under ``client_id``."""
        ...


class SaveSerializer:
    """Hands out one asyncio lock per client id."""

    def __init__(self) -> None:
        self._locks: WeakValueDictionary[str, asyncio.Lock] = WeakValueDictionary()

    def lock_for(self, client_id: str) -> asyncio.Lock:
        lock = self._locks.get(client_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[client_id] = lock
        return lock


_default_serializer = SaveSerializer()


async def save_wizard_state(
    state: WizardState,
    repository: ClientRepository,
    serializer: SaveSerializer | None = None,
) -> ClientRecordRead:
    serializer = serializer or _default_serializer
    async with serializer.lock_for(state.client_id):
        record = await repository.save(state.client_id, to_record_payload(state))
    logger.info("wizard.saved", client_id=record.id, status=record.status.value)
    return record
