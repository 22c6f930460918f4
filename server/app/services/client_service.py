from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ClientNotFoundError
from app.core.logging import get_logger
from app.models.client import ClientRecord, ClientStatus
from app.schemas.calculation import CalculationResult
from app.schemas.client import ClientRecordRead, ClientRecordWrite, ClientSortField, SortOrder
from app.services.cost_model import compute_costs
from app.services.wizard_state import derive_status

logger = get_logger(__name__)

SORT_COLUMNS = {
    ClientSortField.NAME: ClientRecord.client_name,
    ClientSortField.COMPANY: ClientRecord.company,
    ClientSortField.TOTAL_COST: ClientRecord.total_cost,
    ClientSortField.CREATED_AT: ClientRecord.created_at,
    ClientSortField.UPDATED_AT: ClientRecord.updated_at,
}


@dataclass(slots=True)
class ClientFilters:
    search: str | None = None
    status: ClientStatus | None = None
    sort_by: ClientSortField = ClientSortField.UPDATED_AT
    sort_order: SortOrder = SortOrder.DESC


def _conditions(owner_id: str, filters: ClientFilters) -> list:
    conditions = [ClientRecord.owner_id == owner_id]
    if filters.search and filters.search.strip():
        term = filters.search.strip().lower()
        conditions.append(
            or_(
                func.lower(ClientRecord.client_name).contains(term, autoescape=True),
                func.lower(ClientRecord.company).contains(term, autoescape=True),
                func.lower(ClientRecord.email).contains(term, autoescape=True),
            )
        )
    if filters.status:
        conditions.append(ClientRecord.status == filters.status)
    return conditions


def _ordering(filters: ClientFilters):
    column = SORT_COLUMNS[filters.sort_by]
    return column.asc() if filters.sort_order == SortOrder.ASC else column.desc()


async def list_clients(
    session: AsyncSession,
    owner_id: str,
    *,
    filters: ClientFilters,
    page: int,
    page_size: int,
) -> tuple[Sequence[ClientRecord], int]:
    conditions = _conditions(owner_id, filters)

    total = await session.scalar(select(func.count()).select_from(ClientRecord).where(and_(*conditions)))
    result = await session.execute(
        select(ClientRecord)
        .where(and_(*conditions))
        .order_by(_ordering(filters), ClientRecord.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    return result.scalars().all(), int(total or 0)


async def list_all_clients(
    session: AsyncSession,
    owner_id: str,
    filters: ClientFilters | None = None,
) -> Sequence[ClientRecord]:
    filters = filters or ClientFilters()
    result = await session.execute(
        select(ClientRecord).where(and_(*_conditions(owner_id, filters))).order_by(_ordering(filters), ClientRecord.id)
    )
    return result.scalars().all()


async def get_client(session: AsyncSession, owner_id: str, client_id: str) -> ClientRecord | None:
    result = await session.execute(
        select(ClientRecord).where(ClientRecord.id == client_id, ClientRecord.owner_id == owner_id)
    )
    return result.scalars().first()


async def require_client(session: AsyncSession, owner_id: str, client_id: str) -> ClientRecord:
    record = await get_client(session, owner_id, client_id)
    if record is None:
        raise ClientNotFoundError(client_id)
    return record


def _apply_payload(record: ClientRecord, payload: ClientRecordWrite, calculations: CalculationResult | None) -> None:
    info = payload.client_info
    record.client_info = info.model_dump(mode="json")
    record.cost_inputs = payload.cost_inputs.model_dump(mode="json") if payload.cost_inputs else None
    record.consulting_inputs = payload.consulting_inputs.model_dump(mode="json") if payload.consulting_inputs else None
    record.calculations = calculations.model_dump(mode="json") if calculations else None

    record.client_name = info.name
    record.company = info.company
    record.email = info.email
    record.total_cost = calculations.total_cost if calculations else 0
    record.status = derive_status(calculations)


async def save_client(
    session: AsyncSession,
    owner_id: str,
    payload: ClientRecordWrite,
    client_id: str | None = None,
) -> ClientRecord:
    """Create or replace a client record.

    An unknown ``client_id`` creates the record under that id. An id owned by
    someone else is reported as missing rather than overwritten.
    """
    calculations = payload.calculations
    if calculations is None and payload.cost_inputs is not None:
        calculations = compute_costs(payload.cost_inputs)

    record = await get_client(session, owner_id, client_id) if client_id else None
    created = record is None
    if record is None:
        if client_id and await session.get(ClientRecord, client_id) is not None:
            raise ClientNotFoundError(client_id)
        record = ClientRecord(owner_id=owner_id)
        if client_id:
            record.id = client_id
        session.add(record)

    _apply_payload(record, payload, calculations)
    await session.flush()
    await session.refresh(record)
    logger.info(
        "client.saved",
        client_id=record.id,
        owner_id=owner_id,
        status=record.status.value,
        total_cost=record.total_cost,
        created=created,
    )
    return record


async def set_client_status(session: AsyncSession, record: ClientRecord, status: ClientStatus) -> ClientRecord:
    previous = record.status
    record.status = status
    await session.flush()
    await session.refresh(record)
    logger.info("client.status_changed", client_id=record.id, previous=previous.value, status=status.value)
    return record


async def delete_client(session: AsyncSession, record: ClientRecord) -> None:
    await session.delete(record)
    await session.flush()
    logger.info("client.deleted", client_id=record.id)


async def count_by_status(session: AsyncSession, owner_id: str) -> dict[ClientStatus, int]:
    result = await session.execute(
        select(ClientRecord.status, func.count())
        .where(ClientRecord.owner_id == owner_id)
        .group_by(ClientRecord.status)
    )
    counts = {status: 0 for status in ClientStatus}
    for status, count in result.all():
        counts[ClientStatus(status)] = int(count)
    return counts


class SqlClientRepository:
    """``ClientRepository`` backed by the client records table; each save commits."""

    def __init__(self, session: AsyncSession, owner_id: str) -> None:
        self.session = session
        self.owner_id = owner_id

    async def save(self, client_id: str, payload: ClientRecordWrite) -> ClientRecordRead:
        record = await save_client(self.session, self.owner_id, payload, client_id=client_id)
        await self.session.commit()
        return ClientRecordRead.model_validate(record)
