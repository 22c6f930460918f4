from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies.auth import get_current_owner
from app.api.dependencies.database import get_db
from app.core.config import get_settings
from app.models.client import ClientStatus
from app.schemas.client import (
    ClientCollection,
    ClientRecordRead,
    ClientRecordWrite,
    ClientSortField,
    ClientStatusUpdate,
    ClientSummary,
    GroupBy,
    PortfolioSummary,
    SortOrder,
)
from app.schemas.report import ChartFeed, ClientReport, WizardStep
from app.services.client_service import (
    ClientFilters,
    count_by_status,
    delete_client,
    list_all_clients,
    list_clients,
    require_client,
    save_client,
    set_client_status,
)
from app.services.portfolio_service import build_portfolio_summary
from app.services.report_service import build_chart_feed, build_report, wizard_progress

router = APIRouter(prefix="/clients", tags=["clients"])


Pagination = Annotated[int, Query(ge=1)]


def _filters(
    search: str | None = Query(default=None, max_length=255),
    status_filter: ClientStatus | None = Query(default=None, alias="status"),
    sort_by: ClientSortField = ClientSortField.UPDATED_AT,
    sort_order: SortOrder = SortOrder.DESC,
) -> ClientFilters:
    return ClientFilters(search=search, status=status_filter, sort_by=sort_by, sort_order=sort_order)


def _analysed(record: ClientRecordRead) -> ClientRecordRead:
    if record.calculations is None or record.cost_inputs is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Client has no cost analysis yet")
    return record


@router.get("", response_model=ClientCollection)
async def list_clients_endpoint(
    page: Pagination = 1,
    page_size: int | None = Query(default=None, ge=1, le=100),
    filters: ClientFilters = Depends(_filters),
    session: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
) -> ClientCollection:
    page_size = page_size or get_settings().default_page_size
    items, total = await list_clients(session, owner_id, filters=filters, page=page, page_size=page_size)
    return ClientCollection(
        items=[ClientSummary.model_validate(item) for item in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.post("", response_model=ClientRecordRead, status_code=status.HTTP_201_CREATED)
async def create_client_endpoint(
    payload: ClientRecordWrite,
    session: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
) -> ClientRecordRead:
    record = await save_client(session, owner_id, payload)
    await session.commit()
    return ClientRecordRead.model_validate(record)


@router.get("/summary", response_model=PortfolioSummary)
async def portfolio_summary_endpoint(
    group_by: GroupBy | None = None,
    filters: ClientFilters = Depends(_filters),
    session: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
) -> PortfolioSummary:
    items = await list_all_clients(session, owner_id, filters)
    return build_portfolio_summary([ClientSummary.model_validate(item) for item in items], group_by)


@router.get("/status-counts", response_model=dict[ClientStatus, int])
async def status_counts_endpoint(
    session: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
) -> dict[ClientStatus, int]:
    return await count_by_status(session, owner_id)


@router.get("/{client_id}", response_model=ClientRecordRead)
async def get_client_endpoint(
    client_id: str,
    session: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
) -> ClientRecordRead:
    return ClientRecordRead.model_validate(await require_client(session, owner_id, client_id))


@router.put("/{client_id}", response_model=ClientRecordRead)
async def save_client_endpoint(
    client_id: str,
    payload: ClientRecordWrite,
    session: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
) -> ClientRecordRead:
    record = await save_client(session, owner_id, payload, client_id=client_id)
    await session.commit()
    return ClientRecordRead.model_validate(record)


@router.patch("/{client_id}/status", response_model=ClientRecordRead)
async def update_status_endpoint(
    client_id: str,
    payload: ClientStatusUpdate,
    session: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
) -> ClientRecordRead:
    record = await require_client(session, owner_id, client_id)
    record = await set_client_status(session, record, payload.status)
    await session.commit()
    return ClientRecordRead.model_validate(record)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client_endpoint(
    client_id: str,
    session: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
) -> Response:
    record = await require_client(session, owner_id, client_id)
    await delete_client(session, record)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{client_id}/progress", response_model=List[WizardStep])
async def progress_endpoint(
    client_id: str,
    session: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
) -> List[WizardStep]:
    record = ClientRecordRead.model_validate(await require_client(session, owner_id, client_id))
    return wizard_progress(record.client_info, record.calculations)


@router.get("/{client_id}/charts", response_model=ChartFeed)
async def charts_endpoint(
    client_id: str,
    session: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
) -> ChartFeed:
    record = _analysed(ClientRecordRead.model_validate(await require_client(session, owner_id, client_id)))
    return build_chart_feed(record.calculations, record.cost_inputs)


@router.get("/{client_id}/report", response_model=ClientReport)
async def report_endpoint(
    client_id: str,
    session: AsyncSession = Depends(get_db),
    owner_id: str = Depends(get_current_owner),
) -> ClientReport:
    record = _analysed(ClientRecordRead.model_validate(await require_client(session, owner_id, client_id)))
    return build_report(record.client_info, record.calculations, record.cost_inputs, record.consulting_inputs)
