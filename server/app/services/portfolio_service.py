from __future__ import annotations

from collections import Counter
from typing import Callable, Iterable, Sequence

from app.models.client import ClientStatus
from app.schemas.client import ClientGroup, ClientSummary, GroupBy, PortfolioSummary

ALL_CLIENTS_LABEL = "All Clients"

STATUS_LABELS = {
    ClientStatus.DRAFT: "Draft",
    ClientStatus.COMPLETED: "Completed",
    ClientStatus.PENDING: "Pending",
    ClientStatus.ARCHIVED: "Archived",
}

# Upper bounds (exclusive) in ascending order; anything above falls in the last bucket.
COST_RANGES: tuple[tuple[int, str], ...] = (
    (50_000, "Under $50K"),
    (100_000, "$50K - $100K"),
    (250_000, "$100K - $250K"),
)
NO_COST_LABEL = "No Cost Calculated"
TOP_COST_LABEL = "Over $250K"


def cost_range_label(total_cost: int) -> str:
    if total_cost <= 0:
        return NO_COST_LABEL
    for upper, label in COST_RANGES:
        if total_cost < upper:
            return label
    return TOP_COST_LABEL


def month_label(client: ClientSummary) -> str:
    return client.created_at.strftime("%B %Y")


GROUP_KEYS: dict[GroupBy, Callable[[ClientSummary], str]] = {
    GroupBy.STATUS: lambda client: STATUS_LABELS[client.status],
    GroupBy.MONTH: month_label,
    GroupBy.COST_RANGE: lambda client: cost_range_label(client.total_cost),
}


def group_clients(clients: Sequence[ClientSummary], group_by: GroupBy | None) -> list[ClientGroup]:
    """Bucket clients by label, keeping the incoming order inside and across groups."""
    if group_by is None:
        return [ClientGroup(label=ALL_CLIENTS_LABEL, items=list(clients))]

    key = GROUP_KEYS[group_by]
    buckets: dict[str, list[ClientSummary]] = {}
    for client in clients:
        buckets.setdefault(key(client), []).append(client)
    return [ClientGroup(label=label, items=items) for label, items in buckets.items()]


def status_counts(clients: Iterable[ClientSummary]) -> dict[ClientStatus, int]:
    tally = Counter(client.status for client in clients)
    return {status: tally.get(status, 0) for status in ClientStatus}


def build_portfolio_summary(
    clients: Sequence[ClientSummary],
    group_by: GroupBy | None = None,
) -> PortfolioSummary:
    return PortfolioSummary(
        total_clients=len(clients),
        status_counts=status_counts(clients),
        total_pipeline_cost=sum(client.total_cost for client in clients),
        groups=group_clients(clients, group_by),
    )
