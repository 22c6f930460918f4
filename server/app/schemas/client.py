from datetime import datetime
from enum import Enum
from typing import List

from pydantic import Field

from app.models.client import ClientStatus
from app.schemas.calculation import CalculationResult, ConsultingInputs, CostInputs
from app.schemas.common import ORMModel, Timestamped


class ClientSortField(str, Enum):
    NAME = "name"
    COMPANY = "company"
    TOTAL_COST = "total_cost"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class GroupBy(str, Enum):
    STATUS = "status"
    MONTH = "month"
    COST_RANGE = "cost_range"


class ClientInfo(ORMModel):
    name: str = Field(default="", max_length=255)
    company: str = Field(default="", max_length=255)
    email: str = Field(default="", max_length=320)
    phone: str = Field(default="", max_length=64)
    title: str = Field(default="", max_length=255)
    problem_statement: str = ""

    @property
    def is_captured(self) -> bool:
        return bool(self.name.strip() and self.company.strip())


class ClientRecordWrite(ORMModel):
    client_info: ClientInfo = Field(default_factory=ClientInfo)
    cost_inputs: CostInputs | None = None
    consulting_inputs: ConsultingInputs | None = None
    calculations: CalculationResult | None = None


class ClientStatusUpdate(ORMModel):
    status: ClientStatus


class ClientSummary(ORMModel):
    id: str
    client_name: str
    company: str
    email: str
    status: ClientStatus
    total_cost: int
    created_at: datetime
    updated_at: datetime


class ClientRecordRead(Timestamped):
    id: str
    owner_id: str
    status: ClientStatus
    client_info: ClientInfo
    cost_inputs: CostInputs | None = None
    consulting_inputs: ConsultingInputs | None = None
    calculations: CalculationResult | None = None


class ClientCollection(ORMModel):
    items: List[ClientSummary]
    total: int
    page: int
    page_size: int


class ClientGroup(ORMModel):
    label: str
    items: List[ClientSummary]


class PortfolioSummary(ORMModel):
    total_clients: int
    status_counts: dict[ClientStatus, int]
    total_pipeline_cost: int
    groups: List[ClientGroup]
