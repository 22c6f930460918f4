from __future__ import annotations

import uuid
from enum import Enum
from typing import Annotated, Any

from sqlalchemy import JSON, Enum as SAEnum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.mixins import TimestampMixin

Identifier = Annotated[str, mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))]


class ClientStatus(str, Enum):
    DRAFT = "draft"
    COMPLETED = "completed"
    PENDING = "pending"
    ARCHIVED = "archived"


class ClientRecord(TimestampMixin, Base):
    __tablename__ = "client_records"

    id: Mapped[Identifier]
    owner_id: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    status: Mapped[ClientStatus] = mapped_column(SAEnum(ClientStatus), default=ClientStatus.DRAFT, nullable=False)

    client_info: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)
    cost_inputs: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    consulting_inputs: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    calculations: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    # Copied out of the JSON columns for search and ordering
    client_name: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    company: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    email: Mapped[str] = mapped_column(String(320), default="", nullable=False)
    total_cost: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
