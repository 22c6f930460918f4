from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class FrozenModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)


class Timestamped(ORMModel):
    created_at: datetime
    updated_at: datetime
