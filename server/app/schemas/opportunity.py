from enum import Enum

from app.schemas.calculation import WasteCategory
from app.schemas.common import FrozenModel


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Opportunity(FrozenModel):
    waste_category: WasteCategory
    category: str
    current_waste: int
    impact_percentage: int
    potential_savings: int
    solution: str
    time_to_implement: str
    priority: Priority
