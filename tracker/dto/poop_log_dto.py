from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class CreatePoopLogDTO(BaseModel):
    timestamp: Optional[datetime] = None
    is_public: Optional[bool] = None
    groups: List[str] = []


class PoopLogDTO(BaseModel):
    id: str
    user_id: str
    timestamp: datetime
    is_public: bool
    created_at: datetime
    day_key: str
    week_key: str
    month_key: str
    groups: List[str] = []
