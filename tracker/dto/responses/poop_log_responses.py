from typing import List
from pydantic import BaseModel

from tracker.constants.messages import AppMessages
from tracker.dto.poop_log_dto import PoopLogDTO


class CreatePoopLogResponse(BaseModel):
    statusCode: int = 201
    successMessage: str = AppMessages.LOG_CREATED
    data: PoopLogDTO


class GetPoopLogsResponse(BaseModel):
    logs: List[PoopLogDTO] = []
    total: int = 0
