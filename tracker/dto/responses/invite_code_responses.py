from pydantic import BaseModel, Field

from tracker.constants.messages import AppMessages
from tracker.dto.invite_code_dto import InviteCodeDTO


class GenerateInviteCodeResponse(BaseModel):
    """Response model for invite code rotation.

    Attributes:
        data: The new active invite code
        successMessage: Confirmation that the previous code was superseded
    """

    statusCode: int = 201
    successMessage: str = Field(
        default=AppMessages.INVITE_CODE_GENERATED, description="Success message confirming code generation"
    )
    data: InviteCodeDTO
