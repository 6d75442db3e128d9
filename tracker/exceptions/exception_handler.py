import logging
from typing import Callable, List, NamedTuple, Optional, Tuple, Type
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework import status
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.utils.serializer_helpers import ReturnDict
from django.conf import settings

from tracker.dto.responses.error_response import ApiErrorDetail, ApiErrorResponse, ApiErrorSource
from tracker.constants.messages import ApiErrors, AuthErrorMessages
from tracker.exceptions.auth_exceptions import (
    AuthenticationRequiredException,
    TokenExpiredError,
    TokenInvalidError,
    TokenMissingError,
)
from tracker.exceptions.group_exceptions import (
    AlreadyMemberException,
    CreatorCannotLeaveException,
    GroupAtCapacityException,
    GroupNotFoundException,
    InvalidInviteCodeException,
    InviteCodeExhaustedException,
    InviteCodeExpiredException,
    InviteCodeInactiveException,
    NotAuthorizedException,
    NotGroupMemberException,
)
from tracker.exceptions.store_exceptions import (
    ConcurrentUpdateException,
    InviteCodeGenerationException,
    StoreUnavailableException,
)
from tracker.exceptions.user_exceptions import UserNotFoundException

logger = logging.getLogger(__name__)


def format_validation_errors(errors) -> List[ApiErrorDetail]:
    formatted_errors = []
    if isinstance(errors, ReturnDict | dict):
        for field, messages in errors.items():
            details = messages if isinstance(messages, list) else [messages]
            for message_detail in details:
                if isinstance(message_detail, dict):
                    nested_errors = format_validation_errors(message_detail)
                    formatted_errors.extend(nested_errors)
                else:
                    formatted_errors.append(
                        ApiErrorDetail(detail=str(message_detail), source={ApiErrorSource.PARAMETER: field})
                    )
    elif isinstance(errors, list):
        for message_detail in errors:
            formatted_errors.append(ApiErrorDetail(detail=str(message_detail)))
    return formatted_errors


def _path_source(context, name: str):
    if context.get("kwargs", {}).get(name):
        return {ApiErrorSource.PATH: name}
    return None


def _authorization_header(context):
    return {ApiErrorSource.HEADER: "Authorization"}


def _group_path(context):
    return _path_source(context, "group_id")


def _invite_code_input(context):
    return _path_source(context, "code") or {ApiErrorSource.PARAMETER: "invite_code"}


class ErrorMapping(NamedTuple):
    exception_types: Tuple[Type[Exception], ...]
    status_code: int
    title: str
    source: Optional[Callable[[dict], Optional[dict]]] = None


# First match wins, so subclasses must come before their bases.
DOMAIN_ERROR_MAPPINGS = [
    ErrorMapping(
        (TokenExpiredError,),
        status.HTTP_401_UNAUTHORIZED,
        AuthErrorMessages.TOKEN_EXPIRED_TITLE,
        _authorization_header,
    ),
    ErrorMapping(
        (TokenMissingError, AuthenticationRequiredException),
        status.HTTP_401_UNAUTHORIZED,
        AuthErrorMessages.AUTHENTICATION_REQUIRED,
        _authorization_header,
    ),
    ErrorMapping(
        (TokenInvalidError,),
        status.HTTP_401_UNAUTHORIZED,
        AuthErrorMessages.INVALID_TOKEN_TITLE,
        _authorization_header,
    ),
    ErrorMapping(
        (NotAuthorizedException, NotGroupMemberException),
        status.HTTP_403_FORBIDDEN,
        ApiErrors.FORBIDDEN_TITLE,
        _group_path,
    ),
    ErrorMapping(
        (InvalidInviteCodeException,),
        status.HTTP_404_NOT_FOUND,
        ApiErrors.RESOURCE_NOT_FOUND_TITLE,
        _invite_code_input,
    ),
    ErrorMapping(
        (InviteCodeInactiveException, InviteCodeExpiredException, InviteCodeExhaustedException),
        status.HTTP_400_BAD_REQUEST,
        ApiErrors.VALIDATION_ERROR,
        _invite_code_input,
    ),
    ErrorMapping((GroupNotFoundException,), status.HTTP_404_NOT_FOUND, ApiErrors.RESOURCE_NOT_FOUND_TITLE, _group_path),
    ErrorMapping((UserNotFoundException,), status.HTTP_404_NOT_FOUND, ApiErrors.RESOURCE_NOT_FOUND_TITLE),
    ErrorMapping(
        (AlreadyMemberException, GroupAtCapacityException, ConcurrentUpdateException),
        status.HTTP_409_CONFLICT,
        ApiErrors.CONFLICT_TITLE,
    ),
    ErrorMapping((CreatorCannotLeaveException,), status.HTTP_400_BAD_REQUEST, ApiErrors.VALIDATION_ERROR, _group_path),
    ErrorMapping(
        (StoreUnavailableException,),
        status.HTTP_503_SERVICE_UNAVAILABLE,
        ApiErrors.SERVICE_UNAVAILABLE_TITLE,
    ),
    ErrorMapping((InviteCodeGenerationException,), status.HTTP_500_INTERNAL_SERVER_ERROR, ApiErrors.SERVER_ERROR),
]


def _find_mapping(exc) -> Optional[ErrorMapping]:
    for mapping in DOMAIN_ERROR_MAPPINGS:
        if isinstance(exc, mapping.exception_types):
            return mapping
    return None


def _fallback_errors(exc, response, context) -> Tuple[int, List[ApiErrorDetail]]:
    if response is None:
        logger.exception(f"Unhandled exception in {context.get('view').__class__.__name__}: {exc}")
        detail = str(exc) if settings.DEBUG else ApiErrors.INTERNAL_SERVER_ERROR
        return status.HTTP_500_INTERNAL_SERVER_ERROR, [ApiErrorDetail(detail=detail, title=ApiErrors.UNEXPECTED_ERROR)]

    if isinstance(response.data, dict) and "detail" in response.data:
        detail = str(response.data["detail"])
        return response.status_code, [ApiErrorDetail(detail=detail, title=detail)]
    if isinstance(response.data, list):
        return response.status_code, [ApiErrorDetail(detail=str(item), title=str(exc)) for item in response.data]

    detail = str(response.data) if settings.DEBUG else ApiErrors.INTERNAL_SERVER_ERROR
    return response.status_code, [ApiErrorDetail(detail=detail, title=str(exc))]


def handle_exception(exc, context):
    mapping = _find_mapping(exc)

    if mapping is not None:
        status_code = mapping.status_code
        source = mapping.source(context) if mapping.source else None
        error_list = [ApiErrorDetail(source=source, title=mapping.title, detail=str(exc))]
    elif isinstance(exc, DRFValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
        error_list = format_validation_errors(exc.detail)
        if not error_list and exc.detail:
            error_list.append(ApiErrorDetail(detail=str(exc.detail), title=ApiErrors.VALIDATION_ERROR))
    else:
        status_code, error_list = _fallback_errors(exc, drf_exception_handler(exc, context), context)

    final_response_data = ApiErrorResponse(
        statusCode=status_code,
        message=error_list[0].detail if error_list else str(exc),
        errors=error_list,
    )
    return Response(data=final_response_data.model_dump(mode="json", exclude_none=True), status=status_code)
