import logging

from django.conf import settings
from rest_framework import status
from django.http import JsonResponse
from tracker.utils.jwt_utils import validate_access_token
from tracker.exceptions.auth_exceptions import (
    AuthenticationRequiredException,
    TokenExpiredError,
    TokenInvalidError,
    TokenMissingError,
)
from tracker.exceptions.store_exceptions import StoreUnavailableException
from tracker.constants.messages import AuthErrorMessages, ApiErrors
from tracker.dto.responses.error_response import ApiErrorResponse, ApiErrorDetail, ApiErrorSource
from tracker.services.user_service import UserService

logger = logging.getLogger(__name__)


class JWTAuthenticationMiddleware:
    def __init__(self, get_response) -> None:
        self.get_response = get_response

    def __call__(self, request):
        if self._is_public_path(request.path):
            return self.get_response(request)

        try:
            access_token = self._get_access_token(request)
            payload = validate_access_token(access_token)
            self._set_user_data(request, payload)
        except (TokenMissingError, TokenExpiredError, TokenInvalidError) as e:
            return self._handle_auth_error(e)
        except StoreUnavailableException as e:
            logger.error(f"Could not load profile during authentication: {e}")
            error_response = ApiErrorResponse(
                statusCode=status.HTTP_503_SERVICE_UNAVAILABLE,
                message=e.message,
                errors=[ApiErrorDetail(title=ApiErrors.SERVICE_UNAVAILABLE_TITLE, detail=e.message)],
            )
            return JsonResponse(
                data=error_response.model_dump(mode="json", exclude_none=True),
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        return self.get_response(request)

    def _get_access_token(self, request) -> str:
        """Bearer header first, then the access cookie."""
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            token = auth_header[len("Bearer ") :].strip()
            if token:
                return token

        token = request.COOKIES.get(settings.COOKIE_SETTINGS.get("ACCESS_COOKIE_NAME"))
        if not token:
            raise TokenMissingError()
        return token

    def _set_user_data(self, request, payload):
        user_id = payload["user_id"]
        UserService.ensure_profile(user_id, payload["email"], payload.get("name"))

        request.user_id = user_id
        request.user_email = payload["email"]

    def _is_public_path(self, path: str) -> bool:
        return any(path.startswith(public_path) for public_path in settings.PUBLIC_PATHS)

    def _handle_auth_error(self, exception):
        error_response = ApiErrorResponse(
            statusCode=status.HTTP_401_UNAUTHORIZED,
            message=str(exception),
            errors=[
                ApiErrorDetail(
                    source={ApiErrorSource.HEADER: "Authorization"},
                    title=ApiErrors.AUTHENTICATION_FAILED,
                    detail=str(exception),
                )
            ],
            authenticated=False,
        )
        return JsonResponse(
            data=error_response.model_dump(mode="json", exclude_none=True),
            status=status.HTTP_401_UNAUTHORIZED,
        )


def get_current_user_info(request) -> dict | None:
    if not hasattr(request, "user_id"):
        return None

    return {
        "user_id": request.user_id,
        "email": request.user_email,
    }


def require_user_id(request) -> str:
    user = get_current_user_info(request)
    if not user:
        raise AuthenticationRequiredException()
    return user["user_id"]
