import jwt
from datetime import datetime, timedelta, timezone
from django.conf import settings

from tracker.exceptions.auth_exceptions import TokenExpiredError, TokenInvalidError
from tracker.constants.messages import AuthErrorMessages


def generate_access_token(user_data: dict) -> str:
    """
    Sign an access token the way the identity provider does. Used by local tooling and tests.
    """
    try:
        now = datetime.now(timezone.utc)
        expiry = now + timedelta(seconds=settings.JWT_CONFIG.get("ACCESS_TOKEN_LIFETIME"))

        payload = {
            "iss": settings.JWT_CONFIG.get("ISSUER"),
            "exp": int(expiry.timestamp()),
            "iat": int(now.timestamp()),
            "sub": user_data["user_id"],
            "user_id": user_data["user_id"],
            "email": user_data.get("email"),
            "name": user_data.get("name"),
            "token_type": "access",
        }

        token = jwt.encode(
            payload=payload,
            key=settings.JWT_CONFIG.get("PRIVATE_KEY"),
            algorithm=settings.JWT_CONFIG.get("ALGORITHM"),
        )
        return token

    except Exception as e:
        raise TokenInvalidError(f"Token generation failed: {str(e)}")


def validate_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(
            jwt=token,
            key=settings.JWT_CONFIG.get("PUBLIC_KEY"),
            algorithms=[settings.JWT_CONFIG.get("ALGORITHM")],
            issuer=settings.JWT_CONFIG.get("ISSUER"),
        )

        if payload.get("token_type") != "access":
            raise TokenInvalidError(AuthErrorMessages.TOKEN_INVALID)
        if not payload.get("user_id"):
            raise TokenInvalidError(AuthErrorMessages.MISSING_USER_ID)
        if not payload.get("email"):
            raise TokenInvalidError(AuthErrorMessages.MISSING_EMAIL)

        return payload

    except jwt.ExpiredSignatureError:
        raise TokenExpiredError()
    except jwt.InvalidTokenError as e:
        raise TokenInvalidError(f"Invalid token: {str(e)}")
