"""Static bearer-token authentication."""
import logging
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.config import Settings, get_settings

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)

UNAUTHORIZED_MESSAGE = "Unauthorized request"


def is_valid_token(token: str, expected: str) -> bool:
    """Compare a presented token with the configured secret in constant time."""
    if not expected:
        return False
    return secrets.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))


async def require_api_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Dependency that rejects requests without the configured bearer token.

    In DEV_MODE, the check is skipped entirely.

    Raises:
        HTTPException: 401 if the token is missing or does not match API_TOKEN.
    """
    if settings.dev_mode:
        return

    if credentials is None or not is_valid_token(credentials.credentials, settings.api_token):
        logger.warning("Unauthorized request")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": {"message": UNAUTHORIZED_MESSAGE}},
            headers={"WWW-Authenticate": "Bearer"},
        )
