# backend/app/api/deps.py

import logging

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.security import decode_access_token
from app.errors import ApiError

logger = logging.getLogger(__name__)

# auto_error=False so a missing header gets our 401 body instead of FastAPI's
bearer_scheme = HTTPBearer(auto_error=False)


def require_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict:
    """Reject the request unless it carries a valid bearer token; return its claims."""
    if credentials is None or not credentials.credentials:
        raise ApiError(401, "your authorization token is missing")

    try:
        return decode_access_token(credentials.credentials)
    except jwt.InvalidTokenError as e:
        logger.info("Rejected bearer token: %s", e)
        raise ApiError(401, "your token is not authorized") from e
