# backend/app/api/auth.py

import json
import logging
import sqlite3
from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from app.config import settings
from app.core.security import create_access_token, verify_password
from app.core.users import UserExistsError, create_user, get_user_by_email
from app.db import get_db
from app.errors import ApiError
from app.schemas import Credentials, MessageResponse, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


async def read_credentials(request: Request) -> Optional[Credentials]:
    """
    Body of /register and /login, sent either as JSON or as a urlencoded form.
    An empty body gives None.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPE):
        form = await request.form()
        return Credentials(email=form.get("email"), password=form.get("password"))

    raw = await request.body()
    if not raw:
        return None
    try:
        return Credentials.model_validate(json.loads(raw))
    except (ValueError, ValidationError) as e:
        logger.debug("Rejected credentials body on %s: %s", request.url.path, e)
        raise ApiError(400, "Invalid request") from e


def _require_credentials(body: Optional[Credentials]) -> tuple[str, str]:
    if body is None or not body.email or not body.password:
        raise ApiError(400, "Invalid email or password")
    return body.email, body.password


@router.post("/register", status_code=201, response_model=MessageResponse)
def register(
    body: Optional[Credentials] = Depends(read_credentials),
    conn: sqlite3.Connection = Depends(get_db),
):
    email, password = _require_credentials(body)

    try:
        create_user(conn, email, password)
    except UserExistsError:
        raise ApiError(400, "User already exists")

    return {"message": "You successfully registered"}


@router.post("/login", status_code=201, response_model=TokenResponse)
def login(
    body: Optional[Credentials] = Depends(read_credentials),
    conn: sqlite3.Connection = Depends(get_db),
):
    email, password = _require_credentials(body)

    user = get_user_by_email(conn, email)
    if user is None:
        raise ApiError(400, "Wrong email or password")
    if not verify_password(password, user["password"]):
        logger.info("Failed login for user id=%s", user["id"])
        raise ApiError(400, "Invalid password")

    token = create_access_token(email)
    return {
        "token": token,
        "access_token": token,
        "token_type": "Bearer",
        "expires_in": settings.JWT_EXPIRES_IN,
    }
