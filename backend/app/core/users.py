# backend/app/core/users.py

import logging
import sqlite3

from app.core.security import hash_password

logger = logging.getLogger(__name__)


class UserExistsError(Exception):
    pass


def create_user(conn: sqlite3.Connection, email: str, password: str) -> int:
    """
    Insert a user with a bcrypt-hashed password and return its id.

    Raises:
        UserExistsError: if the email is already registered
    """
    hashed = hash_password(password)
    try:
        cur = conn.execute(
            "INSERT INTO users (email, password) VALUES (?, ?)",
            (email, hashed),
        )
        conn.commit()
    except sqlite3.IntegrityError as e:
        conn.rollback()
        raise UserExistsError(email) from e

    logger.info("Registered user id=%s", cur.lastrowid)
    return cur.lastrowid


def get_user_by_email(conn: sqlite3.Connection, email: str) -> sqlite3.Row | None:
    return conn.execute(
        "SELECT id, email, password FROM users WHERE email = ?",
        (email,),
    ).fetchone()
