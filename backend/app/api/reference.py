# backend/app/api/reference.py

import sqlite3

from fastapi import APIRouter, Depends

from app.core.search import area_totals
from app.db import get_db
from app.errors import ApiError
from app.schemas import AreaResponse

router = APIRouter(tags=["reference"])


def _column(conn: sqlite3.Connection, sql: str) -> list:
    """First column of every row, as a flat list."""
    return [row[0] for row in conn.execute(sql).fetchall()]


@router.get("/offences")
def list_offences(conn: sqlite3.Connection = Depends(get_db)):
    return {"offences": _column(conn, "SELECT pretty FROM offence_columns ORDER BY pretty")}


@router.get("/areas")
def list_areas(conn: sqlite3.Connection = Depends(get_db)):
    return {"areas": _column(conn, "SELECT area FROM areas ORDER BY area")}


@router.get("/years")
def list_years(conn: sqlite3.Connection = Depends(get_db)):
    return {"years": _column(conn, "SELECT DISTINCT year FROM offences ORDER BY year")}


@router.get("/genders")
def list_genders(conn: sqlite3.Connection = Depends(get_db)):
    return {"genders": _column(conn, "SELECT DISTINCT gender FROM offences ORDER BY gender")}


@router.get("/ages")
def list_ages(conn: sqlite3.Connection = Depends(get_db)):
    return {"ages": _column(conn, "SELECT DISTINCT age FROM offences ORDER BY age")}


@router.get("/area/{council}", response_model=AreaResponse)
def get_area(council: str, conn: sqlite3.Connection = Depends(get_db)):
    """Coordinates of one LGA plus its total for every offence."""
    row = conn.execute(
        "SELECT area, lat, lng FROM areas WHERE area = ?", (council,)
    ).fetchone()
    if row is None:
        raise ApiError(404, "Area not found")

    return {
        "area": row["area"],
        "lat": row["lat"],
        "lng": row["lng"],
        "offences": area_totals(conn, row["area"]),
    }
