# backend/app/core/search.py

"""
Builds the per-area aggregation behind GET /search.

The offence label is resolved through offence_columns, then summed over
offences grouped by area. Any other request parameter filters offences on
the column of the same name:

    /search?offence=Arson&year=2019&gender=Female,Male

becomes

    SELECT areas.area AS LGA, areas.lat AS lat, areas.lng AS lng,
           COALESCE(SUM(offences."arson"), 0) AS total
    FROM areas LEFT JOIN offences ON offences.area = areas.area
    WHERE offences."year" = ? AND offences."gender" IN (?, ?)
    GROUP BY areas.area ORDER BY areas.area

Column names are only interpolated after being matched against the live
offences table. Values are always bound.
"""

import sqlite3
from dataclasses import dataclass, field
from typing import Any, Iterable

from app.db import get_table_columns, quote_identifier


class SearchQueryError(Exception):
    """The request cannot be turned into a valid aggregation."""


@dataclass
class SearchQuery:
    sql: str
    params: list[Any] = field(default_factory=list)


def resolve_offence_column(conn: sqlite3.Connection, label: str) -> str:
    """Map a human-readable offence label to its offences column."""
    row = conn.execute(
        'SELECT "column" FROM offence_columns WHERE pretty = ?',
        (label,),
    ).fetchone()
    if row is None:
        raise SearchQueryError(f"unknown offence: {label!r}")
    return row["column"]


def split_values(raw_values: Iterable[str]) -> list[str]:
    """Flatten repeated and comma-separated parameter values, dropping blanks."""
    values = []
    for raw in raw_values:
        for part in raw.split(","):
            part = part.strip()
            if part:
                values.append(part)
    return values


def build_search_query(
    offence_column: str,
    filters: dict[str, list[str]],
    table_columns: Iterable[str],
) -> SearchQuery:
    """
    Compose the SUM-by-area statement.

    Args:
        offence_column: offences column to sum
        filters: column name -> accepted values (one value means equality)
        table_columns: columns of the offences table

    Raises:
        SearchQueryError: if the offence or a filter names an unknown column,
            or a filter has no values
    """
    known = set(table_columns)
    if offence_column not in known:
        raise SearchQueryError(f"unknown offence column: {offence_column!r}")

    total = f"COALESCE(SUM(offences.{quote_identifier(offence_column)}), 0)"
    sql = (
        "SELECT areas.area AS LGA, areas.lat AS lat, areas.lng AS lng, "
        f"{total} AS total "
        "FROM areas LEFT JOIN offences ON offences.area = areas.area"
    )

    clauses = []
    params: list[Any] = []
    for name, values in filters.items():
        if name not in known:
            raise SearchQueryError(f"unknown filter: {name!r}")
        if not values:
            raise SearchQueryError(f"empty filter: {name!r}")

        column = f"offences.{quote_identifier(name)}"
        if len(values) == 1:
            clauses.append(f"{column} = ?")
        else:
            placeholders = ", ".join("?" for _ in values)
            clauses.append(f"{column} IN ({placeholders})")
        params.extend(values)

    if clauses:
        sql += " WHERE " + " AND ".join(clauses)
    sql += " GROUP BY areas.area ORDER BY areas.area"

    return SearchQuery(sql=sql, params=params)


def search_offence(
    conn: sqlite3.Connection, label: str, filters: dict[str, list[str]]
) -> list[dict[str, Any]]:
    """Run the aggregation for `label` and return one dict per area."""
    offence_column = resolve_offence_column(conn, label)
    query = build_search_query(
        offence_column, filters, get_table_columns(conn, "offences")
    )
    rows = conn.execute(query.sql, query.params).fetchall()
    return [
        {"LGA": row["LGA"], "total": row["total"], "lat": row["lat"], "lng": row["lng"]}
        for row in rows
    ]


def area_totals(conn: sqlite3.Connection, area: str) -> dict[str, int]:
    """Total of every labelled offence for one area, keyed by label."""
    known = set(get_table_columns(conn, "offences"))
    labels = conn.execute(
        'SELECT pretty, "column" FROM offence_columns ORDER BY pretty'
    ).fetchall()
    labels = [row for row in labels if row["column"] in known]
    if not labels:
        return {}

    sums = ", ".join(
        f"COALESCE(SUM({quote_identifier(row['column'])}), 0)" for row in labels
    )
    totals = conn.execute(
        f"SELECT {sums} FROM offences WHERE area = ?", (area,)
    ).fetchone()
    return {row["pretty"]: totals[i] for i, row in enumerate(labels)}
