# backend/scripts/load_offences.py

import csv
from pathlib import Path

from app.db import get_connection, get_table_columns, init_db, quote_identifier

# Paths
ROOT_DIR = Path(__file__).resolve().parents[1]   # .../backend
DATA_DIR = ROOT_DIR / "data"
AREAS_CSV_PATH = DATA_DIR / "areas.csv"
OFFENCES_CSV_PATH = DATA_DIR / "offences.csv"

# offences columns that hold text rather than counts
TEXT_COLUMNS = {"area", "gender", "age"}


def load_csv(path: Path):
    """Read a CSV file and return (header, list of row dicts)."""
    if not path.exists():
        raise FileNotFoundError(f"{path} not found.")
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        rows = list(reader)
        header = reader.fieldnames or []

    return header, rows


def get_offence_count() -> int:
    """
    Return how many rows exist in the offences table.
    If the DB file is new, init_db() will create tables first.
    """
    init_db()
    conn = get_connection()
    try:
        (count,) = conn.execute("SELECT COUNT(*) FROM offences").fetchone()
    finally:
        conn.close()
    return int(count)


def build_area_rows(areas):
    """
    Convert areas.csv rows into (area, lat, lng) tuples.

    CSV shape:

        area,lat,lng
        Aurukun Shire Council,-13.354875,141.729058
    """
    area_rows = []
    for a in areas:
        name = (a.get("area") or "").strip()
        if not name:
            raise ValueError(f"Area row without a name: {a!r}")
        lat = float(a["lat"]) if a.get("lat") else None
        lng = float(a["lng"]) if a.get("lng") else None
        area_rows.append((name, lat, lng))
    return area_rows


def build_offence_rows(header, offences, table_columns):
    """
    Convert offences.csv rows into tuples ordered like `header`.

    The header must only use columns of the offences table and must include
    `area`. Everything outside TEXT_COLUMNS is converted to int, blanks
    becoming 0 (or NULL for year/month).
    """
    unknown = [name for name in header if name not in table_columns]
    if unknown:
        raise ValueError(f"Unknown offences columns in CSV header: {unknown}")
    if "area" not in header:
        raise ValueError("offences CSV header has no 'area' column")

    offence_rows = []
    for line_no, o in enumerate(offences, start=2):
        row = []
        for name in header:
            value = (o.get(name) or "").strip()
            if name in TEXT_COLUMNS:
                row.append(value or None)
            elif not value:
                row.append(None if name in ("year", "month") else 0)
            else:
                try:
                    row.append(int(value))
                except ValueError:
                    raise ValueError(
                        f"Line {line_no}: {name}={value!r} is not an integer"
                    )
        offence_rows.append(tuple(row))

    return offence_rows


def insert_all(area_rows, header, offence_rows):
    """Insert all rows into the database using executemany."""
    # Make sure tables exist
    init_db()

    columns = ", ".join(quote_identifier(name) for name in header)
    placeholders = ", ".join("?" for _ in header)

    conn = get_connection()
    try:
        cur = conn.cursor()

        # --- areas table ---
        if area_rows:
            cur.executemany(
                "INSERT OR REPLACE INTO areas (area, lat, lng) VALUES (?, ?, ?)",
                area_rows,
            )

        # --- offences table ---
        if offence_rows:
            cur.executemany(
                f"INSERT INTO offences ({columns}) VALUES ({placeholders})",
                offence_rows,
            )

        conn.commit()
    finally:
        conn.close()


def main(areas_path: Path = AREAS_CSV_PATH, offences_path: Path = OFFENCES_CSV_PATH) -> None:
    # 1) Refuse to double-load
    offence_count = get_offence_count()
    print(f"offences table currently has {offence_count} rows.")
    if offence_count > 0:
        print("Database already holds offence data – nothing to load.")
        return

    # 2) Read both files
    _, areas = load_csv(areas_path)
    header, offences = load_csv(offences_path)

    # 3) Build rows and insert
    conn = get_connection()
    try:
        table_columns = get_table_columns(conn, "offences")
    finally:
        conn.close()

    area_rows = build_area_rows(areas)
    offence_rows = build_offence_rows(header, offences, table_columns)

    print(f"Prepared {len(area_rows)} areas rows")
    print(f"Prepared {len(offence_rows)} offences rows")

    insert_all(area_rows, header, offence_rows)
    print("Database load complete.")


if __name__ == "__main__":
    main()
