# backend/tests/test_load_offences.py

import pytest

from app.db import get_connection
from scripts import load_offences as loader


def write_csvs(tmp_path, offences_header="area,gender,age,year,month,assault"):
    areas = tmp_path / "areas.csv"
    areas.write_text(
        "area,lat,lng\nAurukun Shire Council,-13.35,141.72\nBanana Shire Council,,\n",
        encoding="utf-8",
    )
    offences = tmp_path / "offences.csv"
    offences.write_text(
        f"{offences_header}\n"
        "Aurukun Shire Council,Male,Adult,2019,1,5\n"
        "Banana Shire Council,Female,Adult,2019,,\n",
        encoding="utf-8",
    )
    return areas, offences


def test_load(db_path, tmp_path):
    areas, offences = write_csvs(tmp_path)
    loader.main(areas, offences)

    conn = get_connection()
    try:
        rows = conn.execute(
            "SELECT area, month, assault, arson FROM offences ORDER BY area"
        ).fetchall()
        banana = conn.execute(
            "SELECT lat, lng FROM areas WHERE area = 'Banana Shire Council'"
        ).fetchone()
    finally:
        conn.close()

    assert [tuple(r) for r in rows] == [
        ("Aurukun Shire Council", 1, 5, 0),
        ("Banana Shire Council", None, 0, 0),
    ]
    assert tuple(banana) == (None, None)


def test_load_is_skipped_when_data_present(db_path, tmp_path):
    areas, offences = write_csvs(tmp_path)
    loader.main(areas, offences)
    loader.main(areas, offences)
    assert loader.get_offence_count() == 2


def test_unknown_header_column(db_path, tmp_path):
    areas, offences = write_csvs(tmp_path, "area,gender,age,year,month,jaywalking")
    with pytest.raises(ValueError, match="jaywalking"):
        loader.main(areas, offences)


def test_non_integer_count():
    with pytest.raises(ValueError, match="Line 2"):
        loader.build_offence_rows(
            ["area", "assault"], [{"area": "X", "assault": "many"}], ["area", "assault"]
        )


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        loader.load_csv(tmp_path / "nope.csv")
