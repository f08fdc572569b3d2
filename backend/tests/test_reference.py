# backend/tests/test_reference.py

from app.db import get_connection


def test_root_is_plain_text(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.text == "Welcome to the Queensland Criminal Records API"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_security_headers_are_set(client):
    resp = client.get("/health")
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "SAMEORIGIN"


def test_offences_lists_labels(client):
    resp = client.get("/offences")
    assert resp.status_code == 200
    offences = resp.json()["offences"]
    assert len(offences) == 18
    assert "Assault" in offences
    assert offences == sorted(offences)


def test_areas(client):
    resp = client.get("/areas")
    assert resp.status_code == 200
    assert resp.json() == {
        "areas": [
            "Aurukun Shire Council",
            "Brisbane City Council",
            "Cairns Regional Council",
        ]
    }


def test_distinct_years_genders_ages(client):
    assert client.get("/years").json() == {"years": [2019, 2020]}
    assert client.get("/genders").json() == {"genders": ["Female", "Male"]}
    assert client.get("/ages").json() == {"ages": ["Adult", "Juvenile"]}


def test_area_detail(client):
    resp = client.get("/area/Brisbane City Council")
    assert resp.status_code == 200
    body = resp.json()
    assert body["area"] == "Brisbane City Council"
    assert body["lat"] == -27.4689682
    assert body["offences"]["Assault"] == 560
    assert body["offences"]["Homicide (Murder)"] == 1
    assert body["offences"]["Arson"] == 6
    assert body["offences"]["Robbery"] == 0


def test_area_detail_unknown(client):
    resp = client.get("/area/Atlantis")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Area not found"}


def test_database_failure_is_reported(client):
    conn = get_connection()
    try:
        conn.execute("DROP TABLE areas")
        conn.commit()
    finally:
        conn.close()

    resp = client.get("/areas")
    assert resp.status_code == 500
    assert resp.json() == {"message": "Database error"}


def test_area_without_council(client):
    resp = client.get("/area/")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Not Found"}


def test_wrong_method(client):
    resp = client.post("/offences")
    assert resp.status_code == 405
    assert resp.json() == {"message": "Method Not Allowed"}
    assert "GET" in resp.headers["allow"]
