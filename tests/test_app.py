from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from library_service import main
from library_service.main import app
from library_service.repositories import BookRepository

client = TestClient(app)


def test_read_root():
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["status"] == "Online"


def test_health_check_reports_database():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "healthy", "database": "connected"}


def test_request_id_is_echoed():
    r = client.get("/authors", headers={"X-Request-Id": "abc-123"})
    assert r.headers["X-Request-Id"] == "abc-123"


def test_request_id_is_generated():
    r = client.get("/authors")
    assert r.headers["X-Request-Id"]


def test_metrics_exposes_request_counter():
    client.get("/books")
    r = client.get("/metrics")
    assert r.status_code == 200
    assert "http_requests_total" in r.text
    assert "http_request_duration_seconds" in r.text


def test_database_error_returns_opaque_500(monkeypatch):
    def boom(self):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(BookRepository, "list_all", boom)

    r = client.get("/books")
    assert r.status_code == 500
    assert r.json() == {"detail": "Database error"}


def test_metrics_use_route_template_not_raw_ids():
    for author_id in (1001, 1002, 1003):
        assert client.get(f"/authors/{author_id}").status_code == 404

    text = client.get("/metrics").text
    series = [
        line for line in text.splitlines()
        if line.startswith("http_requests_total{") and 'method="GET"' in line
        and 'status="404"' in line and "/authors/" in line
    ]
    assert len(series) == 1
    assert 'path="/authors/{author_id}"' in series[0]
    assert "/authors/1001" not in text


def test_metrics_unknown_path_uses_fixed_label():
    assert client.get("/no-such-route/123").status_code == 404

    text = client.get("/metrics").text
    assert "/no-such-route/123" not in text
    assert 'path="<unmatched>"' in text


def test_health_check_reports_non_database_failures(monkeypatch):
    class BrokenEngine:
        def connect(self):
            raise ImportError("No module named 'psycopg2'")

    monkeypatch.setattr(main, "engine", BrokenEngine())

    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "unhealthy", "error": "No module named 'psycopg2'"}
