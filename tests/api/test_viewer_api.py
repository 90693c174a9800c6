from fastapi.testclient import TestClient

from api.main import create_app
from api.server import viewer_url

REPORT = b'{"program_id": "11111111111111111111111111111111", "schema_version": 1}'

client = TestClient(create_app(REPORT))


def test_root_serves_report_verbatim():
    response = client.get("/")
    assert response.status_code == 200
    assert response.content == REPORT
    assert response.headers["content-type"] == "application/json"
    assert response.headers["access-control-allow-origin"] == "*"


def test_data_json_serves_same_body():
    response = client.get("/data.json")
    assert response.status_code == 200
    assert response.json()["program_id"] == "11111111111111111111111111111111"


def test_preflight_returns_cors_headers():
    for path in ("/", "/data.json"):
        response = client.options(path)
        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["access-control-allow-methods"] == "GET, OPTIONS"
        assert response.headers["access-control-allow-headers"] == "Content-Type"


def test_body_is_fixed_at_startup():
    body = bytearray(REPORT)
    app_client = TestClient(create_app(bytes(body)))
    body[:1] = b"["
    assert app_client.get("/").content == REPORT


def test_unknown_path_is_not_found():
    assert client.get("/report.json").status_code == 404


def test_viewer_url_appends_port():
    assert viewer_url("http://localhost:3000", 51234) == "http://localhost:3000?port=51234"
    assert viewer_url("https://viewer.example/app?theme=dark", 8) == (
        "https://viewer.example/app?theme=dark&port=8"
    )
