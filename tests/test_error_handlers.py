from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from gridtable.errors import (
    FilterError,
    TableConfigurationError,
    TableNotFoundError,
    register_error_handlers,
)


def _build_app() -> FastAPI:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/filter")
    def bad_filter():
        raise FilterError("Invalid case for TextFilter.")

    @app.get("/missing")
    def missing_table():
        raise TableNotFoundError("Unregistered table key: x")

    @app.get("/misconfigured")
    def misconfigured():
        raise TableConfigurationError("Attribute 'x' is not present on model Contact")

    @app.get("/forbidden")
    def forbidden():
        raise HTTPException(status_code=403, detail="Forbidden api")

    @app.get("/crash")
    def crash():
        raise RuntimeError("boom")

    return app


def test_filter_error_maps_to_400() -> None:
    resp = TestClient(_build_app()).get("/filter")

    assert resp.status_code == 400
    assert resp.json() == {
        "code": "invalid_filter",
        "message": "Invalid case for TextFilter.",
        "details": None,
        "request_id": "unknown",
    }


def test_table_not_found_maps_to_404() -> None:
    resp = TestClient(_build_app()).get("/missing")

    assert resp.status_code == 404
    assert resp.json()["code"] == "table_not_found"


def test_table_configuration_error_maps_to_500() -> None:
    resp = TestClient(_build_app()).get("/misconfigured")

    assert resp.status_code == 500
    assert resp.json()["code"] == "table_configuration_error"


def test_http_exception_returns_json() -> None:
    resp = TestClient(_build_app()).get("/forbidden")

    assert resp.status_code == 403
    assert resp.json()["code"] == "http_403"
    assert resp.json()["message"] == "Forbidden api"


def test_unhandled_exception_is_logged_and_hidden(caplog) -> None:
    client = TestClient(_build_app(), raise_server_exceptions=False)

    resp = client.get("/crash")

    assert resp.status_code == 500
    assert resp.json()["code"] == "internal_error"
    assert "Unhandled exception on GET /crash" in caplog.text
