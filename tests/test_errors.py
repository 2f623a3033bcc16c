"""Tests for the {"error": ...} exception handlers."""
import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel
from sqlalchemy.exc import OperationalError

from wodtracker.core.constants import BUSY_MESSAGE
from wodtracker.core.errors import register_exception_handlers


class Payload(BaseModel):
    name: str


@pytest.fixture
def error_client():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/busy")
    async def busy():
        raise OperationalError("SELECT 1", {}, Exception("sorry, too many clients already"))

    @app.get("/broken")
    async def broken():
        raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

    @app.get("/missing")
    async def missing():
        raise HTTPException(status_code=404, detail="Thing not found")

    @app.post("/validate")
    async def validate(payload: Payload):
        return payload

    return TestClient(app)


def test_connection_exhaustion_is_503(error_client):
    resp = error_client.get("/busy")
    assert resp.status_code == 503
    assert resp.json() == {"error": BUSY_MESSAGE}


def test_other_database_errors_are_500_with_message(error_client):
    resp = error_client.get("/broken")
    assert resp.status_code == 500
    assert resp.json() == {"error": "disk I/O error"}


def test_http_exception_detail_becomes_error(error_client):
    resp = error_client.get("/missing")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Thing not found"}


def test_unknown_route_is_404(error_client):
    resp = error_client.get("/nope")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_validation_error_is_400(error_client):
    resp = error_client.post("/validate", json={})
    assert resp.status_code == 400
    assert resp.json() == {"error": "name: Field required"}
