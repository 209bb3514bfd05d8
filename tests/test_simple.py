"""
Simple test cases to verify test configuration.
"""
import json
from httpx import AsyncClient
from starlette.requests import Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy import text
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.exceptions.handler import AccessDeniedError, RecordNotFoundError, global_exception_handler


async def test_app_routes_mounted(client: AsyncClient):
    """OpenAPI schema lists one route per resource family."""
    response = await client.get("/openapi.json")
    paths = response.json()["paths"]
    for path in ("/api/auth/login", "/api/orders", "/api/tasks", "/api/attachments",
                 "/api/settings", "/api/pin/verify", "/api/sections", "/api/users"):
        assert path in paths


async def test_all_tables_created(async_session: AsyncSession):
    """Every store table exists in the test database."""
    result = await async_session.execute(text("SELECT name FROM sqlite_master WHERE type = 'table'"))
    tables = {row[0] for row in result}
    assert {"users", "orders", "notes", "tasks", "task_notes", "attachments", "settings", "sections"} <= tables


async def test_trace_id_header(client: AsyncClient):
    response = await client.get("/openapi.json", headers={"X-Trace-ID": "trace-123"})
    assert response.headers["X-Trace-ID"] == "trace-123"


def _request() -> Request:
    return Request({"type": "http", "method": "GET", "path": "/api/orders", "headers": [], "query_string": b""})


def test_not_found_and_denied_render_envelope():
    missing = global_exception_handler(_request(), RecordNotFoundError("Order"))
    denied = global_exception_handler(_request(), AccessDeniedError())

    assert missing.status_code == 200
    assert json.loads(missing.body) == {"code": 404, "message": "Order not found", "data": None}
    assert json.loads(denied.body)["code"] == 403


def test_integrity_error_renders_conflict():
    exc = IntegrityError("INSERT INTO users", {}, Exception("UNIQUE constraint failed: users.username"))
    response = global_exception_handler(_request(), exc)

    assert json.loads(response.body)["code"] == 409
