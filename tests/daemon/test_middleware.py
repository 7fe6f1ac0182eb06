"""Tests for daemon/middleware.py module."""

from __future__ import annotations

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from idegateway.core.logging import get_request_id
from idegateway.daemon.middleware import REQUEST_ID_HEADER, RequestIdMiddleware


def _make_client() -> TestClient:
    async def echo(request: Request) -> JSONResponse:
        _ = request
        return JSONResponse({"request_id": get_request_id()})

    app = Starlette(routes=[Route("/echo", echo)])
    app.add_middleware(RequestIdMiddleware)
    return TestClient(app)


class TestRequestIdMiddleware:
    """Tests for RequestIdMiddleware."""

    def test_header_name(self) -> None:
        assert REQUEST_ID_HEADER == "X-Request-ID"

    def test_given_header_when_request_then_id_propagated(self) -> None:
        # When
        response = _make_client().get("/echo", headers={REQUEST_ID_HEADER: "abc123"})

        # Then
        assert response.json() == {"request_id": "abc123"}
        assert response.headers[REQUEST_ID_HEADER] == "abc123"

    def test_given_no_header_when_request_then_id_generated(self) -> None:
        response = _make_client().get("/echo")

        rid = response.headers[REQUEST_ID_HEADER]
        assert len(rid) == 12
        assert response.json() == {"request_id": rid}
