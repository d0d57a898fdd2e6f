"""Contexte de log lié à chaque requête."""

import structlog
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api.middleware import _username_from_path, setup_request_logging


def _app():
    app = FastAPI()
    setup_request_logging(app)

    @app.get("/api/v1/users/{username}/settings")
    async def read_context(username: str):
        return structlog.contextvars.get_contextvars()

    @app.get("/health")
    async def health():
        return structlog.contextvars.get_contextvars()

    return app


class TestRequestContext:
    def test_method_path_and_username_are_bound(self):
        client = TestClient(_app())

        body = client.get("/api/v1/users/alice/settings").json()

        assert body == {"method": "GET", "path": "/api/v1/users/alice/settings", "username": "alice"}

    def test_context_does_not_leak_between_requests(self):
        client = TestClient(_app())
        client.get("/api/v1/users/alice/settings")

        body = client.get("/health").json()

        assert body == {"method": "GET", "path": "/health"}

    def test_username_from_path(self):
        assert _username_from_path("/api/v1/users/bob/images") == "bob"
        assert _username_from_path("/api/v1/users") is None
        assert _username_from_path("/api/v1/comments/bob") is None
