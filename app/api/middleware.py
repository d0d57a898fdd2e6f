"""
➡️ But : contexte de log par requête.

Chaque ligne de log émise pendant une requête (étapes de cascade, uploads,
propagation) porte la méthode, le chemin et, pour les routes /users/{username},
le username concerné.
"""

import time

from fastapi import FastAPI, Request

from app.core.logging import clear_log_context, get_logger, log_context

logger = get_logger(__name__)


def _username_from_path(path: str):
    # /api/v1/users/{username}/...
    parts = path.strip("/").split("/")
    if "users" in parts:
        i = parts.index("users")
        if i + 1 < len(parts):
            return parts[i + 1]
    return None


def setup_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        clear_log_context()
        context = {"method": request.method, "path": request.url.path}
        username = _username_from_path(request.url.path)
        if username:
            context["username"] = username
        log_context(**context)

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 1)
        logger.info("api.request", status_code=response.status_code, duration_ms=duration_ms)
        return response
