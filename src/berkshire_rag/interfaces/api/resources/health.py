"""Health check endpoints."""

import falcon.asgi

from berkshire_rag.application.services.vector_store import VectorStore


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, vector_store: VectorStore | None = None) -> None:
        self._vector_store = vector_store

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness with index size."""
        records = len(self._vector_store) if self._vector_store is not None else 0
        resp.media = {"status": "ready", "records": records}
        resp.status = falcon.HTTP_200
