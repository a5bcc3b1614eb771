"""Falcon ASGI application."""

import logging

import falcon
import falcon.asgi
from falcon.asgi import App

from berkshire_rag.interfaces.api.resources.health import HealthResource
from berkshire_rag.interfaces.api.resources.query import QueryResource
from berkshire_rag.interfaces.api.resources.search import SearchResource

logger = logging.getLogger(__name__)


async def _log_exception(req, resp, ex, params):
    logger.error("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    query_resource: QueryResource,
    search_resource: SearchResource,
    health_resource: HealthResource,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App()
    app.add_error_handler(Exception, _log_exception)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/query", query_resource)
    app.add_route("/v1/search", search_resource)
    return app
