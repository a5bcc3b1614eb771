"""Search API resource."""

import falcon.asgi

from berkshire_rag.application.services.vector_store import DEFAULT_TOP_K
from berkshire_rag.application.use_cases.search.search_letters import (
    SearchLettersInput,
    SearchLettersUseCase,
)
from berkshire_rag.domain.exceptions import ProviderError, ValidationError


class SearchResource:
    """POST /v1/search - vector search over the letters."""

    def __init__(self, search_letters: SearchLettersUseCase) -> None:
        self._search_letters = search_letters

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Execute search."""
        try:
            body = await req.get_media()
            query = body.get("query", "")
            top_k = body.get("top_k", DEFAULT_TOP_K)
            year = body.get("year")
            filters = body.get("filters")
        except Exception:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid request body"}
            return

        if (
            not isinstance(query, str)
            or not isinstance(top_k, int)
            or isinstance(top_k, bool)
            or (year is not None and (not isinstance(year, int) or isinstance(year, bool)))
            or (filters is not None and not isinstance(filters, dict))
        ):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid request body"}
            return

        try:
            hits = await self._search_letters.execute(
                SearchLettersInput(
                    query=query,
                    top_k=top_k,
                    year=year,
                    filters=filters,
                )
            )
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except ProviderError as e:
            resp.status = falcon.HTTP_502
            resp.media = {"error": str(e)}
            return

        resp.media = {
            "results": [
                {
                    "content": h.chunk.content,
                    "metadata": h.chunk.metadata,
                    "score": round(h.score, 6),
                }
                for h in hits
            ],
        }
        resp.status = falcon.HTTP_200
