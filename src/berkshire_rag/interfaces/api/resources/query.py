"""Agent query API resource."""

import logging

import falcon.asgi

from berkshire_rag.application.use_cases.question.answer_question import AnswerQuestionUseCase
from berkshire_rag.domain.exceptions import ProviderError, ValidationError

logger = logging.getLogger(__name__)


class QueryResource:
    """GET /v1/query?q=...&threadId=... - answer a question from the letters."""

    def __init__(self, answer_question: AnswerQuestionUseCase) -> None:
        self._answer_question = answer_question

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Answer question q."""
        question = (req.get_param("q") or "").strip()
        thread_id = req.get_param("threadId") or "default-thread"
        if not question:
            resp.status = falcon.HTTP_400
            resp.media = {"error": 'Missing query parameter "q"'}
            return

        try:
            year = req.get_param_as_int("year")
        except falcon.HTTPBadRequest:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid year"}
            return

        logger.info("Agent query received: %r (thread %s)", question, thread_id)
        try:
            answer = await self._answer_question.execute(question, year=year)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except ProviderError as e:
            logger.error("Agent error: %s", e)
            resp.status = falcon.HTTP_500
            resp.media = {"error": str(e)}
            return

        resp.media = {
            "query": question,
            "threadId": thread_id,
            "answer": answer.text,
            "sources": [
                {"content": s.content, "metadata": s.metadata} for s in answer.sources
            ],
        }
        resp.status = falcon.HTTP_200
