"""HTTP API handlers."""

import json
import logging
from typing import Any
from uuid import UUID

from aiohttp import web

from memopad.application.services import MemoQueryView, MemoStore
from memopad.application.use_cases import SuggestTagsUseCase, SummarizeMemoUseCase
from memopad.domain.entities import Memo, MemoCategory, MemoForm, MemoStats
from memopad.domain.exceptions import (
    MemopadError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _error_response(status: int, message: str) -> web.Response:
    return web.json_response({"error": message}, status=status)


@web.middleware
async def error_middleware(
    request: web.Request,
    handler: Any,
) -> web.StreamResponse:
    """Map domain exceptions to JSON error responses.

    ValidationError -> 400, NotFoundError -> 404, other MemopadError -> 500.
    aiohttp HTTP exceptions (unknown route etc.) pass through; anything
    else becomes a JSON 500.
    """
    try:
        return await handler(request)
    except ValidationError as e:
        logger.info("Rejected %s %s: %s", request.method, request.path, e)
        return _error_response(400, str(e))
    except NotFoundError as e:
        return _error_response(404, str(e))
    except MemopadError as e:
        logger.error("Request %s %s failed: %s", request.method, request.path, e)
        return _error_response(500, str(e))
    except web.HTTPException:
        raise
    except Exception:
        logger.exception("Unexpected error in %s %s", request.method, request.path)
        return _error_response(500, "Internal server error")


def serialize_memo(memo: Memo) -> dict[str, Any]:
    """Memo を JSON 用の dict に変換する"""
    return {
        "id": str(memo.id),
        "title": memo.title,
        "content": memo.content,
        "category": memo.category.value,
        "tags": list(memo.tags),
        "createdAt": memo.created_at.isoformat(),
        "updatedAt": memo.updated_at.isoformat(),
    }


def serialize_stats(stats: MemoStats) -> dict[str, Any]:
    """MemoStats を JSON 用の dict に変換する"""
    return {
        "total": stats.total,
        "byCategory": {
            category.value: count for category, count in stats.by_category.items()
        },
        "filtered": stats.filtered,
    }


async def _read_json(request: web.Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError("Request body must be valid JSON") from e
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def _require_str(body: dict[str, Any], field: str, message: str) -> str:
    value = body.get(field)
    if not value or not isinstance(value, str):
        raise ValidationError(message)
    return value


def _optional_str(body: dict[str, Any], field: str) -> str | None:
    value = body.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"'{field}' must be a string")
    return value


def _parse_memo_id(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as e:
        raise ValidationError(f"Invalid memo id: {value}") from e


def _parse_form(body: dict[str, Any]) -> MemoForm:
    """リクエストボディから MemoForm を生成する

    Raises:
        ValidationError: 必須項目の欠落や型の不一致
    """
    title = _require_str(body, "title", "Memo title is required")
    content = _require_str(body, "content", "Memo content is required")
    category = _optional_str(body, "category")
    tags = body.get("tags") or []
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        raise ValidationError("'tags' must be a list of strings")

    form = MemoForm(
        title=title,
        content=content,
        category=MemoCategory.parse(category),
        tags=tags,
    )
    form.validate()
    return form


def register_routes(
    app: web.Application,
    store: MemoStore,
    query_view: MemoQueryView,
    summarize_use_case: SummarizeMemoUseCase,
    suggest_tags_use_case: SuggestTagsUseCase,
) -> None:
    """Register memo API routes.

    Args:
        app: aiohttp application.
        store: Memo store owning the in-memory collection.
        query_view: Filtered view over the store.
        summarize_use_case: Use case for memo summaries.
        suggest_tags_use_case: Use case for tag suggestions.
    """

    async def handle_summarize(request: web.Request) -> web.Response:
        """POST /api/summarize"""
        body = await _read_json(request)
        content = _require_str(body, "content", "Memo content is required")
        memo_id = _parse_memo_id(_require_str(body, "memoId", "Memo ID is required"))
        title = _optional_str(body, "title")

        summary = await summarize_use_case.execute(memo_id, content, title)
        return web.json_response({"summary": summary})

    async def handle_suggest_tags(request: web.Request) -> web.Response:
        """POST /api/tags/suggest"""
        body = await _read_json(request)
        content = _require_str(body, "content", "Memo content is required")
        title = _optional_str(body, "title")

        tags = await suggest_tags_use_case.execute(content, title)
        return web.json_response({"tags": tags})

    async def handle_list_memos(request: web.Request) -> web.Response:
        """GET /api/memos?q=&category=

        Filters persist between requests; only the parameters present in
        the query string change them.
        """
        if "category" in request.query:
            query_view.filter_by_category(request.query["category"])
        if "q" in request.query:
            query_view.search(request.query["q"])

        selected = query_view.selected_category
        return web.json_response(
            {
                "memos": [serialize_memo(memo) for memo in query_view.memos],
                "stats": serialize_stats(query_view.stats),
                "query": {
                    "q": query_view.search_query,
                    "category": (
                        selected.value
                        if isinstance(selected, MemoCategory)
                        else selected
                    ),
                },
                "error": store.error,
            }
        )

    async def handle_create_memo(request: web.Request) -> web.Response:
        """POST /api/memos"""
        form = _parse_form(await _read_json(request))
        memo = await store.create(form)
        return web.json_response({"memo": serialize_memo(memo)}, status=201)

    async def handle_get_memo(request: web.Request) -> web.Response:
        """GET /api/memos/{memo_id}"""
        memo_id = _parse_memo_id(request.match_info["memo_id"])
        memo = await store.fetch(memo_id)
        if memo is None:
            raise NotFoundError(memo_id)
        return web.json_response({"memo": serialize_memo(memo)})

    async def handle_update_memo(request: web.Request) -> web.Response:
        """PUT /api/memos/{memo_id}"""
        memo_id = _parse_memo_id(request.match_info["memo_id"])
        form = _parse_form(await _read_json(request))
        memo = await store.update(memo_id, form)
        return web.json_response({"memo": serialize_memo(memo)})

    async def handle_delete_memo(request: web.Request) -> web.Response:
        """DELETE /api/memos/{memo_id}"""
        memo_id = _parse_memo_id(request.match_info["memo_id"])
        await store.delete(memo_id)
        return web.Response(status=204)

    async def handle_clear_memos(request: web.Request) -> web.Response:
        """DELETE /api/memos

        Filters are reset only when every deletion succeeded.
        """
        await store.clear_all()
        query_view.reset()
        return web.Response(status=204)

    async def handle_latest_summary(request: web.Request) -> web.Response:
        """GET /api/memos/{memo_id}/summary"""
        memo_id = _parse_memo_id(request.match_info["memo_id"])
        summary = await summarize_use_case.get_latest_summary(memo_id)
        return web.json_response({"summary": summary})

    app.router.add_post("/api/summarize", handle_summarize)
    app.router.add_post("/api/tags/suggest", handle_suggest_tags)
    app.router.add_get("/api/memos", handle_list_memos)
    app.router.add_post("/api/memos", handle_create_memo)
    app.router.add_delete("/api/memos", handle_clear_memos)
    app.router.add_get("/api/memos/{memo_id}", handle_get_memo)
    app.router.add_put("/api/memos/{memo_id}", handle_update_memo)
    app.router.add_delete("/api/memos/{memo_id}", handle_delete_memo)
    app.router.add_get("/api/memos/{memo_id}/summary", handle_latest_summary)


def create_app(
    store: MemoStore,
    query_view: MemoQueryView,
    summarize_use_case: SummarizeMemoUseCase,
    suggest_tags_use_case: SuggestTagsUseCase,
) -> web.Application:
    """Create the aiohttp application with error handling and memo routes."""
    app = web.Application(middlewares=[error_middleware])
    register_routes(app, store, query_view, summarize_use_case, suggest_tags_use_case)
    return app
