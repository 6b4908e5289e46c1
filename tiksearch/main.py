from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from tiksearch.config import settings
from tiksearch.errors import InvalidQueryError, SearchServiceError
from tiksearch.models import AuthRequest, SearchRequest, SearchResponse
from tiksearch.processor import SearchConfig, SearchOrchestrator
from tiksearch.security import passwords_match

logger = logging.getLogger("tiksearch-api")

app = FastAPI(title="TikTok Search Service", version="0.1.0")


@app.exception_handler(SearchServiceError)
async def search_service_error_handler(request: Request, exc: SearchServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def get_orchestrator() -> SearchOrchestrator:
    return SearchOrchestrator(SearchConfig.from_settings(settings))


def verify_site_auth(request: Request) -> None:
    if not settings.site_password:
        return
    cookie = request.cookies.get(settings.auth_cookie_name) or ""
    if not passwords_match(settings.site_password, cookie):
        raise SearchServiceError("Unauthorized", status_code=401)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/search", dependencies=[Depends(verify_site_auth)])
async def search(
    query: str | None = Query(default=None),
    publish_time: str | None = Query(default=None),
    sort_by: str | None = Query(default=None),
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
) -> JSONResponse:
    if not query or not query.strip():
        raise InvalidQueryError()

    req = SearchRequest(
        query=query,
        publish_time=publish_time or settings.search_default_publish_time,
        sort_by=sort_by or settings.search_default_sort_by,
    )
    try:
        result = await orchestrator.run(req)
    except SearchServiceError:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception("Error fetching TikTok data: %s", exc)
        raise SearchServiceError("Failed to fetch TikTok data", status_code=500) from exc
    # exclude_unset keeps item payloads exactly as upstream sent them
    return JSONResponse(content=SearchResponse.from_result(result).model_dump(mode="json", exclude_unset=True))


@app.post("/api/auth")
async def login(body: AuthRequest) -> JSONResponse:
    if not settings.site_password:
        raise SearchServiceError("No password configured", status_code=500)
    if not passwords_match(settings.site_password, body.password):
        raise SearchServiceError("Invalid password", status_code=401)

    response = JSONResponse(content={"success": True})
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=body.password,
        max_age=settings.auth_cookie_max_age_s,
        httponly=True,
        secure=settings.app_env == "production",
        samesite="lax",
    )
    return response
