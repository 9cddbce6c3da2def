"""Redirect and health check routes."""

import os

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ..api.schemas import HealthResponse

router = APIRouter()

template_dir = os.path.join(os.path.dirname(__file__), "..", "templates")
templates = Jinja2Templates(directory=template_dir)


@router.get("/healthz", response_model=HealthResponse, tags=["Health"])
async def healthz(request: Request):
    """Liveness report with version and uptime."""
    process_info = request.app.state.process_info
    store = request.app.state.store

    if store is not None and not await store.health_check():
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "ok": False,
                "version": process_info.version,
                "error": "Health check failed",
            },
        )

    return HealthResponse(**process_info.snapshot())


@router.get("/{code}", include_in_schema=False)
async def redirect_to_target(request: Request, code: str):
    """Redirect to the target URL, counting the click."""
    resolver = request.app.state.resolver

    target = await resolver.resolve(code)

    if target is None:
        return templates.TemplateResponse(
            request,
            "not_found.html",
            {"code": code},
            status_code=status.HTTP_404_NOT_FOUND,
        )

    # 302 so browsers come back through us and every visit is counted
    return RedirectResponse(url=target.target_url, status_code=status.HTTP_302_FOUND)
