"""API routes implementation."""

from typing import List

from fastapi import APIRouter, Request, Response, status

from .schemas import CreateLinkRequest, ErrorResponse, LinkResponse, MessageResponse

router = APIRouter()


@router.get(
    "/links",
    response_model=List[LinkResponse],
    responses={500: {"model": ErrorResponse}},
    summary="List links",
    description="All links with their statistics, newest first.",
)
async def list_links(request: Request):
    registrar = request.app.state.registrar

    links = await registrar.list()

    return [LinkResponse.from_link(link) for link in links]


@router.post(
    "/links",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid field"},
        409: {"model": ErrorResponse, "description": "Short code already taken"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short link",
    description="Create a short link. Optionally provide a custom code.",
)
async def create_link(request: Request, response: Response, body: CreateLinkRequest):
    registrar = request.app.state.registrar

    link = await registrar.register(body.target_url, body.code or None)

    response.headers["Location"] = f"/api/links/{link.code}"
    return LinkResponse.from_link(link)


@router.get(
    "/links/{code}",
    response_model=LinkResponse,
    responses={404: {"model": ErrorResponse, "description": "Link not found"}},
    summary="Get link statistics",
)
async def get_link(request: Request, code: str):
    registrar = request.app.state.registrar

    link = await registrar.get_stats(code)

    return LinkResponse.from_link(link)


@router.delete(
    "/links/{code}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse, "description": "Link not found"}},
    summary="Delete link",
)
async def delete_link(request: Request, code: str):
    registrar = request.app.state.registrar

    await registrar.remove(code)

    return MessageResponse(message="Link deleted successfully")
