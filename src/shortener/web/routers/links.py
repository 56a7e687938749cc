from typing import Annotated

from fastapi import APIRouter, Form, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse

from shortener.core.modules.link.models import LinkView
from shortener.web.deps import AppDep, CurrentUserIdDep
from shortener.web.openapi import ErrorResponse
from shortener.web.pages import render_links_page

router = APIRouter(tags=["links"])


@router.get(
    "/links.html",
    summary="Links page",
    description="HTML listing of all links with a form to add one.",
    operation_id="linksPage",
    response_class=HTMLResponse,
    responses={307: {"description": "Not signed in, redirected to the login page"}},
)
async def links_page(app: AppDep, _: CurrentUserIdDep) -> HTMLResponse:
    links = await app.get_all_links()
    return HTMLResponse(render_links_page(links))


@router.get(
    "/links",
    summary="List links",
    description="Get all links.",
    operation_id="listLinks",
    responses={
        200: {"description": "All links ordered by slug"},
        307: {"description": "Not signed in, redirected to the login page"},
    },
)
async def list_links(app: AppDep, _: CurrentUserIdDep) -> list[LinkView]:
    return [LinkView.from_domain(link) for link in await app.get_all_links()]


@router.post(
    "/links",
    summary="Save link",
    description="Create a link or overwrite the destination of an existing one.",
    operation_id="saveLink",
    status_code=204,
    responses={
        204: {"description": "Link saved"},
        303: {"description": "Link saved from the links page form, redirected back to it"},
        307: {"description": "Not signed in, redirected to the login page"},
        400: {"model": ErrorResponse, "description": "Empty id, or location that is not an http(s) URL"},
        500: {"model": ErrorResponse, "description": "Storage unavailable"},
    },
)
async def save_link(
    request: Request,
    app: AppDep,
    user_id: CurrentUserIdDep,
    id: Annotated[str, Form()] = "",  # noqa: A002
    location: Annotated[str, Form()] = "",
) -> Response:
    await app.register_link(user_id, id, location)
    # Browsers submitting the links page form go back to the page
    if "text/html" in request.headers.get("accept", ""):
        return RedirectResponse("/links.html", status_code=303)
    return Response(status_code=204)
