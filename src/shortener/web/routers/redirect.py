from fastapi import APIRouter
from fastapi.responses import RedirectResponse

from shortener.web.deps import AppDep
from shortener.web.openapi import ErrorResponse

router = APIRouter(tags=["redirect"])


@router.get(
    "/",
    summary="Default redirect",
    description="Permanent redirect to the configured default location.",
    operation_id="redirectDefault",
    status_code=301,
    response_class=RedirectResponse,
)
async def redirect_default(app: AppDep) -> RedirectResponse:
    return RedirectResponse(await app.resolve(""), status_code=301)


@router.get(
    "/{slug:path}",
    summary="Follow short link",
    description="Permanent redirect to the destination stored for the slug. The slug is matched exactly.",
    operation_id="redirectSlug",
    status_code=301,
    response_class=RedirectResponse,
    responses={404: {"model": ErrorResponse, "description": "Unknown slug"}},
)
async def redirect_slug(slug: str, app: AppDep) -> RedirectResponse:
    return RedirectResponse(await app.resolve(slug), status_code=301)
