from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, RedirectResponse

from shortener.core.modules.session.models import OAUTH_STATE_KEY, SESSION_USER_KEY
from shortener.web.deps import AppDep, store_user_session
from shortener.web.openapi import ErrorResponse
from shortener.web.pages import STATIC_DIR

router = APIRouter(tags=["auth"])


@router.get(
    "/login.html",
    summary="Login page",
    description="Static page linking to the Google sign-in flow.",
    operation_id="loginPage",
    response_class=FileResponse,
)
async def login_page() -> FileResponse:
    return FileResponse(STATIC_DIR / "login.html", media_type="text/html")


@router.get(
    "/oauth",
    summary="Start Google sign-in",
    description="Redirect to the Google consent page requesting email scope and offline access.",
    operation_id="beginLogin",
    status_code=307,
    response_class=RedirectResponse,
)
async def begin_login(request: Request, app: AppDep) -> RedirectResponse:
    url, state = app.begin_login()
    request.session[OAUTH_STATE_KEY] = state
    return RedirectResponse(url, status_code=307)


@router.get(
    "/oauth/callback",
    summary="Complete Google sign-in",
    description="Exchange the authorization code, authorize the user, and set the session cookie.",
    operation_id="completeLogin",
    status_code=307,
    response_class=RedirectResponse,
    responses={
        307: {"description": "Signed in, redirected to the links page"},
        403: {"model": ErrorResponse, "description": "Unknown identity or invalid state"},
        502: {"model": ErrorResponse, "description": "Identity provider failure"},
    },
)
async def complete_login(request: Request, app: AppDep, code: str = "", state: str | None = None) -> RedirectResponse:
    # The state is single use, and only a successful callback leaves a user in the session
    expected_state = request.session.pop(OAUTH_STATE_KEY, None)
    request.session.pop(SESSION_USER_KEY, None)
    user, _ = await app.complete_login(code, state, expected_state)
    store_user_session(request, user)
    return RedirectResponse("/links.html", status_code=307)
