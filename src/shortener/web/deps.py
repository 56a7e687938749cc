from typing import Annotated, cast

from fastapi import Depends, Request

from shortener.app import App
from shortener.core.modules.session.models import SESSION_USER_KEY
from shortener.core.modules.user.models import User
from shortener.errors import LoginRequiredError


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


def session_user_id(request: Request) -> str | None:
    """User id stored in the signed session cookie, if any."""
    user_id = request.session.get(SESSION_USER_KEY)
    if isinstance(user_id, str) and user_id:
        return user_id
    return None


def store_user_session(request: Request, user: User) -> None:
    """Map the visitor's session cookie to the given user."""
    request.session[SESSION_USER_KEY] = user.id


async def get_current_user_id(request: Request) -> str:
    """Authentication gate: protected routes depend on this.

    Raises LoginRequiredError (turned into a redirect to the login page)
    when the session cookie carries no user id.
    """
    user_id = session_user_id(request)
    if user_id is None:
        raise LoginRequiredError
    return user_id


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
CurrentUserIdDep = Annotated[str, Depends(get_current_user_id)]
