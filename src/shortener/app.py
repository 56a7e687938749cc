import secrets
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog

from shortener.config import Config
from shortener.core.core import Core
from shortener.core.modules.link.models import Link
from shortener.core.modules.session.models import Session
from shortener.core.modules.user.models import User
from shortener.errors import AuthorizationError, NotFoundError

logger = structlog.get_logger(__name__)


class App:
    """Facade for all application operations.

    Callers of the link management methods must already be signed in;
    the web layer enforces that before delegating here.
    """

    def __init__(self, config: Config, core: Core | None = None) -> None:
        self._core = core or Core(config)

    @property
    def config(self) -> Config:
        return self._core.config

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Login flow ===
    def begin_login(self) -> tuple[str, str]:
        """Return the provider consent URL and the anti-forgery state it carries."""
        state = secrets.token_urlsafe(32)
        return self._core.oauth.authorization_url(state), state

    async def complete_login(self, code: str, state: str | None, expected_state: str | None) -> tuple[User, Session]:
        """Exchange the authorization code, authorize the identity, and record a session.

        Only users that already exist in the store are authorized; unknown
        identities are rejected and no session is recorded.
        """
        if not state or not expected_state or not secrets.compare_digest(state.encode(), expected_state.encode()):
            logger.warning("login_rejected", reason="state_mismatch")
            raise AuthorizationError("Invalid OAuth state")
        if not code:
            logger.warning("login_rejected", reason="missing_code")
            raise AuthorizationError("Missing authorization code")

        token = await self._core.oauth.exchange_code(code)
        profile = await self._core.oauth.fetch_profile(token)

        try:
            user = await self._core.services.user.get_user(profile.id)
        except NotFoundError:
            logger.warning("login_rejected", reason="unknown_user", user_id=profile.id)
            raise AuthorizationError from None

        session = await self._core.services.session.create_session(user.id)
        logger.info("login_completed", user_id=user.id)
        return user, session

    # === Links ===
    async def resolve(self, slug: str) -> str:
        """Return the destination for slug; the empty slug maps to the default location."""
        if slug == "":
            return self._core.config.default_redirect_location
        link = await self._core.services.link.get_link(slug)
        return link.destination

    async def register_link(self, user_id: str, slug: str, destination: str) -> Link:
        """Create or overwrite a link (signed-in users only)."""
        link = await self._core.services.link.save_link(slug, destination)
        logger.debug("link_registered", slug=slug, user_id=user_id)
        return link

    async def get_all_links(self) -> list[Link]:
        """List all links (signed-in users only)."""
        return await self._core.services.link.get_all_links()
