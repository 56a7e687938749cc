from shortener.web.routers.auth import router as auth_router
from shortener.web.routers.links import router as links_router
from shortener.web.routers.redirect import router as redirect_router

__all__ = [
    "auth_router",
    "links_router",
    "redirect_router",
]
