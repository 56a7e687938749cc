from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from shortener.core.modules.session.models import SESSION_COOKIE_NAME

# Routes reachable without a session cookie
PUBLIC_ENDPOINTS = {
    ("GET", "/health"),
    ("GET", "/login.html"),
    ("GET", "/oauth"),
    ("GET", "/oauth/callback"),
    ("GET", "/"),
    ("GET", "/{slug}"),
}


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Shortener API",
            version="0.1.0",
            summary="URL shortener with Google sign-in",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "SessionCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": SESSION_COOKIE_NAME,
                "description": "Signed session cookie set after Google sign-in",
            },
        }

        # Apply security globally (overridden for public endpoints)
        openapi_schema["security"] = [{"SessionCookie": []}]

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in PUBLIC_ENDPOINTS:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Failed to authorize user", "type": "authorization_error"},
                {"message": "Link 'foo' not found", "type": "not_found"},
                {"message": "Link location must not be empty", "type": "validation_error"},
            ]
        }
    }
