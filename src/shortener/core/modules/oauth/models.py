"""Google OAuth client credentials, tokens, and profile documents."""

from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, model_validator

GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"  # noqa: S105
GOOGLE_USERINFO_URL = "https://www.googleapis.com/userinfo/v2/me"
EMAIL_SCOPE = "https://www.googleapis.com/auth/userinfo.email"


class ClientCredentials(BaseModel):
    """OAuth client registration."""

    client_id: str
    client_secret: str
    auth_uri: str = GOOGLE_AUTH_URI
    token_uri: str = GOOGLE_TOKEN_URI


class CredentialsFile(BaseModel):
    """Layout of the client_credentials.json file downloaded from the Google console.

    Web applications are stored under ``web``, desktop clients under ``installed``.
    """

    web: ClientCredentials | None = None
    installed: ClientCredentials | None = None

    @model_validator(mode="after")
    def check_section(self) -> Self:
        if self.web is None and self.installed is None:
            raise ValueError("credentials file must contain a 'web' or 'installed' section")
        return self

    @property
    def credentials(self) -> ClientCredentials:
        return self.web or self.installed  # type: ignore[return-value]

    @classmethod
    def load(cls, path: str | Path) -> ClientCredentials:
        return cls.model_validate_json(Path(path).read_text()).credentials


class OAuthToken(BaseModel):
    """Token endpoint response."""

    model_config = ConfigDict(extra="ignore")

    access_token: str
    token_type: str = "Bearer"
    expires_in: int | None = None
    refresh_token: str | None = None


class Profile(BaseModel):
    """Subset of the userinfo document used for authorization."""

    model_config = ConfigDict(extra="ignore")

    id: str
    email: str = ""
    picture: str = ""
