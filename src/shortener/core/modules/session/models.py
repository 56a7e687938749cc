"""Session management models."""

from datetime import datetime
from typing import Final
from uuid import UUID, uuid4

from pydantic import Field

from shortener.core.db import MongoModel

SESSION_COOKIE_NAME: Final = "user"
SESSION_USER_KEY: Final = "user_id"
OAUTH_STATE_KEY: Final = "oauth_state"


class Session(MongoModel):
    """Audit record of a successful login.

    The signed session cookie is authoritative for authentication;
    this record only remembers who signed in and when.
    """

    id: UUID = Field(alias="_id", serialization_alias="id", default_factory=uuid4)
    user_id: str
    created_at: datetime
