from pydantic import Field

from shortener.core.db import MongoModel


class User(MongoModel):
    """Pre-provisioned user, keyed by the identity provider's account id."""

    id: str = Field(alias="_id", serialization_alias="id")
    email: str = ""
    picture: str = ""
