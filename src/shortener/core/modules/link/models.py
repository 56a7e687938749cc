from pydantic import BaseModel, Field

from shortener.core.db import MongoModel


class Link(MongoModel):
    """Short link. The slug is the document key, so slugs are unique by construction."""

    id: str = Field(alias="_id", serialization_alias="slug")
    destination: str

    @property
    def slug(self) -> str:
        return self.id


class LinkView(BaseModel):
    """Short link (API representation)."""

    slug: str = Field(..., description="Path segment that redirects")
    destination: str = Field(..., description="Target URL")

    @classmethod
    def from_domain(cls, link: Link) -> "LinkView":
        return cls(slug=link.slug, destination=link.destination)
