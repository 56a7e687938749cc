from typing import Any
from urllib.parse import urlparse

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from shortener.core.core import Service
from shortener.core.modules.link.models import Link
from shortener.errors import NotFoundError, StorageError, ValidationError

logger = structlog.get_logger(__name__)

ALLOWED_SCHEMES = frozenset({"http", "https"})


class LinkService(Service):
    """Slug to destination mapping stored in the ``links`` collection."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("links")

    async def on_start(self) -> None:
        """Write configured seed links."""
        for slug, destination in self.core.config.seed_links.items():
            await self.save_link(slug, destination)
        if self.core.config.seed_links:
            logger.debug("seed_links_saved", link_count=len(self.core.config.seed_links))

    async def get_link(self, slug: str) -> Link:
        """Get link by exact slug."""
        try:
            doc = await self._collection.find_one({"_id": slug})
        except PyMongoError as e:
            raise StorageError(f"Failed to load link '{slug}'") from e
        if doc is None:
            raise NotFoundError(f"Link '{slug}' not found")
        return Link.model_validate(doc)

    async def get_all_links(self) -> list[Link]:
        """Get all links ordered by slug."""
        try:
            return await Link.list_cursor(self._collection.find().sort("_id", 1))
        except PyMongoError as e:
            raise StorageError("Failed to list links") from e

    async def count_links(self) -> int:
        try:
            return await self._collection.count_documents({})
        except PyMongoError as e:
            raise StorageError("Failed to count links") from e

    async def save_link(self, slug: str, destination: str) -> Link:
        """Create or overwrite a link. Last write wins."""
        if not slug:
            raise ValidationError("Link id must not be empty")
        if not destination:
            raise ValidationError("Link location must not be empty")
        if urlparse(destination).scheme.lower() not in ALLOWED_SCHEMES:
            raise ValidationError("Link location must be an http or https URL")

        link = Link(id=slug, destination=destination)
        try:
            await self._collection.replace_one({"_id": slug}, link.to_mongo(), upsert=True)
        except PyMongoError as e:
            raise StorageError(f"Failed to save link '{slug}'") from e
        logger.info("link_saved", slug=slug)
        return link
