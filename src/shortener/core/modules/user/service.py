from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from shortener.core.core import Service
from shortener.core.modules.user.models import User
from shortener.errors import NotFoundError, StorageError

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Pre-provisioned users keyed by external identity id."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def get_user(self, user_id: str) -> User:
        """Get user by external identity id."""
        try:
            doc = await self._collection.find_one({"_id": user_id})
        except PyMongoError as e:
            raise StorageError(f"Failed to load user '{user_id}'") from e
        if doc is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return User.model_validate(doc)

    async def has_user(self, user_id: str) -> bool:
        """Check if user exists by ID."""
        try:
            return await self._collection.count_documents({"_id": user_id}, limit=1) > 0
        except PyMongoError as e:
            raise StorageError(f"Failed to load user '{user_id}'") from e

    async def save_user(self, user: User) -> User:
        """Create or replace a user record."""
        try:
            await self._collection.replace_one({"_id": user.id}, user.to_mongo(), upsert=True)
        except PyMongoError as e:
            raise StorageError(f"Failed to save user '{user.id}'") from e
        return user

    async def ensure_seed_user_exists(self) -> None:
        """Write the user configured through SHORTENER_SEED_USER_* if any."""
        config = self.core.config
        if not config.seed_user_id:
            return
        await self.save_user(User(id=config.seed_user_id, email=config.seed_user_email, picture=config.seed_user_picture))
        logger.info("seed_user_saved", user_id=config.seed_user_id)

    async def on_start(self) -> None:
        await self.ensure_seed_user_exists()
