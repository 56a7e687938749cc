from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from shortener.core.core import Service
from shortener.core.modules.session.models import Session
from shortener.errors import StorageError

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Service for recording user sessions."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("sessions")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("user_id", 1)])

    async def create_session(self, user_id: str) -> Session:
        session = Session(user_id=user_id, created_at=self.core.clock.now())
        try:
            await self._collection.insert_one(session.to_mongo())
        except PyMongoError as e:
            raise StorageError(f"Failed to save session for user '{user_id}'") from e
        logger.debug("session_created", user_id=user_id, session_id=str(session.id))
        return session

    async def count_sessions(self, user_id: str | None = None) -> int:
        query = {} if user_id is None else {"user_id": user_id}
        try:
            return await self._collection.count_documents(query)
        except PyMongoError as e:
            raise StorageError("Failed to count sessions") from e
