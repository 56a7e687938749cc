from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, cast
from urllib.parse import urlparse

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from shortener.config import Config
from shortener.core.clock import Clock, SystemClock
from shortener.core.modules.oauth.provider import OAuthProvider


class Service:
    """Base class for services with direct database access."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.database = database
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    from shortener.core.modules.link.service import LinkService  # noqa: PLC0415
    from shortener.core.modules.session.service import SessionService  # noqa: PLC0415
    from shortener.core.modules.user.service import UserService  # noqa: PLC0415

    user: UserService
    link: LinkService
    session: SessionService

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []
        self._database = database

        # Service configuration: (attribute_name, module_path, class_name)
        service_configs = [
            ("user", "shortener.core.modules.user.service", "UserService"),
            ("link", "shortener.core.modules.link.service", "LinkService"),
            ("session", "shortener.core.modules.session.service", "SessionService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(database)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        """Start all services that have startup logic."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services that have cleanup logic."""
        for service in self._services:
            await service.on_stop()


class Core:
    """Container providing config, clock, database, identity provider, and all service instances.

    The database, clock, and provider can be passed in explicitly; otherwise they are
    built from config (MongoDB client, wall clock, Google OAuth client).
    """

    config: Config
    clock: Clock
    mongo_client: AsyncMongoClient[dict[str, Any]] | None
    database: AsyncDatabase[dict[str, Any]]
    oauth: OAuthProvider
    services: Services

    def __init__(
        self,
        config: Config,
        database: AsyncDatabase[dict[str, Any]] | None = None,
        clock: Clock | None = None,
        oauth: OAuthProvider | None = None,
    ) -> None:
        self.config = config
        self.clock = clock or SystemClock()
        self.mongo_client = None
        if database is None:
            self.mongo_client = AsyncMongoClient(config.database_url, uuidRepresentation="standard")
            database = self.mongo_client.get_database(urlparse(config.database_url).path[1:])
        self.database = database
        self.oauth = oauth or OAuthProvider.from_config(config)
        self.services = Services(self.database)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Start all services on application startup."""
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services, the provider HTTP client, and the MongoDB connection."""
        await self.services.stop_all()
        await self.oauth.aclose()
        if self.mongo_client is not None:
            await self.mongo_client.aclose()
