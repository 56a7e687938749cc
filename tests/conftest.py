"""Shared pytest fixtures.

The document store is replaced by an in-memory fake exposing the subset of the
pymongo async collection API the services use, and Google is replaced by an
httpx mock transport.
"""

from collections.abc import AsyncIterator, Callable, Iterator
from copy import deepcopy
from typing import Any
from urllib.parse import parse_qs, urlparse

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from shortener.app import App
from shortener.config import Config
from shortener.core.clock import FixedClock
from shortener.core.core import Core
from shortener.core.modules.oauth.models import GOOGLE_TOKEN_URI, GOOGLE_USERINFO_URL, ClientCredentials
from shortener.core.modules.oauth.provider import OAuthProvider
from shortener.web.server import create_fastapi_app

SEED_USER_ID = "42"
SEED_USER_EMAIL = "jane@example.com"
SEED_USER_PICTURE = "http://www.example.com/example.jpg"
SEED_LINKS = {"example": "http://www.example.com/example"}
DEFAULT_LOCATION = "http://www.example.com/"


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._docs = sorted(self._docs, key=lambda doc: doc[key], reverse=direction < 0)
        return self

    def __aiter__(self) -> "FakeCursor":
        return self

    async def __anext__(self) -> dict[str, Any]:
        if not self._docs:
            raise StopAsyncIteration
        return self._docs.pop(0)


class FakeCollection:
    """In-memory stand-in for an AsyncCollection keyed by ``_id``."""

    def __init__(self) -> None:
        self.docs: dict[Any, dict[str, Any]] = {}
        self.indexes: list[Any] = []
        self.unavailable = False

    def _check(self) -> None:
        if self.unavailable:
            raise ServerSelectionTimeoutError("No servers available")

    def _matching(self, query: dict[str, Any] | None) -> list[dict[str, Any]]:
        query = query or {}
        return [doc for doc in self.docs.values() if all(doc.get(k) == v for k, v in query.items())]

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        self._check()
        found = self._matching(query)
        return deepcopy(found[0]) if found else None

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        self._check()
        return FakeCursor(deepcopy(self._matching(query)))

    async def count_documents(self, query: dict[str, Any], limit: int = 0) -> int:
        self._check()
        count = len(self._matching(query))
        return min(count, limit) if limit else count

    async def insert_one(self, doc: dict[str, Any]) -> None:
        self._check()
        if doc["_id"] in self.docs:
            raise DuplicateKeyError(f"Duplicate _id {doc['_id']!r}")
        self.docs[doc["_id"]] = deepcopy(doc)

    async def replace_one(self, query: dict[str, Any], doc: dict[str, Any], upsert: bool = False) -> None:
        self._check()
        found = self._matching(query)
        if found:
            del self.docs[found[0]["_id"]]
        elif not upsert:
            return
        self.docs[doc["_id"]] = deepcopy(doc)

    async def create_index(self, keys: Any, **kwargs: Any) -> str:
        self._check()
        self.indexes.append((keys, kwargs))
        return "index"


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


class FakeGoogle:
    """Scripted token and userinfo endpoints."""

    def __init__(self) -> None:
        self.profile_id = SEED_USER_ID
        self.token_status = 200
        self.profile_status = 200
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        if url == GOOGLE_TOKEN_URI:
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"error": "invalid_grant"})
            return httpx.Response(200, json={"access_token": "token-123", "token_type": "Bearer", "expires_in": 3599})
        if url == GOOGLE_USERINFO_URL:
            if self.profile_status != 200:
                return httpx.Response(self.profile_status, json={"error": "unauthorized"})
            return httpx.Response(
                200, json={"id": self.profile_id, "email": SEED_USER_EMAIL, "picture": SEED_USER_PICTURE, "verified_email": True}
            )
        return httpx.Response(404)


@pytest.fixture
def config() -> Config:
    return Config(
        database_url="mongodb://localhost:27017/shortener_test",
        host="127.0.0.1",
        port=8080,
        debug=True,
        default_redirect_location=DEFAULT_LOCATION,
        session_secret_key="test-session-secret",
        base_url="http://testserver",
        google_client_id="client-id",
        google_client_secret="client-secret",
        seed_user_id=SEED_USER_ID,
        seed_user_email=SEED_USER_EMAIL,
        seed_user_picture=SEED_USER_PICTURE,
        seed_links=SEED_LINKS,
    )


@pytest.fixture
def database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def google() -> FakeGoogle:
    return FakeGoogle()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def provider(config: Config, google: FakeGoogle) -> OAuthProvider:
    credentials = ClientCredentials(client_id=config.google_client_id, client_secret=config.google_client_secret)
    return OAuthProvider(credentials, config.callback_url, transport=httpx.MockTransport(google.handler))


@pytest.fixture
def core(config: Config, database: FakeDatabase, clock: FixedClock, provider: OAuthProvider) -> Core:
    return Core(config, database=database, clock=clock, oauth=provider)  # type: ignore[arg-type]


@pytest.fixture
async def started_core(core: Core) -> AsyncIterator[Core]:
    """Core with seed data written."""
    async with core.lifespan():
        yield core


@pytest.fixture
def app(config: Config, core: Core) -> App:
    return App(config, core=core)


@pytest.fixture
def fastapi_app(app: App, config: Config) -> FastAPI:
    return create_fastapi_app(app, config)


@pytest.fixture
def client(fastapi_app: FastAPI) -> Iterator[TestClient]:
    with TestClient(fastapi_app, follow_redirects=False) as test_client:
        yield test_client


@pytest.fixture
def login(client: TestClient) -> Callable[[], httpx.Response]:
    """Run the OAuth round trip against the fake provider and return the callback response."""

    def _login() -> httpx.Response:
        response = client.get("/oauth")
        state = parse_qs(urlparse(response.headers["location"]).query)["state"][0]
        return client.get("/oauth/callback", params={"code": "auth-code", "state": state})

    return _login


@pytest.fixture
def signed_in_client(client: TestClient, login: Callable[[], httpx.Response]) -> TestClient:
    response = login()
    assert response.status_code == 307
    return client
