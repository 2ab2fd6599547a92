import os

# Must be set before the app modules build their singletons
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CACHE_ENABLED"] = "false"
os.environ["CATALOG_CLIENT_ID"] = ""
os.environ["CATALOG_CLIENT_SECRET"] = ""

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.catalog_client import CatalogClient
from app.db.base import Base
from app.db.models import history, playlist, user  # noqa: F401
from app.db.models.user import User
from app.db.session import get_db
from app.main import app
from app.services.catalog_service import catalog_service
from app.services.recommendation_service import recommendation_service

TOKEN_URL = "https://auth.test/api/token"
API_URL = "https://api.test/v1"


class FakeCatalog:
    """Scripted catalog provider served through httpx.MockTransport"""

    def __init__(self):
        self.routes = {}
        self.token_calls = 0
        self.token_status = 200
        self.expires_in = 3600
        self.api_requests = []

    def route(self, path, body=None, status=200):
        self.routes[f"/v1{path}"] = (status, body)

    def handler(self, request):
        if request.url.host == "auth.test":
            self.token_calls += 1
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"error": "invalid_client"})
            return httpx.Response(200, json={
                "access_token": f"token-{self.token_calls}",
                "token_type": "Bearer",
                "expires_in": self.expires_in,
            })

        self.api_requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"error": {"status": 404}})
        if callable(route):
            return route(request)
        status, body = route
        return httpx.Response(status, json=body)


@pytest.fixture
def fake_catalog():
    return FakeCatalog()


@pytest.fixture
def make_catalog(fake_catalog):
    clients = []

    def factory(**kwargs):
        options = {
            "client_id": "client",
            "client_secret": "secret",
            "token_url": TOKEN_URL,
            "api_url": API_URL,
            "http_client": httpx.Client(transport=httpx.MockTransport(fake_catalog.handler)),
        }
        options.update(kwargs)
        client = CatalogClient(**options)
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()


@pytest.fixture
def catalog(make_catalog):
    return make_catalog()


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = Session()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def make_user(db_session):
    def factory(username="alice"):
        account = User(username=username, email=f"{username}@example.com", hashed_password="x")
        db_session.add(account)
        db_session.commit()
        return account
    return factory


@pytest.fixture
def client(db_session, catalog, monkeypatch):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    monkeypatch.setattr(recommendation_service, "client", catalog)
    monkeypatch.setattr(catalog_service, "client", catalog)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    def login(username="alice", password="s3cret-pass"):
        client.post("/api/v1/user/signup", json={
            "username": username,
            "email": f"{username}@example.com",
            "password": password,
        })
        response = client.post("/api/v1/user/login", data={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}
    return login
