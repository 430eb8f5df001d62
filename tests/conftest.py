import httpx
import pytest
from fastapi.testclient import TestClient
from jose import jwt

from reviews_service.app.config import settings
from reviews_service.app.main import app
from reviews_service.app.upstream_service import ReviewsApi, get_reviews_api

BASE_URL = "http://brewery.test"


class FakeUpstream:
    """Upstream API с заранее заданными ответами; запоминает все запросы."""

    def __init__(self):
        self.responses = {}
        self.requests = []

    def add(self, method, path, status_code=200, json=None, error=None):
        self.responses[(method, path)] = (status_code, json, error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.responses:
            return httpx.Response(404, json={"message": f"No route {key}"})
        status_code, body, error = self.responses[key]
        if error is not None:
            raise error
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    def calls(self, method=None):
        return [r for r in self.requests if method is None or r.method == method]


@pytest.fixture
def upstream():
    fake = FakeUpstream()
    app.dependency_overrides[get_reviews_api] = lambda: ReviewsApi(
        BASE_URL, transport=httpx.MockTransport(fake.handler)
    )
    yield fake
    app.dependency_overrides.clear()


@pytest.fixture
def client(upstream):
    return TestClient(app)


def make_token(user_id=1, **claims):
    payload = {"id": user_id, "email": "test@example.com", **claims}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


@pytest.fixture
def headers_for():
    def _headers(user_id=1, **claims):
        return {"Authorization": f"Bearer {make_token(user_id, **claims)}"}
    return _headers


@pytest.fixture
def auth_headers(headers_for):
    return headers_for(1)
