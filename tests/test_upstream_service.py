import asyncio

import httpx
import pytest

from reviews_service.app.exceptions import UpstreamError
from reviews_service.app.upstream_service import ReviewsApi


def _api(handler):
    return ReviewsApi("http://brewery.test/", transport=httpx.MockTransport(handler))


def test_success_returns_decoded_json():
    api = _api(lambda request: httpx.Response(200, json=[{"Id": 1}]))
    assert asyncio.run(api.list_reviews()) == [{"Id": 1}]


def test_empty_body_returns_none():
    api = _api(lambda request: httpx.Response(204))
    assert asyncio.run(api.delete_review(3)) is None


def test_status_error_keeps_structured_body():
    body = {"message": "Validation failed", "errors": {"ReviewRating": ["out of range"]}}
    api = _api(lambda request: httpx.Response(422, json=body))

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(api.create_review({"UserId": 1}))

    error = exc_info.value
    assert error.has_response
    assert error.status_code == 422
    assert error.message == "Validation failed"
    assert error.errors == {"ReviewRating": ["out of range"]}


def test_status_error_with_text_body():
    api = _api(lambda request: httpx.Response(503, text="Service Unavailable"))

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(api.get_review(1))

    assert exc_info.value.status_code == 503
    assert exc_info.value.message is None
    assert exc_info.value.body == "Service Unavailable"


def test_transport_error_has_no_response():
    def handler(request):
        raise httpx.ConnectError("Network glitch")

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(_api(handler).get_product(2))

    error = exc_info.value
    assert not error.has_response
    assert error.status_code is None
    assert error.reason == "Network glitch"


def test_service_error_precedence():
    structured = UpstreamError("boom", status_code=409, message="Conflict", errors=["dup"], has_response=True)
    assert structured.to_service_error(404, "Review not found").content == {"message": "Conflict", "error": ["dup"]}
    assert structured.to_service_error(404, "Review not found").status_code == 409

    bare = UpstreamError("Request failed", status_code=400, has_response=True)
    assert bare.to_service_error(500, "Error adding review").content == {"message": "Error adding review"}

    network = UpstreamError("Network glitch")
    service_error = network.to_service_error(500, "Error adding review")
    assert service_error.status_code == 500
    assert service_error.content == {"message": "Error adding review", "error": "Network glitch"}
