from typing import Any, Optional

import httpx

from reviews_service.app.config import settings
from reviews_service.app.exceptions import UpstreamError


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ReviewsApi:
    """Клиент upstream API отзывов и склада."""

    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.transport = transport

    async def _request(self, method: str, path: str, json: Optional[dict] = None) -> Any:
        async with httpx.AsyncClient(base_url=self.base_url, transport=self.transport) as client:
            try:
                response = await client.request(method, path, json=json)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                body = _decode(e.response)
                message = errors = None
                if isinstance(body, dict):
                    message = body.get("message")
                    errors = body.get("errors")
                raise UpstreamError(
                    str(e),
                    status_code=e.response.status_code,
                    message=message,
                    errors=errors,
                    body=body,
                    has_response=True,
                ) from e
            except httpx.HTTPError as e:
                raise UpstreamError(str(e) or e.__class__.__name__) from e
        return _decode(response)

    async def get_product(self, product_id: int) -> Any:
        return await self._request("GET", f"/api/inventory/{product_id}")

    async def create_review(self, payload: dict) -> Any:
        return await self._request("POST", "/api/reviews", json=payload)

    async def get_review(self, review_id: int) -> Any:
        return await self._request("GET", f"/api/reviews/{review_id}")

    async def update_review(self, review_id: int, payload: dict) -> Any:
        return await self._request("PUT", f"/api/reviews/{review_id}", json=payload)

    async def delete_review(self, review_id: int) -> Any:
        return await self._request("DELETE", f"/api/reviews/{review_id}")

    async def list_reviews(self) -> Any:
        return await self._request("GET", "/api/reviews")

    async def list_reviews_by_product(self, product_id: int) -> Any:
        return await self._request("GET", f"/api/reviews/product/{product_id}")


def get_reviews_api() -> ReviewsApi:
    return ReviewsApi(settings.brewery_api_url)
