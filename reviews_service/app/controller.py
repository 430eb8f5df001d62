from typing import Optional

from fastapi.responses import JSONResponse

from reviews_service.app.auth_services import is_owner
from reviews_service.app.exceptions import AuthorizationError, UpstreamError
from reviews_service.app.logger import logger
from reviews_service.app.schemas import Principal, ReviewCreate, ReviewUpdate
from reviews_service.app.upstream_service import ReviewsApi


def _log_upstream_error(message: str, e: UpstreamError, **extra):
    logger.error(
        message,
        extra={
            "status_code": e.status_code,
            "error": e.body if e.has_response else e.reason,
            **extra,
        },
    )


class ReviewController:
    """Проксирует операции с отзывами в upstream API.

    Состояния не хранит: владелец отзыва каждый раз запрашивается у upstream.
    """

    def __init__(self, api: ReviewsApi):
        self.api = api

    async def add_review(self, principal: Optional[Principal], review: ReviewCreate) -> JSONResponse:
        if not is_owner(principal, review.userId):
            logger.warning(
                "Попытка добавить отзыв от имени другого пользователя",
                extra={"user_id": principal.id if principal else None, "body_user_id": review.userId},
            )
            raise AuthorizationError()

        try:
            # товар должен существовать до создания отзыва
            await self.api.get_product(review.productId)
            created = await self.api.create_review(review.to_upstream())
        except UpstreamError as e:
            _log_upstream_error("Ошибка при добавлении отзыва", e, product_id=review.productId)
            raise e.to_service_error(500, "Error adding review") from e

        logger.info("Отзыв добавлен", extra={"user_id": review.userId, "product_id": review.productId})
        return JSONResponse(status_code=201, content=created)

    async def get_review_by_id(self, review_id: int) -> JSONResponse:
        try:
            review = await self.api.get_review(review_id)
        except UpstreamError as e:
            _log_upstream_error("Ошибка при получении отзыва", e, review_id=review_id)
            raise e.to_service_error(404, "Review not found") from e

        logger.info("Получен отзыв", extra={"review_id": review_id})
        return JSONResponse(status_code=200, content=review)

    async def _ensure_owner(self, principal: Optional[Principal], review_id: int) -> dict:
        if principal is None:
            logger.warning("Попытка изменить отзыв без авторизации", extra={"review_id": review_id})
            raise AuthorizationError()

        review = await self.api.get_review(review_id)
        if not isinstance(review, dict):
            review = {}
        logger.info(
            "Проверка владельца отзыва",
            extra={"review_id": review_id, "user_id": principal.id, "review_user_id": review.get("UserId")},
        )
        if not is_owner(principal, review.get("UserId")):
            logger.warning("Отзыв принадлежит другому пользователю", extra={"review_id": review_id, "user_id": principal.id})
            raise AuthorizationError()
        return review

    async def update_review(self, principal: Optional[Principal], review_id: int, patch: ReviewUpdate) -> JSONResponse:
        try:
            current = await self._ensure_owner(principal, review_id)
            payload = patch.to_upstream(review_id, current.get("UserId"), current.get("ProductId"))
            updated = await self.api.update_review(review_id, payload)
        except UpstreamError as e:
            _log_upstream_error("Ошибка при обновлении отзыва", e, review_id=review_id)
            raise e.to_service_error(404, "Review not found") from e

        logger.info("Отзыв обновлён", extra={"review_id": review_id, "update_data": payload})
        return JSONResponse(status_code=200, content=updated)

    async def delete_review(self, principal: Optional[Principal], review_id: int) -> JSONResponse:
        try:
            await self._ensure_owner(principal, review_id)
            await self.api.delete_review(review_id)
        except UpstreamError as e:
            _log_upstream_error("Ошибка при удалении отзыва", e, review_id=review_id)
            raise e.to_service_error(404, "Review not found") from e

        logger.info("Удалён отзыв", extra={"review_id": review_id, "user_id": principal.id})
        return JSONResponse(status_code=200, content={"message": "Review deleted successfully"})

    async def get_all_reviews(self) -> JSONResponse:
        try:
            reviews = await self.api.list_reviews()
        except UpstreamError as e:
            _log_upstream_error("Ошибка при получении отзывов", e)
            raise e.to_service_error(500, "Error fetching reviews") from e

        logger.info("Получен список всех отзывов", extra={"reviews_count": len(reviews) if isinstance(reviews, list) else None})
        return JSONResponse(status_code=200, content=reviews)

    async def get_reviews_by_product(self, product_id: int) -> JSONResponse:
        try:
            reviews = await self.api.list_reviews_by_product(product_id)
        except UpstreamError as e:
            _log_upstream_error("Ошибка при получении отзывов на товар", e, product_id=product_id)
            raise e.to_service_error(500, "Error fetching reviews") from e

        logger.info(
            "Получен список отзывов на товар",
            extra={"product_id": product_id, "reviews_count": len(reviews) if isinstance(reviews, list) else None},
        )
        return JSONResponse(status_code=200, content=reviews)
