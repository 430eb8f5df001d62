from typing import Optional

from fastapi import APIRouter, Depends

from reviews_service.app.auth_services import get_current_principal
from reviews_service.app.controller import ReviewController
from reviews_service.app.schemas import Principal, ReviewCreate, ReviewUpdate
from reviews_service.app.upstream_service import ReviewsApi, get_reviews_api

router = APIRouter(prefix="/review", tags=["Reviews"])


def get_controller(api: ReviewsApi = Depends(get_reviews_api)) -> ReviewController:
    return ReviewController(api)


@router.post("/add-review", status_code=201)
async def add_review(
    review: ReviewCreate,
    principal: Optional[Principal] = Depends(get_current_principal),
    controller: ReviewController = Depends(get_controller)
):
    return await controller.add_review(principal, review)


@router.get("/product/{productId}")
async def get_reviews_by_product(productId: int, controller: ReviewController = Depends(get_controller)):
    return await controller.get_reviews_by_product(productId)


@router.get("/{id}")
async def get_review_by_id(id: int, controller: ReviewController = Depends(get_controller)):
    return await controller.get_review_by_id(id)


@router.put("/{id}")
async def update_review(
    id: int,
    patch: Optional[ReviewUpdate] = None,
    principal: Optional[Principal] = Depends(get_current_principal),
    controller: ReviewController = Depends(get_controller)
):
    return await controller.update_review(principal, id, patch or ReviewUpdate())


@router.delete("/{id}")
async def delete_review(
    id: int,
    principal: Optional[Principal] = Depends(get_current_principal),
    controller: ReviewController = Depends(get_controller)
):
    return await controller.delete_review(principal, id)


@router.get("/")
@router.get("", include_in_schema=False)
async def get_all_reviews(controller: ReviewController = Depends(get_controller)):
    return await controller.get_all_reviews()
