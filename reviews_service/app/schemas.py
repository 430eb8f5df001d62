from typing import Optional

from pydantic import BaseModel, Field, field_validator


def _reject_bool(value):
    # true/false не считаются числами
    if isinstance(value, bool):
        raise ValueError("boolean is not a number")
    return value


class Principal(BaseModel):
    id: int
    email: Optional[str] = None


class ReviewCreate(BaseModel):
    userId: int = Field(..., ge=1)
    productId: int = Field(..., ge=1)
    reviewRating: float = Field(..., ge=0, le=5)
    reviewMessage: str = Field(..., min_length=1)

    @field_validator("userId", "productId", "reviewRating", mode="before")
    @classmethod
    def reject_bool(cls, value):
        return _reject_bool(value)

    def to_upstream(self) -> dict:
        return {
            "UserId": self.userId,
            "ProductId": self.productId,
            "ReviewRating": self.reviewRating,
            "ReviewMessage": self.reviewMessage,
        }


class ReviewUpdate(BaseModel):
    # без Optional: явный null не проходит валидацию
    reviewRating: float = Field(None, ge=0, le=5)
    reviewMessage: str = Field(None, min_length=1)

    @field_validator("reviewRating", mode="before")
    @classmethod
    def reject_bool(cls, value):
        return _reject_bool(value)

    def to_upstream(self, review_id: int, user_id, product_id) -> dict:
        payload = {"Id": review_id, "UserId": user_id, "ProductId": product_id}
        update_data = self.model_dump(exclude_unset=True)
        if "reviewRating" in update_data:
            payload["ReviewRating"] = update_data["reviewRating"]
        if "reviewMessage" in update_data:
            payload["ReviewMessage"] = update_data["reviewMessage"]
        return payload


CREATE_MESSAGES = {
    "userId": "User ID must be a positive integer",
    "productId": "Product ID must be a positive integer",
    "reviewRating": "Review rating must be between 0 and 5",
    "reviewMessage": "Review message is required",
}

UPDATE_MESSAGES = {
    "reviewRating": "Review rating must be between 0 and 5",
    "reviewMessage": "Review message cannot be empty",
}
