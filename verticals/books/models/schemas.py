"""Pydantic schemas for API request/response validation."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from patterns.domain_config import BookRules

_rules = BookRules()


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class BookCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(
        ..., min_length=_rules.title_min_length, max_length=_rules.title_max_length
    )
    # strict: booleans and numeric strings are not numbers
    rating: int = Field(..., strict=True, ge=_rules.min_rating, le=_rules.max_rating)
    price: float = Field(..., strict=True, ge=_rules.min_price, le=_rules.max_price)
    author_id: str = Field(..., alias="authorId", min_length=1)


class BookUpdate(BookCreate):
    """Full replacement payload; every field is required."""


class LikeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    book_id: UUID = Field(..., alias="bookId")
    user_id: UUID = Field(..., alias="userId")


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class MessageResponse(BaseModel):
    message: str
