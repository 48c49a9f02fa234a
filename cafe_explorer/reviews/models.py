from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

DEFAULT_AVATAR = "/placeholder.svg?height=40&width=40"


class ReviewStatus(str, Enum):
    approved = "approved"
    pending = "pending"
    flagged = "flagged"
    rejected = "rejected"


class ReviewSort(str, Enum):
    newest = "newest"
    oldest = "oldest"
    rating = "rating"
    helpful = "helpful"


class ReviewCreate(BaseModel):
    user_name: str = Field(..., min_length=1, max_length=100)
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1, max_length=2000)
    study_rating: int | None = Field(default=None, ge=1, le=5)
    wifi_rating: int | None = Field(default=None, ge=1, le=5)
    noise_rating: int | None = Field(default=None, ge=1, le=5)


class Review(ReviewCreate):
    id: str
    cafe_id: str
    user_avatar: str = DEFAULT_AVATAR
    created_at: datetime
    helpful: int = Field(default=0, ge=0)
    status: ReviewStatus = ReviewStatus.approved


class ReviewStatusUpdate(BaseModel):
    status: ReviewStatus


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class ReviewPage(BaseModel):
    reviews: list[Review]
    pagination: Pagination


class ReviewStatusCounts(BaseModel):
    total: int = 0
    approved: int = 0
    pending: int = 0
    flagged: int = 0
    rejected: int = 0


class ReviewModerationList(BaseModel):
    reviews: list[Review]
    stats: ReviewStatusCounts
