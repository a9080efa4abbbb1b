"""Pydantic request/response schemas for the film catalog API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class MarkWatchedRequest(BaseModel):
    movie_id: str


class ReviewScoresSchema(BaseModel):
    direction_score: int = Field(ge=1, le=5)
    screenplay_score: int = Field(ge=1, le=5)
    cinematography_score: int = Field(ge=1, le=5)
    general_score: int = Field(ge=1, le=5)


class CreateReviewRequest(ReviewScoresSchema):
    user_id: str
    movie_id: str
    content: str = Field(min_length=1)


class UpdateReviewRequest(ReviewScoresSchema):
    user_id: str
    content: str = Field(min_length=1)


class LikeReviewRequest(BaseModel):
    user_id: str


class FlagReviewRequest(BaseModel):
    reporter_id: str
    reason: str | None = Field(default=None, max_length=500)


class ModerationRequest(BaseModel):
    moderator_id: str


class CreateWatchlistRequest(BaseModel):
    owner_id: str
    name: str | None = Field(default=None, max_length=100)
    description: str | None = None


class UpdateWatchlistRequest(BaseModel):
    owner_id: str
    name: str | None = Field(default=None, max_length=100)
    description: str | None = None


class WatchlistMovieRequest(BaseModel):
    owner_id: str
    movie_id: str


class WatchlistOwnerRequest(BaseModel):
    owner_id: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class WatchKeyResponse(BaseModel):
    watch_key: str


class ReviewIdResponse(BaseModel):
    review_id: str


class FlagIdResponse(BaseModel):
    flag_id: str


class WatchlistIdResponse(BaseModel):
    watchlist_id: str


class LikesResponse(BaseModel):
    likes_count: int


class WatchedResponse(BaseModel):
    watched: bool


class ContainsResponse(BaseModel):
    contains: bool


class ChangedResponse(BaseModel):
    changed: bool


class WatchedMovieSchema(BaseModel):
    watch_key: str
    movie_id: str
    watched_at: datetime

    @classmethod
    def from_record(cls, record) -> WatchedMovieSchema:
        return cls(
            watch_key=str(record.watch_key),
            movie_id=str(record.movie_id),
            watched_at=record.watched_at,
        )


class ReviewSchema(BaseModel):
    review_id: str
    user_id: str
    movie_id: str
    content: str
    direction_score: int
    screenplay_score: int
    cinematography_score: int
    general_score: int
    likes_count: int
    flag_count: int
    hidden: bool
    hidden_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_review(cls, review) -> ReviewSchema:
        return cls(
            review_id=str(review.review_id),
            user_id=str(review.user_id),
            movie_id=str(review.movie_id),
            content=review.content,
            direction_score=review.scores.direction,
            screenplay_score=review.scores.screenplay,
            cinematography_score=review.scores.cinematography,
            general_score=review.scores.general,
            likes_count=review.likes_count or 0,
            flag_count=review.flag_count or 0,
            hidden=bool(review.hidden),
            hidden_by=review.hidden_by,
            created_at=review.created_at,
            updated_at=review.updated_at,
        )


class ReviewerStatisticsSchema(BaseModel):
    user_id: str
    username: str
    total_reviews: int
    total_likes: int
    average_direction: float
    average_screenplay: float
    average_cinematography: float
    average_general: float


class FlagSchema(BaseModel):
    flag_id: str
    reporter_id: str
    review_id: str
    reason: str | None = None
    created_at: datetime


class FlagsResponse(BaseModel):
    review_id: str
    flag_count: int
    flags: list[FlagSchema]


class WatchlistEntrySchema(BaseModel):
    movie_id: str
    watched: bool
    added_at: datetime | None = None
    watched_at: datetime | None = None


class WatchlistSchema(BaseModel):
    watchlist_id: str
    owner_id: str
    name: str
    description: str | None = None
    entries: list[WatchlistEntrySchema] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_watchlist(cls, watchlist) -> WatchlistSchema:
        return cls(
            watchlist_id=str(watchlist.id),
            owner_id=str(watchlist.owner_id),
            name=watchlist.name,
            description=watchlist.description,
            entries=[
                WatchlistEntrySchema(
                    movie_id=str(e.movie_id),
                    watched=bool(e.watched),
                    added_at=e.added_at,
                    watched_at=e.watched_at,
                )
                for e in sorted(watchlist.entries, key=lambda e: (e.added_at is None, e.added_at, str(e.movie_id)))
            ],
            created_at=watchlist.created_at,
            updated_at=watchlist.updated_at,
        )


class PageMeta(BaseModel):
    page: int
    size: int
    total_elements: int
    total_pages: int
    is_last: bool


class WatchedPageResponse(PageMeta):
    items: list[WatchedMovieSchema]


class ReviewPageResponse(PageMeta):
    items: list[ReviewSchema]


class WatchlistPageResponse(PageMeta):
    items: list[WatchlistSchema]


def page_meta(page) -> dict:
    return {
        "page": page.index,
        "size": page.size,
        "total_elements": page.total_elements,
        "total_pages": page.total_pages,
        "is_last": page.is_last,
    }
