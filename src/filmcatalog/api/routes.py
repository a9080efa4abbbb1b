"""FastAPI routes for the film catalog.

Each route translates between Pydantic schemas (external contract) and
Protean commands (internal domain concepts). Writes go through
``process_exclusively`` keyed by the identity they read and modify.
"""

from fastapi import APIRouter

from filmcatalog.api.schemas import (
    ChangedResponse,
    ContainsResponse,
    CreateReviewRequest,
    CreateWatchlistRequest,
    FlagIdResponse,
    FlagReviewRequest,
    FlagSchema,
    FlagsResponse,
    LikeReviewRequest,
    LikesResponse,
    MarkWatchedRequest,
    ModerationRequest,
    ReviewerStatisticsSchema,
    ReviewIdResponse,
    ReviewPageResponse,
    ReviewSchema,
    StatusResponse,
    UpdateReviewRequest,
    UpdateWatchlistRequest,
    WatchedMovieSchema,
    WatchedPageResponse,
    WatchedResponse,
    WatchKeyResponse,
    WatchlistIdResponse,
    WatchlistMovieRequest,
    WatchlistOwnerRequest,
    WatchlistPageResponse,
    WatchlistSchema,
    page_meta,
)
from filmcatalog.moderation.flagging import FlagReview
from filmcatalog.moderation.queries import flag_count, flags_for_review, list_heavily_flagged
from filmcatalog.moderation.visibility import HideReview, UnhideReview
from filmcatalog.review.editing import UpdateReview
from filmcatalog.review.liking import LikeReview
from filmcatalog.review.queries import get_review, reviewer_statistics, reviews_for_movie, reviews_for_user
from filmcatalog.review.removal import DeleteReview
from filmcatalog.review.submission import CreateReview
from filmcatalog.shared.keys import watch_key
from filmcatalog.shared.locks import process_exclusively
from filmcatalog.shared.paging import PageRequest
from filmcatalog.watch.queries import has_watched, watched_movies
from filmcatalog.watch.tracking import MarkMovieWatched, UnmarkMovieWatched
from filmcatalog.watchlist.entries import (
    AddMovieToWatchlist,
    ClearWatchlist,
    MarkWatchlistMovieWatched,
    RemoveMovieFromWatchlist,
)
from filmcatalog.watchlist.management import CreateWatchlist, DeleteWatchlist, UpdateWatchlist
from filmcatalog.watchlist.queries import contains_movie, get_watchlist, watchlists_for_user

watch_router = APIRouter(prefix="/users", tags=["watched"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])
moderation_router = APIRouter(prefix="/moderation", tags=["moderation"])
watchlist_router = APIRouter(prefix="/watchlists", tags=["watchlists"])


# ---------------------------------------------------------------------------
# Watched movies
# ---------------------------------------------------------------------------
@watch_router.post("/{user_id}/watched", status_code=201, response_model=WatchKeyResponse)
async def mark_movie_watched(user_id: str, body: MarkWatchedRequest) -> WatchKeyResponse:
    """Mark a movie as watched by the user."""
    command = MarkMovieWatched(user_id=user_id, movie_id=body.movie_id)
    key = process_exclusively(command, watch_key(user_id, body.movie_id))
    return WatchKeyResponse(watch_key=key)


@watch_router.delete("/{user_id}/watched/{movie_id}", response_model=StatusResponse)
async def unmark_movie_watched(user_id: str, movie_id: str) -> StatusResponse:
    """Remove a watched record, together with the review written for it."""
    command = UnmarkMovieWatched(user_id=user_id, movie_id=movie_id)
    process_exclusively(command, watch_key(user_id, movie_id))
    return StatusResponse()


@watch_router.get("/{user_id}/watched", response_model=WatchedPageResponse)
async def list_watched_movies(
    user_id: str, page: int = 0, size: int = 20, sort: str | None = None
) -> WatchedPageResponse:
    result = watched_movies(user_id, PageRequest(index=page, size=size, sort=sort))
    return WatchedPageResponse(
        items=[WatchedMovieSchema.from_record(r) for r in result.items],
        **page_meta(result),
    )


@watch_router.get("/{user_id}/watched/{movie_id}", response_model=WatchedResponse)
async def check_movie_watched(user_id: str, movie_id: str) -> WatchedResponse:
    return WatchedResponse(watched=has_watched(user_id, movie_id))


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
@review_router.post("", status_code=201, response_model=ReviewIdResponse)
async def create_review(body: CreateReviewRequest) -> ReviewIdResponse:
    """Write a review for a watched movie."""
    command = CreateReview(
        user_id=body.user_id,
        movie_id=body.movie_id,
        content=body.content,
        direction_score=body.direction_score,
        screenplay_score=body.screenplay_score,
        cinematography_score=body.cinematography_score,
        general_score=body.general_score,
    )
    review_id = process_exclusively(command, watch_key(body.user_id, body.movie_id))
    return ReviewIdResponse(review_id=review_id)


@review_router.get("/movie/{movie_id}", response_model=ReviewPageResponse)
async def list_movie_reviews(
    movie_id: str,
    viewer_id: str | None = None,
    page: int = 0,
    size: int = 20,
    sort: str | None = None,
) -> ReviewPageResponse:
    result = reviews_for_movie(movie_id, PageRequest(index=page, size=size, sort=sort), viewer_id=viewer_id)
    return ReviewPageResponse(items=[ReviewSchema.from_review(r) for r in result.items], **page_meta(result))


@review_router.get("/user/{user_id}", response_model=ReviewPageResponse)
async def list_user_reviews(
    user_id: str,
    viewer_id: str | None = None,
    page: int = 0,
    size: int = 20,
    sort: str | None = None,
) -> ReviewPageResponse:
    result = reviews_for_user(user_id, PageRequest(index=page, size=size, sort=sort), viewer_id=viewer_id)
    return ReviewPageResponse(items=[ReviewSchema.from_review(r) for r in result.items], **page_meta(result))


@review_router.get("/user/{user_id}/statistics", response_model=ReviewerStatisticsSchema)
async def get_reviewer_statistics(user_id: str) -> ReviewerStatisticsSchema:
    stats = reviewer_statistics(user_id)
    return ReviewerStatisticsSchema(
        user_id=stats.user_id,
        username=stats.username,
        total_reviews=stats.total_reviews,
        total_likes=stats.total_likes,
        average_direction=stats.average_direction,
        average_screenplay=stats.average_screenplay,
        average_cinematography=stats.average_cinematography,
        average_general=stats.average_general,
    )


@review_router.get("/{review_id}", response_model=ReviewSchema)
async def read_review(review_id: str, viewer_id: str | None = None) -> ReviewSchema:
    return ReviewSchema.from_review(get_review(review_id, viewer_id=viewer_id))


@review_router.put("/{review_id}", response_model=StatusResponse)
async def update_review(review_id: str, body: UpdateReviewRequest) -> StatusResponse:
    """Replace the content and scores of a review. Author only."""
    command = UpdateReview(
        review_id=review_id,
        user_id=body.user_id,
        content=body.content,
        direction_score=body.direction_score,
        screenplay_score=body.screenplay_score,
        cinematography_score=body.cinematography_score,
        general_score=body.general_score,
    )
    process_exclusively(command, review_id)
    return StatusResponse()


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str, user_id: str) -> StatusResponse:
    """Delete a review and its flags. Author or admin."""
    process_exclusively(DeleteReview(review_id=review_id, user_id=user_id), review_id)
    return StatusResponse()


@review_router.post("/{review_id}/likes", status_code=201, response_model=LikesResponse)
async def like_review(review_id: str, body: LikeReviewRequest) -> LikesResponse:
    likes = process_exclusively(LikeReview(review_id=review_id, user_id=body.user_id), review_id)
    return LikesResponse(likes_count=likes)


# ---------------------------------------------------------------------------
# Moderation
# ---------------------------------------------------------------------------
@moderation_router.post("/reviews/{review_id}/flags", status_code=201, response_model=FlagIdResponse)
async def flag_review(review_id: str, body: FlagReviewRequest) -> FlagIdResponse:
    """Flag a review. Hides it once the flag count reaches the threshold."""
    command = FlagReview(review_id=review_id, reporter_id=body.reporter_id, reason=body.reason)
    flag_id = process_exclusively(command, review_id)
    return FlagIdResponse(flag_id=flag_id)


@moderation_router.get("/reviews/{review_id}/flags", response_model=FlagsResponse)
async def list_review_flags(review_id: str) -> FlagsResponse:
    flags = flags_for_review(review_id)
    return FlagsResponse(
        review_id=review_id,
        flag_count=flag_count(review_id),
        flags=[
            FlagSchema(
                flag_id=str(f.flag_id),
                reporter_id=str(f.reporter_id),
                review_id=str(f.review_id),
                reason=f.reason,
                created_at=f.created_at,
            )
            for f in flags
        ],
    )


@moderation_router.put("/reviews/{review_id}/hide", response_model=StatusResponse)
async def hide_review(review_id: str, body: ModerationRequest) -> StatusResponse:
    process_exclusively(HideReview(review_id=review_id, moderator_id=body.moderator_id), review_id)
    return StatusResponse()


@moderation_router.put("/reviews/{review_id}/unhide", response_model=StatusResponse)
async def unhide_review(review_id: str, body: ModerationRequest) -> StatusResponse:
    process_exclusively(UnhideReview(review_id=review_id, moderator_id=body.moderator_id), review_id)
    return StatusResponse()


@moderation_router.get("/flagged", response_model=ReviewPageResponse)
async def list_flagged_reviews(min_flags: int = 1, page: int = 0, size: int = 20) -> ReviewPageResponse:
    """Reviews with at least ``min_flags`` flags, most flagged first."""
    result = list_heavily_flagged(min_flags, PageRequest(index=page, size=size))
    return ReviewPageResponse(items=[ReviewSchema.from_review(r) for r in result.items], **page_meta(result))


# ---------------------------------------------------------------------------
# Watchlists
# ---------------------------------------------------------------------------
@watchlist_router.post("", status_code=201, response_model=WatchlistIdResponse)
async def create_watchlist(body: CreateWatchlistRequest) -> WatchlistIdResponse:
    command = CreateWatchlist(owner_id=body.owner_id, name=body.name, description=body.description)
    watchlist_id = process_exclusively(command)
    return WatchlistIdResponse(watchlist_id=watchlist_id)


@watchlist_router.get("/owner/{owner_id}", response_model=WatchlistPageResponse)
async def list_owner_watchlists(
    owner_id: str, page: int = 0, size: int = 20, sort: str | None = None
) -> WatchlistPageResponse:
    result = watchlists_for_user(owner_id, PageRequest(index=page, size=size, sort=sort))
    return WatchlistPageResponse(
        items=[WatchlistSchema.from_watchlist(w) for w in result.items],
        **page_meta(result),
    )


@watchlist_router.get("/{watchlist_id}", response_model=WatchlistSchema)
async def read_watchlist(watchlist_id: str) -> WatchlistSchema:
    return WatchlistSchema.from_watchlist(get_watchlist(watchlist_id))


@watchlist_router.put("/{watchlist_id}", response_model=StatusResponse)
async def update_watchlist(watchlist_id: str, body: UpdateWatchlistRequest) -> StatusResponse:
    command = UpdateWatchlist(
        watchlist_id=watchlist_id,
        owner_id=body.owner_id,
        name=body.name,
        description=body.description,
    )
    process_exclusively(command, watchlist_id)
    return StatusResponse()


@watchlist_router.delete("/{watchlist_id}", response_model=StatusResponse)
async def delete_watchlist(watchlist_id: str, owner_id: str) -> StatusResponse:
    process_exclusively(DeleteWatchlist(watchlist_id=watchlist_id, owner_id=owner_id), watchlist_id)
    return StatusResponse()


@watchlist_router.post("/{watchlist_id}/movies", status_code=201, response_model=ChangedResponse)
async def add_movie_to_watchlist(watchlist_id: str, body: WatchlistMovieRequest) -> ChangedResponse:
    """Add a movie to the watchlist. Adding a listed movie changes nothing."""
    command = AddMovieToWatchlist(watchlist_id=watchlist_id, owner_id=body.owner_id, movie_id=body.movie_id)
    return ChangedResponse(changed=process_exclusively(command, watchlist_id))


@watchlist_router.get("/{watchlist_id}/movies/{movie_id}", response_model=ContainsResponse)
async def watchlist_contains_movie(watchlist_id: str, movie_id: str) -> ContainsResponse:
    return ContainsResponse(contains=contains_movie(watchlist_id, movie_id))


@watchlist_router.delete("/{watchlist_id}/movies/{movie_id}", response_model=ChangedResponse)
async def remove_movie_from_watchlist(watchlist_id: str, movie_id: str, owner_id: str) -> ChangedResponse:
    command = RemoveMovieFromWatchlist(watchlist_id=watchlist_id, owner_id=owner_id, movie_id=movie_id)
    return ChangedResponse(changed=process_exclusively(command, watchlist_id))


@watchlist_router.delete("/{watchlist_id}/movies", response_model=StatusResponse)
async def clear_watchlist(watchlist_id: str, owner_id: str) -> StatusResponse:
    process_exclusively(ClearWatchlist(watchlist_id=watchlist_id, owner_id=owner_id), watchlist_id)
    return StatusResponse()


@watchlist_router.put("/{watchlist_id}/movies/{movie_id}/watched", response_model=StatusResponse)
async def mark_watchlist_movie_watched(
    watchlist_id: str, movie_id: str, body: WatchlistOwnerRequest
) -> StatusResponse:
    """Mark a listed movie as watched. Also records it as watched by the owner."""
    command = MarkWatchlistMovieWatched(watchlist_id=watchlist_id, owner_id=body.owner_id, movie_id=movie_id)
    process_exclusively(command, watchlist_id, watch_key(body.owner_id, movie_id))
    return StatusResponse()
