"""Read side of the review store.

Hidden reviews are left out of listings unless the viewer is an admin. A
single hidden review can still be fetched by its author or an admin.
"""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from filmcatalog.directory.lookup import find_movie, find_user, is_admin
from filmcatalog.review.review import Review, find_review
from filmcatalog.shared.errors import not_found
from filmcatalog.shared.paging import Page, PageRequest, order_items

REVIEW_SORT_KEYS = {"created_at", "updated_at", "likes_count"}
DEFAULT_REVIEW_SORT = "-created_at"


@dataclass(frozen=True)
class ReviewerStatistics:
    """Totals over all of a user's reviews, hidden ones included."""

    user_id: str
    username: str
    total_reviews: int
    total_likes: int
    average_direction: float
    average_screenplay: float
    average_cinematography: float
    average_general: float

    @property
    def averages(self) -> list[float]:
        return [
            self.average_direction,
            self.average_screenplay,
            self.average_cinematography,
            self.average_general,
        ]


def get_review(review_id, viewer_id=None) -> Review:
    review = find_review(review_id)
    if review.hidden and not (review.is_authored_by(viewer_id) or is_admin(viewer_id)):
        raise not_found("review", review_id)
    return review


def reviews_for_movie(movie_id, page: PageRequest | None = None, viewer_id=None) -> Page:
    page = page or PageRequest()
    find_movie(movie_id)

    reviews = current_domain.repository_for(Review).for_movie(movie_id, include_hidden=is_admin(viewer_id))
    return Page.slice(order_items(reviews, page.sort, REVIEW_SORT_KEYS, DEFAULT_REVIEW_SORT, "review_id"), page)


def reviews_for_user(user_id, page: PageRequest | None = None, viewer_id=None) -> Page:
    page = page or PageRequest()
    find_user(user_id)

    reviews = current_domain.repository_for(Review).for_user(user_id, include_hidden=is_admin(viewer_id))
    return Page.slice(order_items(reviews, page.sort, REVIEW_SORT_KEYS, DEFAULT_REVIEW_SORT, "review_id"), page)


def _average(values) -> float:
    return round(sum(values) / len(values), 2) if values else 0.0


def reviewer_statistics(user_id) -> ReviewerStatistics:
    user = find_user(user_id)
    reviews = current_domain.repository_for(Review).for_user(user_id, include_hidden=True)

    return ReviewerStatistics(
        user_id=str(user.id),
        username=user.username,
        total_reviews=len(reviews),
        total_likes=sum(r.likes_count or 0 for r in reviews),
        average_direction=_average([r.scores.direction for r in reviews]),
        average_screenplay=_average([r.scores.screenplay for r in reviews]),
        average_cinematography=_average([r.scores.cinematography for r in reviews]),
        average_general=_average([r.scores.general for r in reviews]),
    )
