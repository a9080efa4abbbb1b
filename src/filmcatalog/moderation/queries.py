"""Read side of the moderation engine."""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from filmcatalog.moderation.flag import Flag
from filmcatalog.review.review import Review, find_review
from filmcatalog.shared.paging import Page, PageRequest, order_items


def list_heavily_flagged(min_flags: int, page: PageRequest | None = None) -> Page:
    """Reviews with at least ``min_flags`` flags, most flagged first. Hidden reviews included."""
    if min_flags is None or min_flags < 0:
        raise ValidationError({"min_flags": ["Minimum flag count cannot be negative"]})
    page = page or PageRequest()

    reviews = current_domain.repository_for(Review).flagged_at_least(min_flags)
    return Page.slice(order_items(reviews, "-flag_count", {"flag_count"}, "-flag_count", "review_id"), page)


def flags_for_review(review_id) -> list[Flag]:
    find_review(review_id)
    return current_domain.repository_for(Flag).for_review(review_id)


def flag_count(review_id) -> int:
    find_review(review_id)
    return current_domain.repository_for(Flag).count_for(review_id)
