"""HideReview / UnhideReview — admin overrides of review visibility.

Hiding works at any flag count. Unhiding keeps the flag count, so the next
distinct flag on a review at or above the threshold hides it again.
"""

import structlog
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from filmcatalog.directory.lookup import require_admin
from filmcatalog.domain import filmcatalog
from filmcatalog.review.review import Review, find_review

logger = structlog.get_logger(__name__)


@filmcatalog.command(part_of="Review")
class HideReview:
    review_id = Identifier(required=True)
    moderator_id = Identifier(required=True)


@filmcatalog.command(part_of="Review")
class UnhideReview:
    review_id = Identifier(required=True)
    moderator_id = Identifier(required=True)


@filmcatalog.command_handler(part_of=Review)
class ReviewVisibilityHandler:
    @handle(HideReview)
    def hide_review(self, command):
        require_admin(command.moderator_id, "hide reviews")
        review = find_review(command.review_id)

        review.hide(hidden_by=command.moderator_id)

        current_domain.repository_for(Review).add(review)
        logger.info("Review hidden by admin", review_id=str(review.review_id), moderator_id=str(command.moderator_id))

    @handle(UnhideReview)
    def unhide_review(self, command):
        require_admin(command.moderator_id, "unhide reviews")
        review = find_review(command.review_id)

        review.unhide(moderator_id=command.moderator_id)

        current_domain.repository_for(Review).add(review)
        logger.info(
            "Review unhidden by admin",
            review_id=str(review.review_id),
            moderator_id=str(command.moderator_id),
            flag_count=review.flag_count,
        )
