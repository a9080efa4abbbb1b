"""DeleteReview — remove a review and withdraw its flags.

The author or an admin may delete. The watched record the review was written
for is kept, so the user can review the movie again.
"""

import structlog
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from filmcatalog.directory.lookup import is_admin
from filmcatalog.domain import filmcatalog
from filmcatalog.moderation.flag import Flag
from filmcatalog.review.review import Review, find_review
from filmcatalog.shared.errors import ForbiddenError

logger = structlog.get_logger(__name__)


@filmcatalog.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)


def remove_review(review, removed_by) -> int:
    """Mark ``review`` removed and withdraw every flag raised against it. Returns the number of flags withdrawn."""
    withdrawn = current_domain.repository_for(Flag).withdraw_for_review(review.review_id)
    review.remove(removed_by=removed_by, flags_withdrawn=withdrawn)
    current_domain.repository_for(Review).add(review)
    return withdrawn


@filmcatalog.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        review = find_review(command.review_id)

        by_author = review.is_authored_by(command.user_id)
        if not by_author and not is_admin(command.user_id):
            raise ForbiddenError({"review": ["Only the author or an admin can delete this review"]})

        flags_withdrawn = remove_review(review, removed_by=command.user_id)
        logger.info(
            "Review deleted",
            review_id=str(review.review_id),
            deleted_by=str(command.user_id),
            by_author=by_author,
            flags_withdrawn=flags_withdrawn,
        )
