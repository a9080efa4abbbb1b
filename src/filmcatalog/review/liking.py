"""LikeReview — any existing user can like any review, including their own.

Each call adds exactly one like. Concurrent likes on the same review must be
processed under the review's key lock so no increment is lost.
"""

from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from filmcatalog.directory.lookup import find_user
from filmcatalog.domain import filmcatalog
from filmcatalog.review.review import Review, find_review


@filmcatalog.command(part_of="Review")
class LikeReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)


@filmcatalog.command_handler(part_of=Review)
class LikeReviewHandler:
    @handle(LikeReview)
    def like_review(self, command):
        find_user(command.user_id)
        review = find_review(command.review_id)

        review.like(command.user_id)

        current_domain.repository_for(Review).add(review)
        return review.likes_count
