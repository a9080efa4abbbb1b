"""UpdateReview — the author replaces content and scores of their review."""

from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from filmcatalog.domain import filmcatalog
from filmcatalog.review.review import Review, find_review
from filmcatalog.shared.errors import ForbiddenError


@filmcatalog.command(part_of="Review")
class UpdateReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    content = Text(required=True)
    direction_score = Integer(required=True)
    screenplay_score = Integer(required=True)
    cinematography_score = Integer(required=True)
    general_score = Integer(required=True)


@filmcatalog.command_handler(part_of=Review)
class UpdateReviewHandler:
    @handle(UpdateReview)
    def update_review(self, command):
        review = find_review(command.review_id)
        if not review.is_authored_by(command.user_id):
            raise ForbiddenError({"review": ["Only the author can update this review"]})

        review.revise(
            content=command.content,
            direction=command.direction_score,
            screenplay=command.screenplay_score,
            cinematography=command.cinematography_score,
            general=command.general_score,
        )

        current_domain.repository_for(Review).add(review)
