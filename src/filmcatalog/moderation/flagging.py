"""FlagReview — record a flag and apply the auto-hide rule in one unit of work.

Checks run in a fixed order: the reporter and the review must exist, the
reporter must not have flagged this review before, and nobody may flag their
own review. The review's ``flag_count`` is recomputed from the ledger rather
than incremented, and the review is hidden when the count reaches the
threshold while it is visible.
"""

import structlog
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from filmcatalog.directory.lookup import find_user
from filmcatalog.domain import filmcatalog
from filmcatalog.moderation.flag import Flag
from filmcatalog.moderation.policy import auto_hide_threshold
from filmcatalog.review.review import Review, find_review
from filmcatalog.shared.errors import ConflictError, ForbiddenError
from filmcatalog.shared.keys import flag_key

logger = structlog.get_logger(__name__)


@filmcatalog.command(part_of="Flag")
class FlagReview:
    review_id = Identifier(required=True)
    reporter_id = Identifier(required=True)
    reason = String(max_length=500)


@filmcatalog.command_handler(part_of=Flag)
class FlagReviewHandler:
    @handle(FlagReview)
    def flag_review(self, command):
        find_user(command.reporter_id)
        review = find_review(command.review_id)

        flags = current_domain.repository_for(Flag)
        key = flag_key(command.reporter_id, review.review_id)
        if flags.find(key) is not None:
            raise ConflictError({"flag": ["You have already flagged this review"]})

        if review.is_authored_by(command.reporter_id):
            raise ForbiddenError({"flag": ["You cannot flag your own review"]})

        threshold = auto_hide_threshold()
        count = flags.count_for(review.review_id) + 1

        flag = flags.find_stored(key)
        if flag is None:
            flag = Flag.file(
                reporter_id=command.reporter_id,
                review_id=review.review_id,
                reason=command.reason,
                flag_count=count,
            )
        else:
            flag.refile(reason=command.reason, flag_count=count)
        flags.add(flag)

        if review.record_flag(count, threshold):
            logger.warning(
                "Review auto-hidden",
                review_id=str(review.review_id),
                flag_count=count,
                threshold=threshold,
            )
        current_domain.repository_for(Review).add(review)

        return key
