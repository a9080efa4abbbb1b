"""CreateReview — write a review for a watched movie.

A review exists only for a (user, movie) pair with a watched record, and at
most once per pair: the review takes the watch key as its identity. A pair
whose earlier review was deleted gets the new review written over the removed
one.
"""

from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from filmcatalog.directory.lookup import find_movie, find_user
from filmcatalog.domain import filmcatalog
from filmcatalog.review.review import Review
from filmcatalog.shared.errors import ConflictError, PreconditionFailedError
from filmcatalog.shared.keys import watch_key
from filmcatalog.watch.queries import has_watched


@filmcatalog.command(part_of="Review")
class CreateReview:
    user_id = Identifier(required=True)
    movie_id = Identifier(required=True)
    content = Text(required=True)
    direction_score = Integer(required=True)
    screenplay_score = Integer(required=True)
    cinematography_score = Integer(required=True)
    general_score = Integer(required=True)


@filmcatalog.command_handler(part_of=Review)
class CreateReviewHandler:
    @handle(CreateReview)
    def create_review(self, command):
        find_user(command.user_id)
        find_movie(command.movie_id)

        if not has_watched(command.user_id, command.movie_id):
            raise PreconditionFailedError({"review": ["Movie not watched"]})

        repo = current_domain.repository_for(Review)
        key = watch_key(command.user_id, command.movie_id)
        if repo.find(key) is not None:
            raise ConflictError({"review": ["Review already exists"]})

        review = repo.find_stored(key)
        if review is None:
            review = Review.write(
                user_id=command.user_id,
                movie_id=command.movie_id,
                content=command.content,
                direction=command.direction_score,
                screenplay=command.screenplay_score,
                cinematography=command.cinematography_score,
                general=command.general_score,
            )
        else:
            review.rewrite(
                content=command.content,
                direction=command.direction_score,
                screenplay=command.screenplay_score,
                cinematography=command.cinematography_score,
                general=command.general_score,
            )
        repo.add(review)
        return str(review.review_id)
