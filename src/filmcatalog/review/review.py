"""Review aggregate — a user's scored critique of a movie they watched.

The review has no identity of its own: ``review_id`` is the watch key of the
(user, movie) watched record it was written for, which makes the review
existence-dependent on that record and unique per pair.

Visibility state machine:
    VISIBLE → HIDDEN  (flag threshold reached, or admin hide)
    HIDDEN  → VISIBLE (admin unhide only)

Unhiding keeps ``flag_count`` as is. The threshold rule only runs when a new
flag is recorded, so the next distinct flag hides the review again.

Deleting a review marks it removed. The row and its event stream stay keyed
by the (user, movie) pair, and a new review for the pair is written over the
removed one with fresh counters and visibility.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text, ValueObject
from protean.utils.globals import current_domain

from filmcatalog.domain import filmcatalog
from filmcatalog.review.events import (
    ReviewHidden,
    ReviewLiked,
    ReviewRemoved,
    ReviewRevised,
    ReviewUnhidden,
    ReviewWritten,
)
from filmcatalog.shared.errors import InvalidStateError, not_found
from filmcatalog.shared.keys import WatchKey
from filmcatalog.shared.paging import fetch_all

SYSTEM_MODERATOR = "System"

MIN_SCORE = 1
MAX_SCORE = 5


class ReviewVisibility(Enum):
    VISIBLE = "Visible"
    HIDDEN = "Hidden"


_VALID_TRANSITIONS = {
    ReviewVisibility.VISIBLE: {ReviewVisibility.HIDDEN},
    ReviewVisibility.HIDDEN: {ReviewVisibility.VISIBLE},
}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@filmcatalog.value_object(part_of="Review")
class Scores:
    """The four sub-scores of a review, each from 1 to 5."""

    direction = Integer(required=True)
    screenplay = Integer(required=True)
    cinematography = Integer(required=True)
    general = Integer(required=True)

    @invariant.post
    def scores_must_be_in_range(self):
        errors = {}
        for name in ("direction", "screenplay", "cinematography", "general"):
            value = getattr(self, name)
            if value is not None and not MIN_SCORE <= value <= MAX_SCORE:
                errors[name] = [f"Score must be between {MIN_SCORE} and {MAX_SCORE}"]
        if errors:
            raise ValidationError(errors)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@filmcatalog.aggregate
class Review:
    review_id = Identifier(identifier=True, required=True)
    user_id = Identifier(required=True)
    movie_id = Identifier(required=True)

    content = Text(required=True)
    scores = ValueObject(Scores, required=True)

    likes_count = Integer(default=0)
    flag_count = Integer(default=0)

    hidden = Boolean(default=False)
    hidden_by = String(max_length=100)
    hidden_at = DateTime()

    removed = Boolean(default=False)
    removed_by = Identifier()
    removed_at = DateTime()

    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def content_must_not_be_blank(self):
        if self.content is not None and len(self.content.strip()) == 0:
            raise ValidationError({"content": ["Review content cannot be blank"]})

    @invariant.post
    def identity_must_match_watch_key(self):
        if self.user_id is None or self.movie_id is None:
            return
        expected = WatchKey(user_id=str(self.user_id), movie_id=str(self.movie_id)).value
        if str(self.review_id) != expected:
            raise ValidationError({"review_id": ["Review identity must be the watch key of its author and movie"]})

    @invariant.post
    def counters_cannot_be_negative(self):
        if (self.likes_count or 0) < 0 or (self.flag_count or 0) < 0:
            raise ValidationError({"counters": ["Likes and flags cannot be negative"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def write(cls, user_id, movie_id, content, direction, screenplay, cinematography, general):
        """Write a review for a watched (user, movie) pair."""
        now = datetime.now(UTC)
        key = WatchKey(user_id=str(user_id), movie_id=str(movie_id)).value

        review = cls(
            review_id=key,
            user_id=str(user_id),
            movie_id=str(movie_id),
            content=content,
            scores=Scores(
                direction=direction,
                screenplay=screenplay,
                cinematography=cinematography,
                general=general,
            ),
            likes_count=0,
            flag_count=0,
            hidden=False,
            created_at=now,
            updated_at=now,
        )
        review._written(now)

        return review

    def rewrite(self, content, direction, screenplay, cinematography, general):
        """Write a new review over a removed one for the same pair."""
        if not self.removed:
            raise InvalidStateError({"review": ["Review already exists"]})

        now = datetime.now(UTC)
        scores = Scores(
            direction=direction,
            screenplay=screenplay,
            cinematography=cinematography,
            general=general,
        )

        with atomic_change(self):
            self.content = content
            self.scores = scores
            self.likes_count = 0
            self.flag_count = 0
            self.hidden = False
            self.hidden_by = None
            self.hidden_at = None
            self.removed = False
            self.removed_by = None
            self.removed_at = None
            self.created_at = now
            self.updated_at = now

        self._written(now)

    def _written(self, now):
        self.raise_(
            ReviewWritten(
                review_id=str(self.review_id),
                user_id=str(self.user_id),
                movie_id=str(self.movie_id),
                content=self.content,
                direction_score=self.scores.direction,
                screenplay_score=self.scores.screenplay,
                cinematography_score=self.scores.cinematography,
                general_score=self.scores.general,
                written_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def visibility(self) -> ReviewVisibility:
        return ReviewVisibility.HIDDEN if self.hidden else ReviewVisibility.VISIBLE

    def is_authored_by(self, user_id) -> bool:
        return str(self.user_id) == str(user_id)

    # -------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------
    def revise(self, content, direction, screenplay, cinematography, general):
        """Replace content and scores. Likes, flags and visibility are untouched."""
        now = datetime.now(UTC)
        scores = Scores(
            direction=direction,
            screenplay=screenplay,
            cinematography=cinematography,
            general=general,
        )

        with atomic_change(self):
            self.content = content
            self.scores = scores
            self.updated_at = now

        self.raise_(
            ReviewRevised(
                review_id=str(self.review_id),
                content=content,
                direction_score=direction,
                screenplay_score=screenplay,
                cinematography_score=cinematography,
                general_score=general,
                revised_at=now,
            )
        )

    def like(self, user_id):
        now = datetime.now(UTC)
        self.likes_count = (self.likes_count or 0) + 1
        self.updated_at = now

        self.raise_(
            ReviewLiked(
                review_id=str(self.review_id),
                liked_by=str(user_id),
                likes_count=self.likes_count,
                liked_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Moderation
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target):
        current = self.visibility
        if target not in _VALID_TRANSITIONS.get(current, set()):
            raise InvalidStateError({"hidden": [f"Review is already {current.value.lower()}"]})

    def record_flag(self, flag_count, threshold) -> bool:
        """Store the ledger's flag count and apply the auto-hide rule.

        Returns True when this flag hid the review.
        """
        self.flag_count = flag_count
        self.updated_at = datetime.now(UTC)

        if flag_count >= threshold and not self.hidden:
            self.hide(hidden_by=SYSTEM_MODERATOR)
            return True
        return False

    def hide(self, hidden_by):
        self._assert_can_transition(ReviewVisibility.HIDDEN)

        now = datetime.now(UTC)
        self.hidden = True
        self.hidden_by = str(hidden_by)
        self.hidden_at = now
        self.updated_at = now

        self.raise_(
            ReviewHidden(
                review_id=str(self.review_id),
                hidden_by=str(hidden_by),
                flag_count=self.flag_count or 0,
                hidden_at=now,
            )
        )

    def unhide(self, moderator_id):
        self._assert_can_transition(ReviewVisibility.VISIBLE)

        now = datetime.now(UTC)
        self.hidden = False
        self.hidden_by = None
        self.hidden_at = None
        self.updated_at = now

        self.raise_(
            ReviewUnhidden(
                review_id=str(self.review_id),
                unhidden_by=str(moderator_id),
                flag_count=self.flag_count or 0,
                unhidden_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Removal
    # -------------------------------------------------------------------
    def remove(self, removed_by, flags_withdrawn=0):
        if self.removed:
            raise InvalidStateError({"review": ["Review is already removed"]})

        now = datetime.now(UTC)
        self.removed = True
        self.removed_by = str(removed_by)
        self.removed_at = now
        self.updated_at = now

        self.raise_(
            ReviewRemoved(
                review_id=str(self.review_id),
                user_id=str(self.user_id),
                movie_id=str(self.movie_id),
                removed_by=str(removed_by),
                flags_withdrawn=flags_withdrawn,
                removed_at=now,
            )
        )


@filmcatalog.repository(part_of=Review)
class ReviewRepository:
    def find(self, review_id):
        """The live review with this id, or None."""
        return self._dao.query.filter(review_id=str(review_id), removed=False).all().first

    def find_stored(self, review_id):
        """The stored review with this id, removed or not."""
        return self._dao.query.filter(review_id=str(review_id)).all().first

    def for_movie(self, movie_id, include_hidden=False):
        return self._visible(fetch_all(self._dao.query.filter(movie_id=str(movie_id), removed=False)), include_hidden)

    def for_user(self, user_id, include_hidden=False):
        return self._visible(fetch_all(self._dao.query.filter(user_id=str(user_id), removed=False)), include_hidden)

    def flagged_at_least(self, min_flags):
        return fetch_all(self._dao.query.filter(flag_count__gte=min_flags, removed=False))

    @staticmethod
    def _visible(reviews, include_hidden):
        return reviews if include_hidden else [r for r in reviews if not r.hidden]


def find_review(review_id) -> Review:
    try:
        review = current_domain.repository_for(Review).get(str(review_id))
    except ObjectNotFoundError as exc:
        raise not_found("review", review_id) from exc

    if review.removed:
        raise not_found("review", review_id)
    return review
