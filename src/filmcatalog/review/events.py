"""Domain events for the Review aggregate.

All events are versioned, immutable facts. Visibility changes carry who made
them: ``"System"`` for the auto-hide rule, otherwise the admin's id.
"""

from protean.fields import DateTime, Identifier, Integer, String, Text

from filmcatalog.domain import filmcatalog


@filmcatalog.event(part_of="Review")
class ReviewWritten:
    """A user reviewed a movie they had watched."""

    __version__ = 1

    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    movie_id = Identifier(required=True)
    content = Text(required=True)
    direction_score = Integer(required=True)
    screenplay_score = Integer(required=True)
    cinematography_score = Integer(required=True)
    general_score = Integer(required=True)
    written_at = DateTime(required=True)


@filmcatalog.event(part_of="Review")
class ReviewRevised:
    """The author replaced the content and scores of their review."""

    __version__ = 1

    review_id = Identifier(required=True)
    content = Text(required=True)
    direction_score = Integer(required=True)
    screenplay_score = Integer(required=True)
    cinematography_score = Integer(required=True)
    general_score = Integer(required=True)
    revised_at = DateTime(required=True)


@filmcatalog.event(part_of="Review")
class ReviewLiked:
    __version__ = 1

    review_id = Identifier(required=True)
    liked_by = Identifier(required=True)
    likes_count = Integer(required=True)
    liked_at = DateTime(required=True)


@filmcatalog.event(part_of="Review")
class ReviewHidden:
    """The review was hidden, automatically on reaching the flag threshold or by an admin."""

    __version__ = 1

    review_id = Identifier(required=True)
    hidden_by = String(required=True)
    flag_count = Integer(required=True)
    hidden_at = DateTime(required=True)


@filmcatalog.event(part_of="Review")
class ReviewUnhidden:
    """An admin made a hidden review visible again."""

    __version__ = 1

    review_id = Identifier(required=True)
    unhidden_by = Identifier(required=True)
    flag_count = Integer(required=True)
    unhidden_at = DateTime(required=True)


@filmcatalog.event(part_of="Review")
class ReviewRemoved:
    """The review was deleted by its author or an admin, or cascaded from an unwatched movie.

    Flags raised against the review are withdrawn with it. Writing a new review
    for the same pair continues this stream.
    """

    __version__ = 1

    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    movie_id = Identifier(required=True)
    removed_by = Identifier(required=True)
    flags_withdrawn = Integer(required=True)
    removed_at = DateTime(required=True)
