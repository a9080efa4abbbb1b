"""Domain events for the flag ledger."""

from protean.fields import DateTime, Identifier, Integer, String

from filmcatalog.domain import filmcatalog


@filmcatalog.event(part_of="Flag")
class ReviewFlagged:
    """A user flagged someone else's review. ``flag_count`` includes this flag."""

    __version__ = 1

    flag_id = Identifier(required=True)
    review_id = Identifier(required=True)
    reporter_id = Identifier(required=True)
    reason = String()
    flag_count = Integer(required=True)
    flagged_at = DateTime(required=True)
