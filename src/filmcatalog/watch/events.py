"""Domain events for the WatchedRecord aggregate."""

from protean.fields import DateTime, Identifier, String

from filmcatalog.domain import filmcatalog


@filmcatalog.event(part_of="WatchedRecord")
class MovieWatched:
    """A user recorded that they watched a movie."""

    __version__ = 1

    watch_key = Identifier(required=True)
    user_id = Identifier(required=True)
    movie_id = Identifier(required=True)
    source = String(required=True)  # "Direct" or "Watchlist"
    watched_at = DateTime(required=True)


@filmcatalog.event(part_of="WatchedRecord")
class MovieUnwatched:
    """A user withdrew their watched record. A review for the pair is removed with it."""

    __version__ = 1

    watch_key = Identifier(required=True)
    user_id = Identifier(required=True)
    movie_id = Identifier(required=True)
    unwatched_at = DateTime(required=True)
