"""Domain events for the Watchlist aggregate."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from filmcatalog.domain import filmcatalog


@filmcatalog.event(part_of="Watchlist")
class WatchlistCreated:
    __version__ = 1

    watchlist_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    name = String(required=True)
    description = Text()
    created_at = DateTime(required=True)


@filmcatalog.event(part_of="Watchlist")
class WatchlistDetailsUpdated:
    """The owner renamed the watchlist or changed its description."""

    __version__ = 1

    watchlist_id = Identifier(required=True)
    name = String(required=True)
    description = Text()


@filmcatalog.event(part_of="Watchlist")
class MovieAddedToWatchlist:
    __version__ = 1

    watchlist_id = Identifier(required=True)
    movie_id = Identifier(required=True)
    added_at = DateTime(required=True)


@filmcatalog.event(part_of="Watchlist")
class MovieRemovedFromWatchlist:
    __version__ = 1

    watchlist_id = Identifier(required=True)
    movie_id = Identifier(required=True)


@filmcatalog.event(part_of="Watchlist")
class WatchlistCleared:
    """Every entry was removed from the watchlist."""

    __version__ = 1

    watchlist_id = Identifier(required=True)
    entries_removed = Integer(required=True)


@filmcatalog.event(part_of="Watchlist")
class WatchlistMovieWatched:
    """An entry of the watchlist was marked as watched. Scoped to this list only."""

    __version__ = 1

    watchlist_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    movie_id = Identifier(required=True)
    watched_at = DateTime(required=True)
