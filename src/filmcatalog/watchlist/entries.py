"""Watchlist entry commands.

Adding is idempotent and removing an absent movie is a no-op. Marking an entry
watched is list-scoped, and also records the movie as watched for the owner
(unless it already is) so they can go on to review it. Nothing flows back:
the watch tracker never changes list entries.
"""

import structlog
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from filmcatalog.directory.lookup import find_movie
from filmcatalog.domain import filmcatalog
from filmcatalog.watch.tracking import ensure_watched
from filmcatalog.watchlist.lookup import find_owned_watchlist
from filmcatalog.watchlist.watchlist import Watchlist

logger = structlog.get_logger(__name__)


@filmcatalog.command(part_of="Watchlist")
class AddMovieToWatchlist:
    watchlist_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    movie_id = Identifier(required=True)


@filmcatalog.command(part_of="Watchlist")
class RemoveMovieFromWatchlist:
    watchlist_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    movie_id = Identifier(required=True)


@filmcatalog.command(part_of="Watchlist")
class ClearWatchlist:
    watchlist_id = Identifier(required=True)
    owner_id = Identifier(required=True)


@filmcatalog.command(part_of="Watchlist")
class MarkWatchlistMovieWatched:
    watchlist_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    movie_id = Identifier(required=True)


@filmcatalog.command_handler(part_of=Watchlist)
class WatchlistEntriesHandler:
    @handle(AddMovieToWatchlist)
    def add_movie(self, command):
        watchlist = find_owned_watchlist(command.watchlist_id, command.owner_id)
        find_movie(command.movie_id)

        added = watchlist.add_movie(command.movie_id)
        current_domain.repository_for(Watchlist).add(watchlist)
        return added

    @handle(RemoveMovieFromWatchlist)
    def remove_movie(self, command):
        watchlist = find_owned_watchlist(command.watchlist_id, command.owner_id)

        removed = watchlist.remove_movie(command.movie_id)
        current_domain.repository_for(Watchlist).add(watchlist)
        return removed

    @handle(ClearWatchlist)
    def clear_watchlist(self, command):
        watchlist = find_owned_watchlist(command.watchlist_id, command.owner_id)

        removed = watchlist.remove_all()
        current_domain.repository_for(Watchlist).add(watchlist)
        return removed

    @handle(MarkWatchlistMovieWatched)
    def mark_movie_watched(self, command):
        watchlist = find_owned_watchlist(command.watchlist_id, command.owner_id)

        watchlist.mark_watched(command.movie_id)
        current_domain.repository_for(Watchlist).add(watchlist)

        if ensure_watched(watchlist.owner_id, command.movie_id):
            logger.info(
                "Movie recorded as watched from watchlist",
                watchlist_id=str(watchlist.id),
                user_id=str(watchlist.owner_id),
                movie_id=str(command.movie_id),
            )
