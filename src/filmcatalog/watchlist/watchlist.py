"""Watchlist aggregate — a user's named list of movies to watch.

The watchlist owns its entries; an entry never exists outside its list. Each
entry moves one way from not watched to watched, and only within this list.
Removing a movie and adding it back starts it over as not watched.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, String, Text

from filmcatalog.domain import filmcatalog
from filmcatalog.shared.errors import ConflictError, PreconditionFailedError
from filmcatalog.shared.paging import fetch_all
from filmcatalog.watchlist.events import (
    MovieAddedToWatchlist,
    MovieRemovedFromWatchlist,
    WatchlistCleared,
    WatchlistCreated,
    WatchlistDetailsUpdated,
    WatchlistMovieWatched,
)

DEFAULT_WATCHLIST_NAME = "Watchlist"


@filmcatalog.entity(part_of="Watchlist")
class WatchlistEntry:
    movie_id = Identifier(required=True)
    watched = Boolean(default=False)
    added_at = DateTime()
    watched_at = DateTime()


@filmcatalog.aggregate
class Watchlist:
    owner_id = Identifier(required=True)
    name = String(max_length=100, default=DEFAULT_WATCHLIST_NAME)
    description = Text()
    entries = HasMany(WatchlistEntry)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and len(self.name.strip()) == 0:
            raise ValidationError({"name": ["Watchlist name cannot be blank"]})

    @invariant.post
    def movies_must_be_unique(self):
        movie_ids = [str(e.movie_id) for e in self.entries or []]
        if len(movie_ids) != len(set(movie_ids)):
            raise ValidationError({"entries": ["A movie can appear only once in a watchlist"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, owner_id, name=None, description=None):
        now = datetime.now(UTC)
        watchlist = cls(
            owner_id=str(owner_id),
            name=name or DEFAULT_WATCHLIST_NAME,
            description=description,
            created_at=now,
            updated_at=now,
        )
        watchlist.raise_(
            WatchlistCreated(
                watchlist_id=str(watchlist.id),
                owner_id=str(owner_id),
                name=watchlist.name,
                description=description,
                created_at=now,
            )
        )
        return watchlist

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def is_owned_by(self, user_id) -> bool:
        return str(self.owner_id) == str(user_id)

    def entry_for(self, movie_id):
        return next((e for e in self.entries if str(e.movie_id) == str(movie_id)), None)

    def contains_movie(self, movie_id) -> bool:
        return self.entry_for(movie_id) is not None

    # -------------------------------------------------------------------
    # Details
    # -------------------------------------------------------------------
    def update_details(self, name=None, description=None):
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        self.updated_at = datetime.now(UTC)

        self.raise_(
            WatchlistDetailsUpdated(
                watchlist_id=str(self.id),
                name=self.name,
                description=self.description,
            )
        )

    # -------------------------------------------------------------------
    # Entries
    # -------------------------------------------------------------------
    def add_movie(self, movie_id) -> bool:
        """Add ``movie_id`` as not watched. Returns False when it is already listed."""
        if self.contains_movie(movie_id):
            return False

        now = datetime.now(UTC)
        self.add_entries(WatchlistEntry(movie_id=str(movie_id), watched=False, added_at=now))
        self.updated_at = now

        self.raise_(
            MovieAddedToWatchlist(
                watchlist_id=str(self.id),
                movie_id=str(movie_id),
                added_at=now,
            )
        )
        return True

    def remove_movie(self, movie_id) -> bool:
        entry = self.entry_for(movie_id)
        if entry is None:
            return False

        self.remove_entries(entry)
        self.updated_at = datetime.now(UTC)

        self.raise_(MovieRemovedFromWatchlist(watchlist_id=str(self.id), movie_id=str(movie_id)))
        return True

    def remove_all(self) -> int:
        removed = len(self.entries)
        if not removed:
            return 0

        self.remove_entries(list(self.entries))
        self.updated_at = datetime.now(UTC)

        self.raise_(WatchlistCleared(watchlist_id=str(self.id), entries_removed=removed))
        return removed

    def mark_watched(self, movie_id):
        entry = self.entry_for(movie_id)
        if entry is None:
            raise PreconditionFailedError({"movie_id": ["Movie is not in this watchlist"]})
        if entry.watched:
            raise ConflictError({"movie_id": ["Movie is already marked as watched in this watchlist"]})

        now = datetime.now(UTC)
        entry.watched = True
        entry.watched_at = now
        self.updated_at = now

        self.raise_(
            WatchlistMovieWatched(
                watchlist_id=str(self.id),
                owner_id=str(self.owner_id),
                movie_id=str(movie_id),
                watched_at=now,
            )
        )


@filmcatalog.repository(part_of=Watchlist)
class WatchlistRepository:
    def for_owner(self, owner_id):
        return fetch_all(self._dao.query.filter(owner_id=str(owner_id)))
