"""WatchedRecord aggregate — proof that a user watched a movie.

Identified by the (user, movie) watch key, so at most one record exists per
pair. A review for the same pair reuses this key as its own identity.
Unmarking flags the record as unwatched; marking the pair again restores it.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Identifier

from filmcatalog.domain import filmcatalog
from filmcatalog.shared.errors import InvalidStateError
from filmcatalog.shared.keys import WatchKey
from filmcatalog.shared.paging import fetch_all
from filmcatalog.watch.events import MovieUnwatched, MovieWatched


class WatchSource(Enum):
    DIRECT = "Direct"
    WATCHLIST = "Watchlist"


@filmcatalog.aggregate
class WatchedRecord:
    watch_key = Identifier(identifier=True, required=True)
    user_id = Identifier(required=True)
    movie_id = Identifier(required=True)
    watched_at = DateTime(required=True)
    unwatched = Boolean(default=False)

    @classmethod
    def record(cls, user_id, movie_id, source=WatchSource.DIRECT.value):
        key = WatchKey(user_id=str(user_id), movie_id=str(movie_id)).value

        watched = cls(
            watch_key=key,
            user_id=str(user_id),
            movie_id=str(movie_id),
            watched_at=datetime.now(UTC),
            unwatched=False,
        )
        watched._watched(source)
        return watched

    def rewatch(self, source=WatchSource.DIRECT.value):
        if not self.unwatched:
            raise InvalidStateError({"watched": ["Movie is already marked as watched"]})

        self.unwatched = False
        self.watched_at = datetime.now(UTC)
        self._watched(source)

    def unwatch(self):
        if self.unwatched:
            raise InvalidStateError({"watched": ["Movie is not marked as watched"]})

        self.unwatched = True
        self.raise_(
            MovieUnwatched(
                watch_key=str(self.watch_key),
                user_id=str(self.user_id),
                movie_id=str(self.movie_id),
                unwatched_at=datetime.now(UTC),
            )
        )

    def _watched(self, source):
        self.raise_(
            MovieWatched(
                watch_key=str(self.watch_key),
                user_id=str(self.user_id),
                movie_id=str(self.movie_id),
                source=source,
                watched_at=self.watched_at,
            )
        )


@filmcatalog.repository(part_of=WatchedRecord)
class WatchedRecordRepository:
    def find(self, key):
        return self._dao.query.filter(watch_key=str(key), unwatched=False).all().first

    def find_stored(self, key):
        return self._dao.query.filter(watch_key=str(key)).all().first

    def for_user(self, user_id):
        return fetch_all(self._dao.query.filter(user_id=str(user_id), unwatched=False))
