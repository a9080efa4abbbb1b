"""MarkMovieWatched / UnmarkMovieWatched — maintain a user's watched records.

Marking twice is a conflict rather than a silent no-op. Unmarking a movie the
user has reviewed removes that review and withdraws its flags in the same unit
of work, since a review cannot outlive its watched record.
"""

import structlog
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from filmcatalog.directory.lookup import find_movie, find_user
from filmcatalog.domain import filmcatalog
from filmcatalog.review.removal import remove_review
from filmcatalog.review.review import Review
from filmcatalog.shared.errors import AlreadyWatchedError, NotFoundError
from filmcatalog.shared.keys import watch_key
from filmcatalog.watch.watched import WatchedRecord, WatchSource

logger = structlog.get_logger(__name__)


@filmcatalog.command(part_of="WatchedRecord")
class MarkMovieWatched:
    user_id = Identifier(required=True)
    movie_id = Identifier(required=True)


@filmcatalog.command(part_of="WatchedRecord")
class UnmarkMovieWatched:
    user_id = Identifier(required=True)
    movie_id = Identifier(required=True)


def _record_watch(repo, user_id, movie_id, source):
    record = repo.find_stored(watch_key(user_id, movie_id))
    if record is None:
        record = WatchedRecord.record(user_id=user_id, movie_id=movie_id, source=source)
    else:
        record.rewatch(source)
    repo.add(record)


def ensure_watched(user_id, movie_id, source=WatchSource.WATCHLIST.value) -> bool:
    """Record the pair as watched unless it already is. Returns True when a record was created.

    Runs inside the caller's unit of work.
    """
    repo = current_domain.repository_for(WatchedRecord)
    if repo.find(watch_key(user_id, movie_id)) is not None:
        return False

    _record_watch(repo, user_id, movie_id, source)
    return True


@filmcatalog.command_handler(part_of=WatchedRecord)
class WatchTrackingHandler:
    @handle(MarkMovieWatched)
    def mark_movie_watched(self, command):
        find_user(command.user_id)
        find_movie(command.movie_id)

        repo = current_domain.repository_for(WatchedRecord)
        key = watch_key(command.user_id, command.movie_id)
        if repo.find(key) is not None:
            raise AlreadyWatchedError({"watched": ["Movie is already marked as watched"]})

        _record_watch(repo, command.user_id, command.movie_id, WatchSource.DIRECT.value)
        return key

    @handle(UnmarkMovieWatched)
    def unmark_movie_watched(self, command):
        repo = current_domain.repository_for(WatchedRecord)
        key = watch_key(command.user_id, command.movie_id)
        record = repo.find(key)
        if record is None:
            raise NotFoundError({"watched": ["Movie is not marked as watched"]})

        review = current_domain.repository_for(Review).find(key)
        if review is not None:
            flags_withdrawn = remove_review(review, removed_by=command.user_id)
            logger.info("Review removed with its watched record", review_id=key, flags_withdrawn=flags_withdrawn)

        record.unwatch()
        repo.add(record)
