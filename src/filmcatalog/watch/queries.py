"""Read side of the watch tracker."""

from protean.utils.globals import current_domain

from filmcatalog.directory.lookup import find_user
from filmcatalog.shared.keys import watch_key
from filmcatalog.shared.paging import Page, PageRequest, order_items
from filmcatalog.watch.watched import WatchedRecord

WATCHED_SORT_KEYS = {"watched_at", "movie_id"}


def has_watched(user_id, movie_id) -> bool:
    return current_domain.repository_for(WatchedRecord).find(watch_key(user_id, movie_id)) is not None


def watched_movies(user_id, page: PageRequest | None = None) -> Page:
    """The user's watched records, most recent first by default."""
    page = page or PageRequest()
    find_user(user_id)

    records = current_domain.repository_for(WatchedRecord).for_user(user_id)
    ordered = order_items(records, page.sort, WATCHED_SORT_KEYS, "-watched_at", "watch_key")
    return Page.slice(ordered, page)
