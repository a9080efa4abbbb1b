"""Read side of the watchlist engine."""

from protean.utils.globals import current_domain

from filmcatalog.directory.lookup import find_user
from filmcatalog.shared.paging import Page, PageRequest, order_items
from filmcatalog.watchlist.lookup import find_watchlist
from filmcatalog.watchlist.watchlist import Watchlist

WATCHLIST_SORT_KEYS = {"name", "created_at", "updated_at"}


def get_watchlist(watchlist_id) -> Watchlist:
    return find_watchlist(watchlist_id)


def contains_movie(watchlist_id, movie_id) -> bool:
    return find_watchlist(watchlist_id).contains_movie(movie_id)


def watchlists_for_user(owner_id, page: PageRequest | None = None) -> Page:
    page = page or PageRequest()
    find_user(owner_id)

    watchlists = current_domain.repository_for(Watchlist).for_owner(owner_id)
    return Page.slice(order_items(watchlists, page.sort, WATCHLIST_SORT_KEYS, "created_at", "id"), page)
