"""Loading watchlists for reads and owner-checked writes."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from filmcatalog.shared.errors import ForbiddenError, not_found
from filmcatalog.watchlist.watchlist import Watchlist


def find_watchlist(watchlist_id) -> Watchlist:
    try:
        return current_domain.repository_for(Watchlist).get(str(watchlist_id))
    except ObjectNotFoundError as exc:
        raise not_found("watchlist", watchlist_id) from exc


def find_owned_watchlist(watchlist_id, owner_id) -> Watchlist:
    watchlist = find_watchlist(watchlist_id)
    if not watchlist.is_owned_by(owner_id):
        raise ForbiddenError({"watchlist": ["Watchlist does not belong to user"]})
    return watchlist
