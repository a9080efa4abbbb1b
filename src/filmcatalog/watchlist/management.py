"""CreateWatchlist / UpdateWatchlist / DeleteWatchlist — the owner's list lifecycle."""

import structlog
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from filmcatalog.directory.lookup import find_user
from filmcatalog.domain import filmcatalog
from filmcatalog.watchlist.lookup import find_owned_watchlist
from filmcatalog.watchlist.watchlist import Watchlist, WatchlistEntry

logger = structlog.get_logger(__name__)


@filmcatalog.command(part_of="Watchlist")
class CreateWatchlist:
    owner_id = Identifier(required=True)
    name = String(max_length=100)
    description = Text()


@filmcatalog.command(part_of="Watchlist")
class UpdateWatchlist:
    watchlist_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    name = String(max_length=100)
    description = Text()


@filmcatalog.command(part_of="Watchlist")
class DeleteWatchlist:
    watchlist_id = Identifier(required=True)
    owner_id = Identifier(required=True)


@filmcatalog.command_handler(part_of=Watchlist)
class ManageWatchlistHandler:
    @handle(CreateWatchlist)
    def create_watchlist(self, command):
        find_user(command.owner_id)

        watchlist = Watchlist.create(
            owner_id=command.owner_id,
            name=command.name,
            description=command.description,
        )
        current_domain.repository_for(Watchlist).add(watchlist)
        return str(watchlist.id)

    @handle(UpdateWatchlist)
    def update_watchlist(self, command):
        watchlist = find_owned_watchlist(command.watchlist_id, command.owner_id)
        watchlist.update_details(name=command.name, description=command.description)
        current_domain.repository_for(Watchlist).add(watchlist)

    @handle(DeleteWatchlist)
    def delete_watchlist(self, command):
        watchlist = find_owned_watchlist(command.watchlist_id, command.owner_id)
        entries = list(watchlist.entries)

        entry_dao = current_domain.repository_for(WatchlistEntry)._dao
        for entry in entries:
            entry_dao.delete(entry)
        current_domain.repository_for(Watchlist)._dao.delete(watchlist)

        logger.info(
            "Watchlist deleted",
            watchlist_id=str(watchlist.id),
            owner_id=str(command.owner_id),
            entries=len(entries),
        )
