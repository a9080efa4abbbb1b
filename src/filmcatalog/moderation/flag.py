"""Flag aggregate — one reporter's complaint about one review.

Identified by the (reporter, review) flag key, so a reporter can flag a given
review only once. Flags are never edited. When their review is removed they
are withdrawn, and a withdrawn flag is filed again if the same reporter flags
a later review for the same pair.
"""

from datetime import UTC, datetime
from operator import attrgetter

from protean.fields import Boolean, DateTime, Identifier, String

from filmcatalog.domain import filmcatalog
from filmcatalog.moderation.events import ReviewFlagged
from filmcatalog.shared.keys import FlagKey
from filmcatalog.shared.paging import fetch_all


@filmcatalog.aggregate
class Flag:
    flag_id = Identifier(identifier=True, required=True)
    reporter_id = Identifier(required=True)
    review_id = Identifier(required=True)
    reason = String(max_length=500)
    created_at = DateTime(required=True)
    withdrawn = Boolean(default=False)
    withdrawn_at = DateTime()

    @classmethod
    def file(cls, reporter_id, review_id, reason=None, flag_count=1):
        now = datetime.now(UTC)
        key = FlagKey(reporter_id=str(reporter_id), review_id=str(review_id)).value

        flag = cls(
            flag_id=key,
            reporter_id=str(reporter_id),
            review_id=str(review_id),
            reason=reason,
            created_at=now,
            withdrawn=False,
        )
        flag._flagged(flag_count)
        return flag

    def refile(self, reason=None, flag_count=1):
        self.reason = reason
        self.created_at = datetime.now(UTC)
        self.withdrawn = False
        self.withdrawn_at = None
        self._flagged(flag_count)

    def withdraw(self):
        self.withdrawn = True
        self.withdrawn_at = datetime.now(UTC)

    def _flagged(self, flag_count):
        self.raise_(
            ReviewFlagged(
                flag_id=str(self.flag_id),
                review_id=str(self.review_id),
                reporter_id=str(self.reporter_id),
                reason=self.reason,
                flag_count=flag_count,
                flagged_at=self.created_at,
            )
        )


@filmcatalog.repository(part_of=Flag)
class FlagRepository:
    def find(self, flag_id):
        return self._dao.query.filter(flag_id=str(flag_id), withdrawn=False).all().first

    def find_stored(self, flag_id):
        return self._dao.query.filter(flag_id=str(flag_id)).all().first

    def count_for(self, review_id) -> int:
        return self._dao.query.filter(review_id=str(review_id), withdrawn=False).all().total

    def for_review(self, review_id):
        """Flags of a review, oldest first."""
        flags = fetch_all(self._dao.query.filter(review_id=str(review_id), withdrawn=False))
        return sorted(sorted(flags, key=attrgetter("flag_id")), key=attrgetter("created_at"))

    def withdraw_for_review(self, review_id) -> int:
        flags = fetch_all(self._dao.query.filter(review_id=str(review_id), withdrawn=False))
        for flag in flags:
            flag.withdraw()
            self.add(flag)
        return len(flags)
