"""User — directory entry the film catalog reads but never creates or authenticates.

Registration, credentials and profile editing live in the user service. The
catalog only needs identity, a display handle and the role used for moderation
checks.
"""

from enum import Enum

from protean.fields import String

from filmcatalog.domain import filmcatalog


class Role(Enum):
    MEMBER = "Member"
    ADMIN = "Admin"


@filmcatalog.aggregate
class User:
    username = String(required=True, max_length=50)
    email = String(required=True, max_length=254)
    name = String(max_length=100)
    role = String(choices=Role, default=Role.MEMBER.value)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


@filmcatalog.repository(part_of=User)
class UserRepository:
    def find_by_username(self, username):
        return self._dao.query.filter(username=username).all().first
