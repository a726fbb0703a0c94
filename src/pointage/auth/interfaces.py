"""Lookup capabilities the auth core depends on.

The SQLAlchemy implementations live in pointage.db.lookups; tests use
in-memory fakes. Anything with matching async methods will do.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from pointage.db.models import User


@runtime_checkable
class UserLookup(Protocol):
    async def find_by_id(self, user_id: int) -> Optional[User]:
        ...

    async def find_by_login_or_email(self, login: str) -> Optional[User]:
        """Match `login` exactly or `email` case-insensitively."""
        ...


@runtime_checkable
class EntityLookup(Protocol):
    async def find_by_id(self, resource_type: str, resource_id: int) -> Optional[Any]:
        ...
