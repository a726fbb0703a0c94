"""SQLAlchemy implementations of the auth lookup protocols."""

from typing import Any, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from pointage.db.models import Admin, Base, Check, Employee, User


class SqlUserLookup:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, user_id: int) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def find_by_login_or_email(self, login: str) -> Optional[User]:
        """Single query: exact login, or case-insensitive email."""
        q = select(User).where(
            or_(User.login == login, func.lower(User.email) == login.lower())
        )
        result = await self.db.execute(q)
        return result.scalars().first()

    async def find_conflict(
        self, *identifiers: Optional[str], exclude_id: Optional[int] = None
    ) -> Optional[User]:
        """Another user whose login or email matches any identifier.

        Both columns are compared case-insensitively so that no value can
        make find_by_login_or_email match two users.
        """
        lowered = [value.lower() for value in identifiers if value]
        if not lowered:
            return None
        q = select(User).where(
            or_(func.lower(User.login).in_(lowered), func.lower(User.email).in_(lowered))
        )
        if exclude_id is not None:
            q = q.where(User.id != exclude_id)
        result = await self.db.execute(q)
        return result.scalars().first()


class SqlEntityLookup:
    """Finds a row by resource type name and primary key.

    Types without a registered model resolve to `default_model`
    (Employee), which is how the "App" resource is checked.
    """

    models: dict[str, type[Base]] = {
        "Employee": Employee,
        "Check": Check,
        "User": User,
        "Admin": Admin,
    }

    def __init__(self, db: AsyncSession, default_model: type[Base] = Employee):
        self.db = db
        self.default_model = default_model

    def model_for(self, resource_type: str) -> type[Base]:
        return self.models.get(resource_type, self.default_model)

    async def find_by_id(self, resource_type: str, resource_id: int) -> Optional[Any]:
        return await self.db.get(self.model_for(resource_type), resource_id)
