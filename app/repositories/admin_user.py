"""Admin user repository."""

from app.models import AdminUserDB
from app.repositories.base import BaseRepository


class AdminUserRepository(BaseRepository[AdminUserDB]):
    model = AdminUserDB

    async def get_by_email(self, email: str) -> AdminUserDB | None:
        return await self.get_by_field("email", email)

    async def set_password_hash(self, user: AdminUserDB, password_hash: str) -> AdminUserDB:
        user.password_hash = password_hash
        return await self._add_and_refresh(user)
