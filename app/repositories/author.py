"""Author repository."""

from sqlalchemy import Select, and_, func, select

from app.models import AuthorDB, PostDB
from app.repositories.base import BaseRepository
from app.schemas.author import AuthorRead


def _with_counts() -> Select:
    return (
        select(*AuthorDB.__table__.columns, func.count(PostDB.id).label("post_count"))
        .select_from(AuthorDB)
        .outerjoin(PostDB, and_(PostDB.author_id == AuthorDB.id, PostDB.status == "published"))
        .group_by(AuthorDB.id)
    )


class AuthorRepository(BaseRepository[AuthorDB]):
    model = AuthorDB

    async def list_with_counts(self) -> list[AuthorRead]:
        rows = await self.session.execute(_with_counts().order_by(AuthorDB.name))
        return [AuthorRead.model_validate(dict(row)) for row in rows.mappings().all()]

    async def get_with_count(self, author_id: int) -> AuthorRead | None:
        rows = await self.session.execute(_with_counts().where(AuthorDB.id == author_id))
        row = rows.mappings().first()
        return AuthorRead.model_validate(dict(row)) if row else None
