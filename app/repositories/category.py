"""Category repository."""

from sqlalchemy import and_, func, select

from app.models import CategoryDB, PostDB
from app.repositories.base import BaseRepository
from app.schemas.category import CategoryRead


class CategoryRepository(BaseRepository[CategoryDB]):
    model = CategoryDB

    async def list_with_counts(self) -> list[CategoryRead]:
        """All categories ordered by name, with their published post count."""
        statement = (
            select(
                *CategoryDB.__table__.columns,
                func.count(PostDB.id).label("post_count"),
            )
            .select_from(CategoryDB)
            .outerjoin(
                PostDB,
                and_(PostDB.category_id == CategoryDB.id, PostDB.status == "published"),
            )
            .group_by(CategoryDB.id)
            .order_by(CategoryDB.name)
        )
        rows = await self.session.execute(statement)
        return [CategoryRead.model_validate(dict(row)) for row in rows.mappings().all()]
