"""Comment repository."""

from sqlalchemy import func, select

from app.models import CommentDB
from app.repositories.base import BaseRepository
from app.schemas.comment import CommentRead


class CommentRepository(BaseRepository[CommentDB]):
    model = CommentDB

    async def list_approved(
        self,
        post_id: int,
        page: int,
        limit: int,
    ) -> tuple[list[CommentRead], int]:
        """Approved comments of a post, newest first, with the total count."""
        condition = (CommentDB.post_id == post_id) & (CommentDB.status == "approved")
        total_stmt = select(func.count()).select_from(CommentDB).where(condition)
        total = (await self.session.execute(total_stmt)).scalar() or 0
        statement = (
            select(CommentDB)
            .where(condition)
            .order_by(CommentDB.created_at.desc(), CommentDB.id.desc())
            .limit(limit)
            .offset((page - 1) * limit)
        )
        rows = await self.session.execute(statement)
        return [CommentRead.model_validate(c) for c in rows.scalars().all()], total
