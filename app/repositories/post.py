"""Post repository: published listings, search and view counting."""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select, String, case, cast, delete, func, literal, or_, select, update
from sqlalchemy.engine import RowMapping

from app.models import AuthorDB, CategoryDB, CommentDB, PostDB
from app.repositories.base import BaseRepository
from app.schemas.post import PostRead
from app.utils.helpers import utcnow

PUBLISHED = "published"


def _post_columns() -> list[Any]:
    return [
        *PostDB.__table__.columns,
        CategoryDB.name.label("category_name"),
        CategoryDB.slug.label("category_slug"),
        AuthorDB.name.label("author_name"),
        AuthorDB.avatar_url.label("author_avatar"),
        AuthorDB.bio.label("author_bio"),
    ]


def _joined(*extra: Any) -> Select:  # noqa: ANN401
    """Posts with their category and author names, published only."""
    return (
        select(*_post_columns(), *extra)
        .select_from(PostDB)
        .outerjoin(CategoryDB, PostDB.category_id == CategoryDB.id)
        .outerjoin(AuthorDB, PostDB.author_id == AuthorDB.id)
        .where(PostDB.status == PUBLISHED)
    )


def _apply_filters(
    statement: Select,
    category: str | None,
    author: int | None,
) -> Select:
    if category:
        statement = statement.where(CategoryDB.slug == category)
    if author is not None:
        statement = statement.where(PostDB.author_id == author)
    return statement


def _to_posts(rows: Sequence[RowMapping]) -> list[PostRead]:
    return [PostRead.model_validate(dict(row)) for row in rows]


class PostRepository(BaseRepository[PostDB]):
    """Queries behind the post, category, author and search listings."""

    model = PostDB

    async def _page(
        self,
        statement: Select,
        page: int,
        limit: int,
    ) -> tuple[list[PostRead], int]:
        total_stmt = select(func.count()).select_from(statement.order_by(None).subquery())
        total = (await self.session.execute(total_stmt)).scalar() or 0
        rows = await self.session.execute(statement.limit(limit).offset((page - 1) * limit))
        return _to_posts(rows.mappings().all()), total

    async def list_published(
        self,
        page: int,
        limit: int,
        search: str | None = None,
        category: str | None = None,
        author: int | None = None,
    ) -> tuple[list[PostRead], int]:
        """
        One page of published posts, newest first.

        Returns:
            tuple[list[PostRead], int]: The page and the total match count.
        """
        statement = _apply_filters(_joined(), category, author)
        if search:
            term = f"%{search}%"
            statement = statement.where(
                or_(PostDB.title.ilike(term), PostDB.content.ilike(term), PostDB.excerpt.ilike(term)),
            )
        statement = statement.order_by(PostDB.published_at.desc(), PostDB.id.desc())
        return await self._page(statement, page, limit)

    async def search(
        self,
        query: str,
        page: int,
        limit: int,
        category: str | None = None,
        author: int | None = None,
    ) -> tuple[list[PostRead], int]:
        """
        Published posts matching ``query``, best match first.

        A title match scores 3, excerpt 2 and content 1; posts matching only
        on a tag score 0 but are still returned. Ties are broken by recency.
        """
        term = f"%{query}%"
        relevance = case(
            (PostDB.title.ilike(term), literal(3)),
            (PostDB.excerpt.ilike(term), literal(2)),
            (PostDB.content.ilike(term), literal(1)),
            else_=literal(0),
        ).label("relevance_score")
        statement = _apply_filters(_joined(relevance), category, author).where(
            or_(
                PostDB.title.ilike(term),
                PostDB.content.ilike(term),
                PostDB.excerpt.ilike(term),
                cast(PostDB.tags, String).ilike(term),
            ),
        )
        statement = statement.order_by(
            relevance.desc(),
            PostDB.published_at.desc(),
            PostDB.id.desc(),
        )
        return await self._page(statement, page, limit)

    async def get_published_by_slug(self, slug: str) -> PostRead | None:
        rows = await self.session.execute(_joined().where(PostDB.slug == slug).limit(1))
        row = rows.mappings().first()
        return PostRead.model_validate(dict(row)) if row else None

    async def create_post(self, data: dict[str, Any]) -> PostRead:
        return PostRead.model_validate(await self.create(data))

    async def update_post(self, post_id: int, changes: dict[str, Any]) -> PostRead | None:
        """Apply changes and stamp ``updated_at``. Returns None when missing."""
        post = await self.update(post_id, {**changes, "updated_at": utcnow()})
        return PostRead.model_validate(post) if post else None

    async def delete_post(self, post_id: int) -> PostDB | None:
        """
        Delete a post and its comments.

        Returns:
            PostDB | None: The deleted row (for cache busting), None when missing.
        """
        post = await self.get_by_id(post_id)
        if not post:
            return None
        await self.session.execute(delete(CommentDB).where(CommentDB.post_id == post_id))
        await self.session.delete(post)
        await self._commit()
        return post

    async def increment_views(self, post_id: int) -> None:
        await self.session.execute(
            update(PostDB).where(PostDB.id == post_id).values(view_count=PostDB.view_count + 1),
        )
        await self._commit()
