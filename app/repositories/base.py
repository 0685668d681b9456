"""Base repository for database operations."""

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
)

ModelT = TypeVar("ModelT", bound=SQLModel)


class BaseRepository(Generic[ModelT]):
    """
    Common CRUD operations over one table model.

    Subclasses set ``model`` and add their query methods. Integrity failures
    surface as ``DuplicateEntryError`` (409) or ``DatabaseError``; any other
    driver failure becomes ``DatabaseConnectionError``.

    Attributes:
        model: The SQLModel database model type.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, data: dict[str, Any]) -> ModelT:
        """
        Insert a row built from column values.

        Raises:
            DuplicateEntryError: If a unique constraint is violated.
        """
        db_obj = self.model(**data)
        return await self._add_and_refresh(db_obj)

    async def get_by_id(self, record_id: int) -> ModelT | None:
        return await self.session.get(self.model, record_id)

    async def get_by_field(self, field_name: str, value: object) -> ModelT | None:
        """Get the first record whose ``field_name`` equals ``value``."""
        field = getattr(self.model, field_name)
        statement = select(self.model).where(field == value).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def update(self, record_id: int, changes: dict[str, Any]) -> ModelT | None:
        """
        Apply column changes to a record.

        Returns:
            ModelT | None: Updated record if found, None otherwise.
        """
        db_obj = await self.get_by_id(record_id)
        if not db_obj:
            return None
        for key, value in changes.items():
            setattr(db_obj, key, value)
        return await self._add_and_refresh(db_obj)

    async def delete(self, record_id: int) -> bool:
        """
        Delete a record by ID.

        Returns:
            bool: True if record was deleted, False if not found.
        """
        record = await self.get_by_id(record_id)
        if not record:
            return False
        await self.session.delete(record)
        await self._commit()
        return True

    async def exists(self, record_id: int) -> bool:
        id_column = getattr(self.model, "id")  # noqa: B009
        statement = select(1).where(id_column == record_id).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        statement = select(func.count()).select_from(self.model)
        result = await self.session.execute(statement)
        return result.scalar() or 0

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add and commit a record, then refresh it from the database.

        Raises:
            DuplicateEntryError: If a unique constraint is violated.
            DatabaseError: For other integrity errors.
            DatabaseConnectionError: For driver failures.
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.commit()
            await self.session.refresh(record)
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
                raise DuplicateEntryError from e
            raise DatabaseError(detail="Database integrity error") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseConnectionError(detail="Failed to save record") from e
        return record

    async def _commit(self) -> None:
        """
        Commit the pending unit of work.

        Mutations must be visible to other connections before the caller busts
        any cache keys, so they never wait for session teardown.
        """
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise DatabaseError(detail="Database integrity error") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseConnectionError(detail="Failed to save record") from e
