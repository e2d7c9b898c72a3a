"""Base repository: generic lookups, create and column updates."""

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitforms.infrastructure.persistence.database import Base


def is_unique_violation(exc: IntegrityError, constraint: str, *columns: str) -> bool:
    """Return whether exc was raised by the named unique constraint.

    asyncpg exposes constraint_name on the driver error; PostgreSQL messages
    quote the constraint name; SQLite lists the table-qualified columns
    instead ("UNIQUE constraint failed: forms.business_id, forms.slug").
    """
    driver_error = getattr(exc.orig, "__cause__", None)
    name = getattr(driver_error, "constraint_name", None)
    if name is not None:
        return name == constraint
    message = str(exc.orig)
    if f'"{constraint}"' in message:
        return True
    if "UNIQUE constraint failed" not in message:
        return False
    failed = {c.strip() for c in message.split(":", 1)[1].split(",")}
    return bool(columns) and failed == set(columns)


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_entity, get_all, create and apply_changes.

    Subclasses expose application DTOs; ORM instances never leave the
    repository. Records are never hard-deleted, so there is no delete.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_entity(
        self, entity_id: str, *, for_update: bool = False
    ) -> ModelType | None:
        """Return a single record by primary key, or None.

        With for_update the row stays locked until the transaction ends
        (no-op on backends without row locks, e.g. SQLite).
        """
        model: Any = self.model
        stmt = select(self.model).where(model.id == entity_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[ModelType]:
        """Return records with pagination."""
        result = await self.db.execute(select(self.model).offset(skip).limit(limit))
        return list(result.scalars().all())

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record; flush so constraint violations surface here."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def apply_changes(
        self, obj: ModelType, changes: Mapping[str, Any]
    ) -> ModelType:
        """Set attributes on an attached record, flush and reload server values."""
        for key, value in changes.items():
            if not hasattr(obj, key):
                raise ValueError(
                    f"Cannot update: {self.model.__name__} has no attribute '{key}'"
                )
            setattr(obj, key, value)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj
