"""
Noteful API: Named Resource Service Base
========================================

What:  CRUD operations shared by folders and tags, which are both plain
       `{id, name}` tables.
How:   Subclasses set `model`, `response_model` and `resource`; every method
       receives the request's AsyncSession explicitly.

Operations:
    list_all(db)            → all rows, id order
    get(db, id)             → one row or NotFoundError
    create(db, payload)     → requires `name`; flushes to obtain the id
    update(db, id, payload) → copies only `name`; requires it
    delete(db, id)          → idempotent; True if a row was removed
"""

import logging
from typing import ClassVar, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import Base
from noteful.exceptions import DatabaseError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class NamedResourceService(Generic[ModelT, ResponseT]):
    """Business logic for a table whose only writable column is `name`."""

    model: ClassVar[Type[Base]]
    response_model: ClassVar[Type[BaseModel]]
    resource: ClassVar[str]

    # Fields copied from a PUT body into the update set
    updatable_fields: ClassVar[tuple] = ("name",)

    def _store_error(self, operation: str, error: SQLAlchemyError, **context) -> DatabaseError:
        logger.error(
            "Database error during %s %s: %s", operation, self.resource, str(error),
            exc_info=True,
        )
        return DatabaseError(
            context={
                "resource": self.resource,
                "operation": operation,
                "error_type": type(error).__name__,
                **context,
            },
        )

    @staticmethod
    def _require_name(name: Optional[str]) -> str:
        if not name:
            raise ValidationError.missing_field("name")
        return name

    async def list_all(self, db: AsyncSession) -> List[ResponseT]:
        try:
            result = await db.execute(select(self.model).order_by(self.model.id))
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            raise self._store_error("list", e) from e
        return [self.response_model.model_validate(row) for row in rows]

    async def get(self, db: AsyncSession, item_id: int) -> ResponseT:
        try:
            row = await db.get(self.model, item_id)
        except SQLAlchemyError as e:
            raise self._store_error("get", e, resource_id=item_id) from e
        if row is None:
            raise NotFoundError(resource=self.resource, resource_id=item_id)
        return self.response_model.model_validate(row)

    async def create(self, db: AsyncSession, payload: BaseModel) -> ResponseT:
        name = self._require_name(getattr(payload, "name", None))
        row = self.model(name=name)
        try:
            db.add(row)
            await db.flush()  # Assigns the id without committing
        except SQLAlchemyError as e:
            raise self._store_error("create", e) from e
        logger.info("Created %s %s", self.resource, row.id)
        return self.response_model.model_validate(row)

    async def update(self, db: AsyncSession, item_id: int, payload: BaseModel) -> ResponseT:
        provided = payload.model_dump(exclude_unset=True)
        update_set = {
            field: provided[field] for field in self.updatable_fields if field in provided
        }
        self._require_name(update_set.get("name"))

        try:
            row = await db.get(self.model, item_id)
            if row is None:
                raise NotFoundError(resource=self.resource, resource_id=item_id)
            for field, value in update_set.items():
                setattr(row, field, value)
            await db.flush()
        except SQLAlchemyError as e:
            raise self._store_error("update", e, resource_id=item_id) from e
        logger.info("Updated %s %s", self.resource, item_id)
        return self.response_model.model_validate(row)

    async def delete(self, db: AsyncSession, item_id: int) -> bool:
        try:
            result = await db.execute(delete(self.model).where(self.model.id == item_id))
        except SQLAlchemyError as e:
            raise self._store_error("delete", e, resource_id=item_id) from e
        removed = bool(result.rowcount)
        logger.info("Deleted %s %s (existed=%s)", self.resource, item_id, removed)
        return removed
