"""Shared post-write protocol for every entity mutation.

Each create / update / delete / rename runs:
  1. validate input (ValidationError, before any I/O)
  2. resolve the target or parent row (NotFoundError)
  3. apply the write
  4. touch the owning Project's last_updated, in the same transaction
  5. commit (SQLAlchemyError -> StorageError, transaction rolled back)
  6. invalidate the affected cache tags (after commit)
"""

from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from typing import Any, ClassVar, TypeVar
from uuid import UUID

import pydantic
import structlog
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from devtrack.cache.service import CacheService
from devtrack.core.exceptions import NotFoundError, StorageError, ValidationError
from devtrack.db.base import utcnow
from devtrack.db.models.project import Project
from devtrack.db.ownership import EntityKind, find_owning_project_id

logger = structlog.get_logger(__name__)

SchemaT = TypeVar("SchemaT", bound=pydantic.BaseModel)


def require_uuid(value: UUID | str, entity: str) -> UUID:
    """Coerce an identifier for a write; malformed ids are a ValidationError."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError as exc:
        raise ValidationError(
            f"Malformed {entity} id: {value!r}",
            errors=[{"field": "id", "message": "must be a UUID"}],
        ) from exc


def validate_payload(schema: type[SchemaT], data: SchemaT | dict[str, Any]) -> SchemaT:
    """Accept an already-built schema instance or validate a raw mapping."""
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc


def convert_form(schema: type[pydantic.BaseModel], form: Any, method: str) -> Any:
    """Validate a form payload and convert it with ``method`` ("to_create" / "to_update").

    Errors from either step surface as ValidationError.
    """
    payload = validate_payload(schema, form)
    try:
        return getattr(payload, method)()
    except pydantic.ValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc


async def touch_project(session: AsyncSession, project_id: UUID) -> None:
    """Set the project's last_updated to now (part of the caller's transaction)."""
    await session.execute(
        update(Project)
        .where(Project.id == project_id)
        .values(last_updated=utcnow())
        .execution_options(synchronize_session=False)
    )


class MutationService:
    """Base for the per-entity services.

    Subclasses set ``kind`` and ``model`` and build their own payloads;
    this class owns the transaction, ownership lookup and invalidation.
    """

    kind: ClassVar[EntityKind]
    model: ClassVar[type]

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], cache: CacheService):
        """Initialize with dependency injection.

        Args:
            session_factory: SQLAlchemy async session factory
            cache: View cache invalidated after each successful write
        """
        self.session_factory = session_factory
        self.cache = cache

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Session whose work commits on clean exit.

        Domain errors raised inside propagate unchanged (nothing was
        committed); database errors are re-raised as StorageError.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.error(
                    "mutation_storage_error",
                    entity=str(self.kind),
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                raise StorageError(f"{self.kind} write failed: {exc}") from exc

    async def load_or_404(self, session: AsyncSession, entity_id: UUID):
        """Fetch the target row or raise NotFoundError."""
        row = await session.get(self.model, entity_id)
        if row is None:
            raise NotFoundError(str(self.kind), entity_id)
        return row

    async def owning_project_or_404(
        self,
        session: AsyncSession,
        kind: EntityKind,
        entity_id: UUID,
    ) -> UUID:
        """Walk the ownership chain; a missing link is a NotFoundError for that entity."""
        project_id = await find_owning_project_id(session, kind, entity_id)
        if project_id is None:
            raise NotFoundError(str(kind), entity_id)
        return project_id

    @staticmethod
    def apply_changes(row: Any, changes: dict[str, Any]) -> None:
        for field, value in changes.items():
            setattr(row, field, value)

    async def invalidate(self, tags: Iterable[str]) -> None:
        tags = list(dict.fromkeys(tags))
        await self.cache.invalidate_many(tags)
        logger.debug("views_invalidated", entity=str(self.kind), tags=tags)
