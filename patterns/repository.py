"""Async repository pattern for database access.

Provides a generic base repository with CRUD operations and a small set of
store-level error kinds. Repositories are the only code that talks to
SQLAlchemy; integrity failures are classified here once so that callers
check an exception class instead of a driver-specific code.

Example: BookRepository extending BaseRepository.
"""

from typing import Any, Generic, Iterable, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from core.models.base import Base

# ---------------------------------------------------------------------------
# Type variable for model classes
# ---------------------------------------------------------------------------

ModelT = TypeVar("ModelT", bound=Base)

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION_SQLSTATE = "23505"


# ---------------------------------------------------------------------------
# Store errors
# ---------------------------------------------------------------------------

class StoreError(Exception):
    """Base class for conditions reported by the persistence store."""


class RecordNotFound(StoreError):
    """The record addressed by a write does not exist."""


class RelatedRecordNotFound(RecordNotFound):
    """A record referenced through a relation does not exist."""


class UniqueViolation(StoreError):
    """A write would break a unique constraint."""


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    if getattr(orig, "sqlstate", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    return "unique constraint" in str(orig).lower()


def parse_id(value: str | UUID) -> UUID | None:
    """Return value as a UUID, or None when it is not a valid identifier."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class BaseRepository(Generic[ModelT]):
    """Generic async repository with CRUD and error classification.

    Subclass and set `model` to your SQLAlchemy model::

        class BookRepository(BaseRepository[Book]):
            model = Book

            async def find_by_title(self, title: str):
                stmt = select(self.model).where(self.model.title == title)
                result = await self.session.execute(stmt)
                return result.scalar_one_or_none()
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    # -- Flush with error classification --

    async def flush(self) -> None:
        """Flush pending writes, raising UniqueViolation for duplicate keys."""
        try:
            await self.session.flush()
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise UniqueViolation(str(exc.orig)) from exc
            raise

    # -- List --

    async def list(self, options: Iterable[ORMOption] = ()) -> Sequence[ModelT]:
        """Return every row, oldest first."""
        stmt = (
            select(self.model)
            .options(*options)
            .order_by(self.model.created_at, self.model.id)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    # -- Get by ID --

    async def get(
        self, item_id: str | UUID, options: Iterable[ORMOption] = ()
    ) -> ModelT | None:
        """Get a single row by ID. Malformed ids never match."""
        key = parse_id(item_id)
        if key is None:
            return None
        stmt = select(self.model).where(self.model.id == key).options(*options)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_raise(
        self, item_id: str | UUID, options: Iterable[ORMOption] = ()
    ) -> ModelT:
        item = await self.get(item_id, options)
        if item is None:
            raise RecordNotFound(f"No {self.model.__name__} record found for id {item_id}")
        return item

    async def connect(self, model: type[Base], item_id: str | UUID) -> Any:
        """Resolve a related row for a relational link."""
        key = parse_id(item_id)
        item = await self.session.get(model, key) if key is not None else None
        if item is None:
            raise RelatedRecordNotFound(
                f"No {model.__name__} record found for id {item_id}"
            )
        return item

    # -- Create --

    async def create(self, data: dict[str, Any]) -> ModelT:
        """Create a new row."""
        item = self.model(**data)
        self.session.add(item)
        await self.flush()
        return item

    # -- Update --

    async def update(
        self,
        item_id: str | UUID,
        data: dict[str, Any],
        options: Iterable[ORMOption] = (),
    ) -> ModelT:
        """Overwrite the given attributes of an existing row.

        Relationships assigned through data must be eager-loaded via options.
        """
        item = await self.get_or_raise(item_id, options)
        with self.session.no_autoflush:
            for key, value in data.items():
                if hasattr(item, key) and key not in ("id", "created_at"):
                    setattr(item, key, value)
        await self.flush()
        return item

    # -- Delete --

    async def delete(
        self, item_id: str | UUID, options: Iterable[ORMOption] = ()
    ) -> ModelT:
        """Delete an existing row and return it."""
        item = await self.get_or_raise(item_id, options)
        await self.session.delete(item)
        await self.flush()
        return item
