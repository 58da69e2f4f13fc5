"""Book resource service.

Stateless operations over the BookRepository. Each method translates only
the store conditions it knows about into domain errors; anything else is
left to propagate to the outermost handler.
"""

import logging
from uuid import UUID

from fastapi import Depends

from core.errors import ConflictError, NotFoundError, ValidationError
from patterns.repository import RecordNotFound, UniqueViolation
from verticals.books.models.schemas import BookCreate, BookUpdate
from verticals.books.repository import BookRepository, get_book_repository

logger = logging.getLogger(__name__)


class BookService:
    """Get, create, update, delete and like books."""

    def __init__(self, repository: BookRepository):
        self.repository = repository

    async def get_all(self) -> list[dict]:
        return await self.repository.list_with_author()

    async def get_by_id(self, book_id: str | UUID) -> dict:
        book = await self.repository.get_with_author(book_id)
        if book is None:
            raise NotFoundError(f"Book with id {book_id} not found")
        return book

    async def create(self, book_data: BookCreate) -> dict:
        data = book_data.model_dump(exclude={"author_id"})
        try:
            book = await self.repository.create_book(data, book_data.author_id)
        except UniqueViolation:
            logger.warning("Duplicate book title rejected", extra={"title": book_data.title})
            raise ConflictError("Name is already taken")
        logger.info("Book created", extra={"book_id": book["id"]})
        return book

    async def update_by_id(self, book_id: str | UUID, book_data: BookUpdate) -> dict:
        """Replace every field of an existing book.

        The caller checks existence first; a missing id surfaces as the
        store's RecordNotFound.
        """
        data = book_data.model_dump(exclude={"author_id"})
        book = await self.repository.update_book(book_id, data, book_data.author_id)
        logger.info("Book updated", extra={"book_id": str(book_id)})
        return book

    async def delete_by_id(self, book_id: str | UUID) -> dict:
        book = await self.repository.delete_book(book_id)
        logger.info("Book deleted", extra={"book_id": str(book_id)})
        return book

    async def like_book(self, book_id: str | UUID, user_id: str | UUID) -> dict:
        try:
            book = await self.repository.add_like(book_id, user_id)
        except RecordNotFound:
            logger.warning(
                "Like rejected for missing book or user",
                extra={"book_id": str(book_id), "user_id": str(user_id)},
            )
            raise ValidationError("Book or user don't exist")
        logger.info("Book liked", extra={"book_id": str(book_id), "user_id": str(user_id)})
        return book


def get_book_service(
    repository: BookRepository = Depends(get_book_repository),
) -> BookService:
    """FastAPI dependency for BookService."""
    return BookService(repository)
