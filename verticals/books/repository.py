"""Books repository: async database access for books, authors and likes.

Extends BaseRepository with the relational writes the service needs:
connecting a book to its author and appending likes. Every method issues
its queries on the request-scoped session and returns plain dicts.
"""

from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.database import get_session
from patterns.repository import BaseRepository
from verticals.books.models.db_models import Author, Book, Like, User


# ---------------------------------------------------------------------------
# Book repository
# ---------------------------------------------------------------------------

class BookRepository(BaseRepository[Book]):
    """Repository for book CRUD and the like relation."""

    model = Book

    async def list_with_author(self) -> list[dict]:
        books = await self.list(options=[selectinload(Book.author)])
        return [book.to_dict(with_author=True) for book in books]

    async def get_with_author(self, book_id: str | UUID) -> dict | None:
        book = await self.get(book_id, options=[selectinload(Book.author)])
        return book.to_dict(with_author=True) if book else None

    async def create_book(self, data: dict, author_id: str | UUID) -> dict:
        """Insert a book linked to an existing author.

        Raises RelatedRecordNotFound for an unknown author and
        UniqueViolation for a duplicate title.
        """
        author = await self.connect(Author, author_id)
        book = await self.create({**data, "author": author})
        return book.to_dict()

    async def update_book(self, book_id: str | UUID, data: dict, author_id: str | UUID) -> dict:
        """Overwrite every field of a book, including its author link."""
        author = await self.connect(Author, author_id)
        book = await self.update(
            book_id, {**data, "author": author}, options=[selectinload(Book.author)]
        )
        return book.to_dict()

    async def delete_book(self, book_id: str | UUID) -> dict:
        book = await self.delete(book_id, options=[selectinload(Book.likes)])
        return book.to_dict()

    async def add_like(self, book_id: str | UUID, user_id: str | UUID) -> dict:
        """Append a like from user_id to the book's like collection."""
        book = await self.get_or_raise(book_id, options=[selectinload(Book.likes)])
        user = await self.connect(User, user_id)
        book.likes.append(Like(user_id=user.id))
        await self.flush()
        return book.to_dict(with_likes=True)


# ---------------------------------------------------------------------------
# User repository
# ---------------------------------------------------------------------------

class UserRepository(BaseRepository[User]):
    """Repository used by the auth gate to resolve token subjects."""

    model = User


# ---------------------------------------------------------------------------
# FastAPI dependency factories
# ---------------------------------------------------------------------------

def get_user_repository(
    session: AsyncSession = Depends(get_session),
) -> UserRepository:
    """FastAPI dependency for UserRepository."""
    return UserRepository(session)


def get_book_repository(
    session: AsyncSession = Depends(get_session),
) -> BookRepository:
    """FastAPI dependency for BookRepository."""
    return BookRepository(session)
