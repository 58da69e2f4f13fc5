"""SQLAlchemy models for the books vertical.

Each model inherits from Base and uses RecordMixin for its id and audit
columns. The to_dict() methods provide the camelCase serialisation used by
the repository and router.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.models.base import Base, RecordMixin, isoformat, utcnow


class Author(RecordMixin, Base):
    """A book author. Only referenced through Book.author_id."""

    __tablename__ = "authors"

    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }


class User(RecordMixin, Base):
    """An account that can authenticate and like books."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="user")

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "email": self.email,
            "role": self.role,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }


class Book(RecordMixin, Base):
    """A book in the catalog."""

    __tablename__ = "books"

    title: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("authors.id"), nullable=False, index=True
    )

    author: Mapped["Author"] = relationship()
    likes: Mapped[list["Like"]] = relationship(
        back_populates="book", cascade="all, delete-orphan", order_by="Like.created_at"
    )

    def to_dict(self, with_author: bool = False, with_likes: bool = False) -> dict:
        data = {
            "id": str(self.id),
            "title": self.title,
            "rating": self.rating,
            "price": self.price,
            "authorId": str(self.author_id),
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if with_author:
            data["author"] = self.author.to_dict() if self.author else None
        if with_likes:
            data["likes"] = [like.to_dict() for like in self.likes]
        return data


class Like(Base):
    """Join row between a book and a user who liked it.

    There is no uniqueness on (book_id, user_id); a user may like the same
    book more than once.
    """

    __tablename__ = "likes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    book_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("books.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )

    book: Mapped["Book"] = relationship(back_populates="likes")

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "bookId": str(self.book_id),
            "userId": str(self.user_id),
            "createdAt": isoformat(self.created_at),
        }
