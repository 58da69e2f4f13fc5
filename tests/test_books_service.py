"""Test the book service against an in-memory database."""
import uuid

import pytest
from sqlalchemy import func, select

from core.errors import ConflictError, NotFoundError, ValidationError
from patterns.repository import RecordNotFound, RelatedRecordNotFound
from verticals.books.models.db_models import Book, Like
from verticals.books.models.schemas import BookCreate, BookUpdate
from verticals.books.repository import BookRepository
from verticals.books.service import BookService

from helpers import count_rows, seed


def make_service(session) -> BookService:
    return BookService(BookRepository(session))


def payload(author_id, **overrides) -> BookCreate:
    data = {"title": "The Dispossessed", "rating": 5, "price": 18.5, "authorId": author_id}
    data.update(overrides)
    return BookCreate(**data)


@pytest.mark.asyncio
async def test_create_returns_book_with_generated_id(session, author_id):
    service = make_service(session)
    book = await service.create(payload(author_id))
    assert uuid.UUID(book["id"])
    assert book["title"] == "The Dispossessed"
    assert book["rating"] == 5
    assert book["price"] == 18.5
    assert book["authorId"] == author_id
    assert book["createdAt"] is not None


@pytest.mark.asyncio
async def test_get_by_id_embeds_author(session, author_id):
    service = make_service(session)
    created = await service.create(payload(author_id))
    book = await service.get_by_id(created["id"])
    assert book["id"] == created["id"]
    assert book["title"] == created["title"]
    assert book["author"]["id"] == author_id
    assert book["author"]["name"] == "Ursula K. Le Guin"


@pytest.mark.asyncio
async def test_get_by_id_missing(session):
    service = make_service(session)
    missing = str(uuid.uuid4())
    with pytest.raises(NotFoundError, match=f"Book with id {missing} not found"):
        await service.get_by_id(missing)


@pytest.mark.asyncio
async def test_get_by_id_malformed_id_is_not_found(session):
    service = make_service(session)
    with pytest.raises(NotFoundError):
        await service.get_by_id("not-a-uuid")


@pytest.mark.asyncio
async def test_get_all_includes_authors(session, author_id, other_author_id):
    service = make_service(session)
    await service.create(payload(author_id, title="A Wizard of Earthsea"))
    await service.create(payload(other_author_id, title="Kindred"))
    books = await service.get_all()
    assert [b["title"] for b in books] == ["A Wizard of Earthsea", "Kindred"]
    assert books[1]["author"]["name"] == "Octavia E. Butler"


@pytest.mark.asyncio
async def test_get_all_empty(session):
    assert await make_service(session).get_all() == []


@pytest.mark.asyncio
async def test_create_duplicate_title_conflicts(database, session, author_id):
    await seed(database, Book(title="Taken", rating=3, price=10, author_id=uuid.UUID(author_id)))
    service = make_service(session)
    with pytest.raises(ConflictError, match="Name is already taken"):
        await service.create(payload(author_id, title="Taken"))
    assert await count_rows(database) == 1


@pytest.mark.asyncio
async def test_create_unknown_author_propagates(database, session):
    service = make_service(session)
    with pytest.raises(RelatedRecordNotFound):
        await service.create(payload(str(uuid.uuid4())))
    assert await count_rows(database) == 0


@pytest.mark.asyncio
async def test_update_overwrites_every_field(session, author_id, other_author_id):
    service = make_service(session)
    created = await service.create(payload(author_id))
    await service.update_by_id(
        created["id"],
        BookUpdate(title="Parable of the Sower", rating=4, price=12, authorId=other_author_id),
    )
    book = await service.get_by_id(created["id"])
    assert book["title"] == "Parable of the Sower"
    assert book["rating"] == 4
    assert book["price"] == 12
    assert book["authorId"] == other_author_id
    assert book["author"]["name"] == "Octavia E. Butler"


@pytest.mark.asyncio
async def test_update_missing_raises_store_error(session, author_id):
    service = make_service(session)
    with pytest.raises(RecordNotFound):
        await service.update_by_id(str(uuid.uuid4()), BookUpdate(title="Lathe of Heaven", rating=3, price=9, authorId=author_id))


@pytest.mark.asyncio
async def test_delete_then_get_is_not_found(session, author_id):
    service = make_service(session)
    created = await service.create(payload(author_id))
    deleted = await service.delete_by_id(created["id"])
    assert deleted["id"] == created["id"]
    with pytest.raises(NotFoundError):
        await service.get_by_id(created["id"])


@pytest.mark.asyncio
async def test_delete_missing_raises_store_error(session):
    with pytest.raises(RecordNotFound):
        await make_service(session).delete_by_id(str(uuid.uuid4()))


@pytest.mark.asyncio
async def test_like_book_records_user(session, author_id, user_id):
    service = make_service(session)
    created = await service.create(payload(author_id))
    book = await service.like_book(created["id"], user_id)
    assert [like["userId"] for like in book["likes"]] == [user_id]
    assert book["likes"][0]["bookId"] == created["id"]


@pytest.mark.asyncio
async def test_like_book_allows_duplicates(session, author_id, user_id):
    service = make_service(session)
    created = await service.create(payload(author_id))
    await service.like_book(created["id"], user_id)
    book = await service.like_book(created["id"], user_id)
    assert [like["userId"] for like in book["likes"]] == [user_id, user_id]


@pytest.mark.asyncio
async def test_like_book_missing_book_is_client_error(session, user_id):
    with pytest.raises(ValidationError, match="Book or user don't exist"):
        await make_service(session).like_book(str(uuid.uuid4()), user_id)


@pytest.mark.asyncio
async def test_like_book_missing_user_is_client_error(session, author_id):
    service = make_service(session)
    created = await service.create(payload(author_id))
    with pytest.raises(ValidationError, match="Book or user don't exist"):
        await service.like_book(created["id"], str(uuid.uuid4()))


@pytest.mark.asyncio
async def test_delete_removes_likes(session, author_id, user_id):
    service = make_service(session)
    created = await service.create(payload(author_id))
    await service.like_book(created["id"], user_id)
    await service.delete_by_id(created["id"])
    result = await session.execute(select(func.count()).select_from(Like))
    assert result.scalar_one() == 0
