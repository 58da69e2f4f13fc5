"""Database helpers shared by the test modules."""
from sqlalchemy import func, select

from verticals.books.models.db_models import Book


async def seed(database, *items):
    """Commit items in their own session and return their ids as strings."""
    async with database.session() as session:
        session.add_all(items)
        await session.flush()
        return [str(item.id) for item in items]


async def count_rows(database, model=Book) -> int:
    async with database.session() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()
