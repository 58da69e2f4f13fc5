"""Books API router: CRUD plus the like relation.

Routes are declared in a single explicit table (method, path, handler,
status, auth) and registered on an APIRouter by build_router(). Mutating
routes require an authenticated principal; PUT and DELETE check that the
book exists before touching it.
"""

from dataclasses import dataclass
from typing import Any, Callable
from uuid import UUID

from fastapi import APIRouter, Depends

from api.auth import get_current_user
from verticals.books.models.schemas import (
    BookCreate,
    BookUpdate,
    LikeRequest,
    MessageResponse,
)
from verticals.books.service import BookService, get_book_service


# ============================================================================
# Handlers
# ============================================================================

async def list_books(service: BookService = Depends(get_book_service)):
    """List every book with its author."""
    return await service.get_all()


async def get_book(book_id: str, service: BookService = Depends(get_book_service)):
    """Get a single book with its author."""
    return await service.get_by_id(book_id)


async def create_book(
    request: BookCreate,
    service: BookService = Depends(get_book_service),
):
    """Add a new book to the catalog."""
    return await service.create(request)


async def like_book(
    request: LikeRequest,
    service: BookService = Depends(get_book_service),
):
    """Record that a user likes a book."""
    return await service.like_book(request.book_id, request.user_id)


async def update_book(
    book_id: UUID,
    request: BookUpdate,
    service: BookService = Depends(get_book_service),
):
    """Replace a book. Every field is required."""
    await service.get_by_id(book_id)
    await service.update_by_id(book_id, request)
    return {"message": f"Book with id {book_id} has been updated"}


async def delete_book(
    book_id: UUID,
    service: BookService = Depends(get_book_service),
):
    """Remove a book from the catalog."""
    await service.get_by_id(book_id)
    await service.delete_by_id(book_id)
    return {"message": f"Order with id {book_id} has been deleted"}


# ============================================================================
# Route table
# ============================================================================

@dataclass(frozen=True)
class Route:
    method: str
    path: str
    endpoint: Callable[..., Any]
    status_code: int = 200
    authenticated: bool = False
    response_model: Any = None


# /books/like precedes /books/{book_id} so the literal path wins
ROUTES: tuple[Route, ...] = (
    Route("GET", "/books", list_books),
    Route("GET", "/books/{book_id}", get_book),
    Route("POST", "/books", create_book, status_code=201, authenticated=True),
    Route("POST", "/books/like", like_book, authenticated=True),
    Route("PUT", "/books/{book_id}", update_book, authenticated=True, response_model=MessageResponse),
    Route("DELETE", "/books/{book_id}", delete_book, authenticated=True, response_model=MessageResponse),
)


def build_router(routes: tuple[Route, ...] = ROUTES) -> APIRouter:
    """Register every entry of the route table on a fresh APIRouter."""
    router = APIRouter()
    for route in routes:
        router.add_api_route(
            route.path,
            route.endpoint,
            methods=[route.method],
            status_code=route.status_code,
            response_model=route.response_model,
            dependencies=[Depends(get_current_user)] if route.authenticated else None,
        )
    return router
