"""Books vertical: books, their authors and likes.

Layers, leaf first:
- SQLAlchemy models with RecordMixin
- Async repository with relational connects and store error kinds
- Book service translating store conditions into domain errors
- Explicit route table registered on a FastAPI router
- Dataclass configuration
"""
