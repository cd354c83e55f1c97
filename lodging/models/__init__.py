"""SQLAlchemy models for the lodging store.

All models are imported here so that ``init_db`` can discover them via
Base.metadata. If you add a new model, import it in this file.
"""

from lodging.models.collection import Collection

__all__ = [
    "Collection",
]
