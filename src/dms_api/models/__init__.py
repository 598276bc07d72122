"""Central exports for DMS SQLAlchemy models."""

from .category import Category
from .department import Department
from .document import Document
from .user import AccessToken, User, UserRole

__all__ = [
    "AccessToken",
    "Category",
    "Department",
    "Document",
    "User",
    "UserRole",
]
