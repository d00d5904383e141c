"""Core services exports."""

from .database.db_session import DbSessionService
from .product.product_service import ProductNotFoundError, ProductService
from .student.student_service import StudentNotFoundError, StudentService

__all__ = [
    # Database Service
    "DbSessionService",
    # Student Services
    "StudentService",
    "StudentNotFoundError",
    # Product Services
    "ProductService",
    "ProductNotFoundError",
]
