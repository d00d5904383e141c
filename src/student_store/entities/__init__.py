"""Entities organized by business concept.

Each entity has its own package containing:
- entity.py: Domain model
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .product import Product, ProductRepository, ProductTable
from .student import Student, StudentRepository, StudentTable

__all__ = [
    "Student",
    "StudentTable",
    "StudentRepository",
    "Product",
    "ProductTable",
    "ProductRepository",
]
