"""Student entity module.

This module contains all Student-related classes organized by responsibility:
- Student: Domain entity
- StudentTable: Database persistence model (``userdb``)
- StudentRepository: Data access layer
"""

from .entity import Student
from .repository import StudentRepository
from .table import StudentTable

__all__ = ["Student", "StudentTable", "StudentRepository"]
