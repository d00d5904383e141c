"""Student domain entity."""

from typing import Any

from pydantic import Field

from src.student_store.entities._base import Entity


class Student(Entity):
    """A registered student account.

    The password hash stays on the table model; the entity only carries the
    fields that may leave the service.
    """

    name: str = Field(description="Student's display name")
    email: str = Field(description="Student's email address")

    def __eq__(self, other: Any) -> bool:
        """Compare students by business attributes, ignoring timestamps."""
        if not isinstance(other, Student):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.email == other.email
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((self.id, self.name, self.email))
