"""Entity: Product."""

from typing import Any

from pydantic import Field

from src.student_store.entities._base import Entity


class Product(Entity):
    """Product entity representing a listing owned by a student.

    ``email`` names the owner; it is not checked against registered students.
    """

    name: str = Field(description="Product name")
    price: float = Field(ge=0, description="Product price")
    description: str = Field(default="", description="Product description")
    image: str = Field(default="", description="Image URL or reference")
    email: str = Field(description="Owner's email address")

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes, ignoring timestamps."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.price == other.price
            and self.description == other.description
            and self.image == other.image
            and self.email == other.email
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.name,
            self.price,
            self.description,
            self.image,
            self.email,
        ))
