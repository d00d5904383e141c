"""Product database table model."""

from sqlmodel import Field

from src.student_store.entities._base import EntityTable


class ProductTable(EntityTable, table=True):
    """Database persistence model for products, stored in ``products``."""

    __tablename__ = "products"

    name: str
    price: float
    description: str = ""
    image: str = ""
    email: str = Field(index=True)
