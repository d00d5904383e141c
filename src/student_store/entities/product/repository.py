from sqlmodel import Session, select

from .entity import Product
from .table import ProductTable


class ProductRepository:
    """Data-access layer for products."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, product: Product) -> Product:
        row = ProductTable.model_validate(
            product.model_dump(exclude={"id", "created_at", "updated_at"})
        )
        self._session.add(row)
        self._session.flush()
        return Product.model_validate(row, from_attributes=True)

    def get(self, product_id: int) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return Product.model_validate(row, from_attributes=True)

    def list_all(self, email: str | None = None) -> list[Product]:
        statement = select(ProductTable).order_by(ProductTable.id)
        if email is not None:
            statement = statement.where(ProductTable.email == email)
        rows = self._session.exec(statement).all()
        return [Product.model_validate(row, from_attributes=True) for row in rows]
