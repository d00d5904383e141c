from loguru import logger

from src.student_store.core.exceptions import RecordNotFoundError
from src.student_store.core.services.database.db_session import DbSessionService
from src.student_store.entities.product import Product, ProductRepository


class ProductNotFoundError(RecordNotFoundError):
    default_message = "Product not found"


class ProductService:
    """Product listings owned by students."""

    def __init__(self, database_service: DbSessionService):
        self._database_service = database_service

    def create(self, product: Product) -> Product:
        with self._database_service.session_scope() as session:
            created = ProductRepository(session).create(product)
        logger.bind(product_id=created.id).info("product.created")
        return created

    def get(self, product_id: int) -> Product:
        with self._database_service.session_scope() as session:
            product = ProductRepository(session).get(product_id)
        if product is None:
            raise ProductNotFoundError()
        return product

    def list_products(self, email: str | None = None) -> list[Product]:
        with self._database_service.session_scope() as session:
            return ProductRepository(session).list_all(email=email)
