"""Product API router."""

from fastapi import APIRouter, Depends, Query

from src.student_store.api.http.deps import get_product_service, request_body
from src.student_store.api.http.schemas import (
    CreatedResponse,
    ProductCreateRequest,
    ProductResponse,
)
from src.student_store.core.services import ProductService
from src.student_store.entities.product import Product

router = APIRouter(tags=["products"])


@router.post("/add-product", response_model=CreatedResponse)
def add_product(
    body: ProductCreateRequest = Depends(request_body(ProductCreateRequest)),
    service: ProductService = Depends(get_product_service),
) -> CreatedResponse:
    """Create a new product."""
    created = service.create(Product(**body.model_dump()))
    return CreatedResponse(message="Product Added", id=created.id)


@router.get("/products/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """Get a product by ID."""
    return ProductResponse.model_validate(service.get(product_id))


@router.get("/products", response_model=list[ProductResponse])
def list_products(
    email: str | None = Query(default=None, description="Filter by owner email"),
    service: ProductService = Depends(get_product_service),
) -> list[ProductResponse]:
    """List products, optionally only those owned by one email."""
    return [
        ProductResponse.model_validate(product)
        for product in service.list_products(email=email)
    ]
