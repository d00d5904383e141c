"""FastAPI dependency implementations."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from src.student_store.api.http.app_data import ApplicationDependencies
from src.student_store.core.security import PasswordHasher
from src.student_store.core.services import (
    DbSessionService,
    ProductService,
    StudentService,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_database_service(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> DbSessionService:
    """Get the shared store client."""
    return app_deps.database_service


def get_password_hasher(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> PasswordHasher:
    return app_deps.password_hasher


def get_student_service(
    database_service: DbSessionService = Depends(get_database_service),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
) -> StudentService:
    """Get a student service bound to the shared store client."""
    return StudentService(database_service, password_hasher)


def get_product_service(
    database_service: DbSessionService = Depends(get_database_service),
) -> ProductService:
    """Get a product service bound to the shared store client."""
    return ProductService(database_service)


_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def request_body(model: type[ModelT]) -> Callable[[Request], Awaitable[ModelT]]:
    """Build a dependency that reads ``model`` from a JSON or HTML form body.

    Both encodings go through the same pydantic validation, so a bad field is
    a 400 whichever way it was sent.
    """

    async def parse(request: Request) -> ModelT:
        content_type = request.headers.get("content-type", "")
        if content_type.startswith(_FORM_TYPES):
            data: Any = dict(await request.form())
        else:
            try:
                data = await request.json()
            except ValueError:
                raise RequestValidationError(
                    [{"type": "json_invalid", "loc": ("body",), "msg": "Invalid JSON body"}]
                ) from None
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise RequestValidationError(
                [{**error, "loc": ("body", *error["loc"])} for error in e.errors()]
            ) from None

    return parse
