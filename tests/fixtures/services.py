from __future__ import annotations

from collections.abc import Callable, Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import exc

from src.student_store.api.http.app import create_app
from src.student_store.api.http.app_data import ApplicationDependencies
from src.student_store.core.security import PasswordHasher
from src.student_store.core.services import (
    DbSessionService,
    ProductService,
    StudentService,
)
from src.student_store.runtime.config.config_data import ConfigData, DatabaseConfig


@pytest.fixture
def student_service(
    database_service: DbSessionService, password_hasher: PasswordHasher
) -> StudentService:
    return StudentService(database_service, password_hasher)


@pytest.fixture
def product_service(database_service: DbSessionService) -> ProductService:
    return ProductService(database_service)


@pytest.fixture
def app_dependencies(
    database_service: DbSessionService, password_hasher: PasswordHasher
) -> ApplicationDependencies:
    return ApplicationDependencies(
        database_service=database_service,
        password_hasher=password_hasher,
    )


@pytest.fixture
def client(app_dependencies: ApplicationDependencies) -> Generator[TestClient]:
    """Test client wired to the in-memory store."""
    config = ConfigData(database=DatabaseConfig(url="sqlite://", environment_mode="test"))
    app = create_app(dependencies=app_dependencies, config=config)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fail_store(
    database_service: DbSessionService, monkeypatch: pytest.MonkeyPatch
) -> Callable[[exc.SQLAlchemyError], MagicMock]:
    """Make every statement on ``database_service`` raise the given error."""

    def _fail(error: exc.SQLAlchemyError) -> MagicMock:
        broken_session = MagicMock()
        broken_session.exec.side_effect = error
        broken_session.get.side_effect = error
        broken_session.flush.side_effect = error
        monkeypatch.setattr(database_service, "get_session", lambda: broken_session)
        return broken_session

    return _fail


def connection_refused() -> exc.OperationalError:
    return exc.OperationalError(
        "SELECT 1", {}, Exception("(2003) Can't connect to MySQL server")
    )


def duplicate_key() -> exc.IntegrityError:
    return exc.IntegrityError(
        "INSERT INTO userdb", {}, Exception("UNIQUE constraint failed")
    )
