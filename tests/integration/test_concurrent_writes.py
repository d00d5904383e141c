"""Concurrent requests against one shared store client."""

from collections.abc import Generator
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlmodel import select

from src.student_store.core.services import DbSessionService, StudentService
from src.student_store.entities.student import StudentTable
from src.student_store.runtime.config.config_data import DatabaseConfig


@pytest.fixture
def file_database_service(tmp_path) -> Generator[DbSessionService]:
    """A file-backed SQLite store so each thread gets its own connection."""
    config = DatabaseConfig(url=f"sqlite:///{tmp_path / 'students.db'}", environment_mode="test")
    service = DbSessionService(config)
    service.create_all()
    try:
        yield service
    finally:
        service.dispose()


class TestConcurrentCreates:
    """Concurrent creates never lose writes or share ids."""

    def test_two_students_get_distinct_ids(self, file_database_service, password_hasher):
        """Test that two simultaneous creates get different ids."""
        service = StudentService(file_database_service, password_hasher)

        with ThreadPoolExecutor(max_workers=2) as pool:
            futures = [
                pool.submit(service.register, "Ada", "ada@example.com", "a"),
                pool.submit(service.register, "Grace", "grace@example.com", "g"),
            ]
            students = [future.result() for future in futures]

        assert students[0].id != students[1].id

    def test_many_concurrent_creates(self, file_database_service, password_hasher):
        """Test that no write is lost under many concurrent creates."""
        service = StudentService(file_database_service, password_hasher)

        with ThreadPoolExecutor(max_workers=8) as pool:
            students = list(
                pool.map(
                    lambda i: service.register(f"Student {i}", f"s{i}@example.com", "pw"),
                    range(24),
                )
            )

        ids = {student.id for student in students}
        assert len(ids) == 24

        with file_database_service.session_scope() as session:
            rows = session.exec(select(StudentTable)).all()
        assert {row.id for row in rows} == ids
