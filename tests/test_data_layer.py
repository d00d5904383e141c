"""Data layer tests: entities, tables and repositories on in-memory SQLite."""

import pytest
import sqlalchemy as sa
from pydantic import ValidationError
from sqlmodel import select

from src.student_store.core.services import DbSessionService
from src.student_store.entities.product import Product, ProductRepository, ProductTable
from src.student_store.entities.student import Student, StudentRepository, StudentTable
from src.student_store.runtime.init_db import init_db


class TestStudentEntity:
    """Test Student domain entity."""

    def test_student_creation(self):
        """Test student entity creation."""
        student = Student(name="Ada", email="ada@example.com")

        assert student.id is None  # Assigned by the store
        assert student.created_at is not None
        assert student.updated_at is not None

    def test_student_equality_ignores_timestamps(self):
        """Test that equality compares identity and data, not timestamps."""
        first = Student(id=1, name="Ada", email="ada@example.com")
        second = Student(id=1, name="Ada", email="ada@example.com")
        other = Student(id=2, name="Ada", email="ada@example.com")

        assert first == second
        assert hash(first) == hash(second)
        assert first != other

    def test_student_has_no_password_field(self):
        """Test that the domain entity never carries the password hash."""
        assert "password" not in Student.model_fields
        assert "password_hash" not in Student.model_fields


class TestProductEntity:
    """Test Product domain entity."""

    def test_product_defaults(self):
        """Test product optional field defaults."""
        product = Product(name="Lamp", price=12.5, email="ada@example.com")

        assert product.description == ""
        assert product.image == ""

    def test_negative_price_rejected(self):
        """Test that a negative price fails validation."""
        with pytest.raises(ValidationError):
            Product(name="Lamp", price=-1, email="ada@example.com")


class TestStudentRepository:
    """Test student persistence."""

    def test_create_assigns_fresh_ids(self, session):
        """Test that each create gets a new id."""
        repository = StudentRepository(session)

        first = repository.create("Ada", "ada@example.com", "hash-1")
        second = repository.create("Grace", "grace@example.com", "hash-2")
        session.commit()

        assert isinstance(first.id, int)
        assert first.id != second.id
        rows = session.exec(select(StudentTable)).all()
        assert len(rows) == 2

    def test_table_name(self):
        """Test the students table name."""
        assert StudentTable.__tablename__ == "userdb"

    def test_get(self, session):
        """Test fetching a student by id."""
        repository = StudentRepository(session)
        created = repository.create("Ada", "ada@example.com", "hash")
        session.commit()

        assert repository.get(created.id) == created
        assert repository.get(created.id + 100) is None

    def test_get_credentials_oldest_first(self, session):
        """Duplicate emails are allowed; credentials come back in id order."""
        repository = StudentRepository(session)
        first = repository.create("Ada", "shared@example.com", "hash-1")
        second = repository.create("Ada Two", "shared@example.com", "hash-2")
        repository.create("Grace", "grace@example.com", "hash-3")
        session.commit()

        credentials = repository.get_credentials("shared@example.com")

        assert [(s.id, h) for s, h in credentials] == [
            (first.id, "hash-1"),
            (second.id, "hash-2"),
        ]
        assert repository.get_credentials("nobody@example.com") == []

    def test_update(self, session):
        """Test updating name and email."""
        repository = StudentRepository(session)
        created = repository.create("Ada", "ada@example.com", "hash")
        session.commit()

        assert repository.update(created.id, name="Ada L.", email="ada@lovelace.org")
        session.commit()
        session.expire_all()

        updated = repository.get(created.id)
        assert updated.name == "Ada L."
        assert updated.email == "ada@lovelace.org"

    def test_update_single_field(self, session):
        """Test updating one field leaves the other alone."""
        repository = StudentRepository(session)
        created = repository.create("Ada", "ada@example.com", "hash")
        session.commit()

        assert repository.update(created.id, email="new@example.com")
        session.commit()
        session.expire_all()

        updated = repository.get(created.id)
        assert updated.name == "Ada"
        assert updated.email == "new@example.com"

    def test_update_missing_id(self, session):
        """Test that updating an absent id reports no change."""
        repository = StudentRepository(session)
        assert repository.update(999, name="Nobody", email="no@example.com") is False

    def test_update_without_values_reports_existence(self, session):
        """Test an empty update on present and absent ids."""
        repository = StudentRepository(session)
        created = repository.create("Ada", "ada@example.com", "hash")
        session.commit()

        assert repository.update(created.id) is True
        assert repository.update(999) is False

    def test_delete_removes_only_target(self, session):
        """Test that delete removes exactly one row."""
        repository = StudentRepository(session)
        keep = repository.create("Ada", "ada@example.com", "hash")
        drop = repository.create("Grace", "grace@example.com", "hash")
        session.commit()

        assert repository.delete(drop.id) is True
        session.commit()
        session.expire_all()

        remaining = session.exec(select(StudentTable)).all()
        assert [row.id for row in remaining] == [keep.id]
        assert repository.delete(drop.id) is False


class TestProductRepository:
    """Test product persistence."""

    def test_create_and_get(self, session):
        """Test product create and read-back."""
        repository = ProductRepository(session)
        created = repository.create(
            Product(
                name="Lamp",
                price=12.5,
                description="Desk lamp",
                image="https://img.example.com/lamp.png",
                email="ada@example.com",
            )
        )
        session.commit()

        assert isinstance(created.id, int)
        fetched = repository.get(created.id)
        assert fetched == created
        assert fetched.price == 12.5

    def test_create_ignores_client_id(self, session):
        """Ids always come from the store."""
        repository = ProductRepository(session)
        created = repository.create(
            Product(id=4242, name="Lamp", price=1, email="ada@example.com")
        )
        session.commit()

        assert created.id != 4242
        assert session.get(ProductTable, 4242) is None

    def test_list_filters_by_owner(self, session):
        """Test listing products by owner email."""
        repository = ProductRepository(session)
        repository.create(Product(name="Lamp", price=1, email="ada@example.com"))
        repository.create(Product(name="Desk", price=2, email="grace@example.com"))
        repository.create(Product(name="Chair", price=3, email="ada@example.com"))
        session.commit()

        assert [p.name for p in repository.list_all()] == ["Lamp", "Desk", "Chair"]
        assert [p.name for p in repository.list_all(email="ada@example.com")] == [
            "Lamp",
            "Chair",
        ]
        assert repository.list_all(email="nobody@example.com") == []


class TestInitDb:
    """Test table creation."""

    def test_creates_both_tables(self, database_config):
        """Test that both tables are created."""
        service = DbSessionService(database_config)
        try:
            init_db(service)
            tables = set(sa.inspect(service.engine).get_table_names())
        finally:
            service.dispose()

        assert {"userdb", "products"} <= tables

    def test_idempotent(self, database_service):
        """Test that running table creation twice is harmless."""
        init_db(database_service)
        init_db(database_service)

        assert database_service.health_check() is True
