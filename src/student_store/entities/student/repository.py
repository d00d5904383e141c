"""Data-access layer for students."""

import sqlalchemy as sa
from sqlmodel import Session, select

from .entity import Student
from .table import StudentTable


class StudentRepository:
    """Data-access layer for students.

    Each method issues a single statement; committing is left to the caller's
    session scope.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, name: str, email: str, password_hash: str) -> Student:
        row = StudentTable(name=name, email=email, password_hash=password_hash)
        self._session.add(row)
        self._session.flush()
        return Student.model_validate(row, from_attributes=True)

    def get(self, student_id: int) -> Student | None:
        row = self._session.get(StudentTable, student_id)
        if row is None:
            return None
        return Student.model_validate(row, from_attributes=True)

    def get_credentials(self, email: str) -> list[tuple[Student, str]]:
        """Return ``(student, password_hash)`` pairs for an email, oldest first."""
        statement = (
            select(StudentTable)
            .where(StudentTable.email == email)
            .order_by(StudentTable.id)
        )
        rows = self._session.exec(statement).all()
        return [
            (Student.model_validate(row, from_attributes=True), row.password_hash)
            for row in rows
        ]

    def update(
        self, student_id: int, name: str | None = None, email: str | None = None
    ) -> bool:
        """Set name and/or email; returns False when no row has that id."""
        values = {}
        if name is not None:
            values["name"] = name
        if email is not None:
            values["email"] = email
        if not values:
            return self.get(student_id) is not None

        statement = (
            sa.update(StudentTable)
            .where(StudentTable.id == student_id)
            .values(**values)
        )
        result = self._session.exec(statement)
        return result.rowcount > 0

    def set_password_hash(self, student_id: int, password_hash: str) -> bool:
        statement = (
            sa.update(StudentTable)
            .where(StudentTable.id == student_id)
            .values(password_hash=password_hash)
        )
        return self._session.exec(statement).rowcount > 0

    def delete(self, student_id: int) -> bool:
        """Physically remove a student; returns False when no row has that id."""
        statement = sa.delete(StudentTable).where(StudentTable.id == student_id)
        result = self._session.exec(statement)
        return result.rowcount > 0
