"""Student database table model."""

from sqlmodel import Field

from src.student_store.entities._base import EntityTable


class StudentTable(EntityTable, table=True):
    """Database persistence model for students.

    Stored in the ``userdb`` table. Email is indexed for login lookups but
    not unique.
    """

    __tablename__ = "userdb"

    name: str
    email: str = Field(index=True)
    password_hash: str
