"""Database initialization script."""

from src.student_store.core.services.database.db_session import DbSessionService


def init_db(database_service: DbSessionService | None = None) -> None:
    """Create all database tables."""
    database_service = database_service or DbSessionService()
    database_service.create_all()


if __name__ == "__main__":
    init_db()
