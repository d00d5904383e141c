"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import StaticPool, exc, text
from sqlmodel import Session, SQLModel, create_engine

from src.student_store.core.exceptions import StoreError, StoreUnavailableError
from src.student_store.runtime.config.config_data import DatabaseConfig
from src.student_store.runtime.context import get_config

# Errors that mean the store itself could not be reached
_UNAVAILABLE_ERRORS = (
    exc.OperationalError,
    exc.InterfaceError,
    exc.DisconnectionError,
    exc.TimeoutError,
)


def translate_store_error(error: exc.SQLAlchemyError) -> StoreError:
    """Map a SQLAlchemy error onto the API error taxonomy."""
    if isinstance(error, _UNAVAILABLE_ERRORS):
        return StoreUnavailableError()
    return StoreError()


class DbSessionService:
    """Store client: owns the shared engine and hands out sessions.

    One instance is created per application and injected into handlers, so
    tests can build their own against an in-memory database.
    """

    def __init__(self, db_config: DatabaseConfig | None = None):
        """Initialize the shared database engine and session factory."""
        self._config = db_config or get_config().database

        logger.info("Configuring database engine for environment: {}", self._config.environment_mode)
        engine_kwargs: dict[str, Any] = {
            "echo": self._config.echo,
            "connect_args": self._get_connect_args(),
        }

        if self._config.is_memory:
            # One shared connection so every session sees the same in-memory database
            engine_kwargs["poolclass"] = StaticPool
        elif not self._config.is_sqlite:
            engine_kwargs.update(
                {
                    "pool_size": self._config.pool_size,
                    "max_overflow": self._config.max_overflow,
                    "pool_timeout": self._config.pool_timeout,
                    "pool_recycle": self._config.pool_recycle,
                    "pool_pre_ping": True,
                }
            )

        self._engine = create_engine(self._config.connection_string, **engine_kwargs)

        if self._config.environment_mode == "production":
            logger.bind(
                pool_size=self._config.pool_size,
                max_overflow=self._config.max_overflow,
                pool_timeout=self._config.pool_timeout,
            ).info("Database engine initialized")

    def _get_connect_args(self) -> dict:
        """Get database-specific connection arguments."""
        connect_args = {}

        if self._config.is_sqlite:
            connect_args.update(
                {
                    "check_same_thread": False,  # Sessions are used from the threadpool
                    "timeout": 20,  # Lock timeout
                }
            )
            if self._config.environment_mode == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider MySQL or PostgreSQL."
                )
        elif self._config.url.startswith("mysql"):
            connect_args["connect_timeout"] = self._config.pool_timeout
        elif self._config.url.startswith("postgresql"):
            connect_args.update(
                {
                    "application_name": f"{self._config.environment_mode}_student_store",
                    "connect_timeout": self._config.pool_timeout,
                }
            )

        return connect_args

    @property
    def engine(self):
        return self._engine

    def create_all(self) -> None:
        """Create all database tables."""
        from src.student_store.entities.product import ProductTable  # noqa: F401
        from src.student_store.entities.student import StudentTable  # noqa: F401

        try:
            SQLModel.metadata.create_all(self._engine)
        except exc.SQLAlchemyError as e:
            logger.bind(error_type=type(e).__name__).error("Failed to create tables")
            raise translate_store_error(e) from e
        logger.info("Database initialized with tables.")

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,  # Prevent lazy loading issues
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session that commits on success and rolls back on failure.

        SQLAlchemy errors leave this scope as ``StoreError`` or
        ``StoreUnavailableError``.
        """
        db = self.get_session()
        try:
            yield db
            db.commit()
        except exc.SQLAlchemyError as e:
            db.rollback()
            logger.bind(
                error_type=type(e).__name__,
                error_message=str(e),
            ).error("Database transaction failed")
            raise translate_store_error(e) from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except exc.SQLAlchemyError as e:
            logger.bind(
                error_type=type(e).__name__,
                error_message=str(e),
            ).error("Database health check failed")
            return False

    def dispose(self) -> None:
        """Release pooled connections."""
        self._engine.dispose()
