from loguru import logger

from src.student_store.core.exceptions import (
    AuthenticationFailedError,
    RecordNotFoundError,
    StoreError,
)
from src.student_store.core.security import PasswordHasher
from src.student_store.core.services.database.db_session import DbSessionService
from src.student_store.entities.student import Student, StudentRepository


class StudentNotFoundError(RecordNotFoundError):
    default_message = "Student not found"


class StudentService:
    """Registration, login and maintenance of student accounts.

    Every operation runs in its own session scope, so a failure in one request
    never leaves a half-applied write behind.
    """

    def __init__(
        self,
        database_service: DbSessionService,
        password_hasher: PasswordHasher,
    ):
        self._database_service = database_service
        self._password_hasher = password_hasher

    def register(self, name: str, email: str, password: str) -> Student:
        """Create a student with a hashed password.

        Args:
            name: Display name
            email: Login email (duplicates are allowed)
            password: Cleartext password, hashed before it reaches the store

        Returns:
            The stored student with its new id
        """
        password_hash = self._password_hasher.hash(password)
        with self._database_service.session_scope() as session:
            student = StudentRepository(session).create(name, email, password_hash)
        logger.bind(student_id=student.id).info("student.created")
        return student

    def authenticate(self, email: str, password: str) -> Student:
        """Return the first student with this email whose password verifies.

        Raises:
            AuthenticationFailedError: No student matches the credentials
        """
        with self._database_service.session_scope() as session:
            candidates = StudentRepository(session).get_credentials(email)

        if not candidates:
            # Spend the same hashing time as a real check
            self._password_hasher.hash(password)
            logger.info("student.login_failed")
            raise AuthenticationFailedError()

        for student, password_hash in candidates:
            if self._password_hasher.verify(password, password_hash):
                if self._password_hasher.needs_rehash(password_hash):
                    self._rehash(student, password)
                logger.bind(student_id=student.id).info("student.login")
                return student

        logger.info("student.login_failed")
        raise AuthenticationFailedError()

    def _rehash(self, student: Student, password: str) -> None:
        new_hash = self._password_hasher.hash(password)
        try:
            with self._database_service.session_scope() as session:
                StudentRepository(session).set_password_hash(student.id, new_hash)
        except StoreError as e:
            # The old hash still verifies; retry on the next login
            logger.bind(student_id=student.id, error_type=type(e).__name__).warning(
                "student.password_rehash_failed"
            )
            return
        logger.bind(student_id=student.id).info("student.password_rehashed")

    def get(self, student_id: int) -> Student:
        with self._database_service.session_scope() as session:
            student = StudentRepository(session).get(student_id)
        if student is None:
            raise StudentNotFoundError()
        return student

    def update(
        self, student_id: int, name: str | None = None, email: str | None = None
    ) -> None:
        """Change name and/or email.

        Raises:
            StudentNotFoundError: No student has this id
        """
        with self._database_service.session_scope() as session:
            updated = StudentRepository(session).update(student_id, name=name, email=email)
            if not updated:
                raise StudentNotFoundError()
        logger.bind(student_id=student_id).info("student.updated")

    def delete(self, student_id: int) -> None:
        """Physically remove a student.

        Raises:
            StudentNotFoundError: No student has this id
        """
        with self._database_service.session_scope() as session:
            deleted = StudentRepository(session).delete(student_id)
            if not deleted:
                raise StudentNotFoundError()
        logger.bind(student_id=student_id).info("student.deleted")
