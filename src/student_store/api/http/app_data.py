from dataclasses import dataclass

from src.student_store.core.security import PasswordHasher
from src.student_store.core.services import DbSessionService
from src.student_store.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    password_hasher: PasswordHasher

    @classmethod
    def from_config(cls, config: ConfigData) -> "ApplicationDependencies":
        return cls(
            database_service=DbSessionService(config.database),
            password_hasher=PasswordHasher(
                iterations=config.security.password_hash_iterations,
                salt_bytes=config.security.password_salt_bytes,
            ),
        )
