"""Password hashing utilities."""

import base64
import hashlib
import hmac
import secrets

ALGORITHM = "pbkdf2_sha256"


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


class PasswordHasher:
    """Salted PBKDF2-HMAC-SHA256 password hashing.

    Encoded hashes have the form ``pbkdf2_sha256$<iterations>$<salt>$<digest>``
    with URL-safe base64 salt and digest, so the iteration count travels with
    each stored hash and can be raised without invalidating old ones.
    """

    def __init__(self, iterations: int = 600_000, salt_bytes: int = 16) -> None:
        if iterations < 1:
            raise ValueError("iterations must be positive")
        self.iterations = iterations
        self.salt_bytes = salt_bytes

    def _derive(self, password: str, salt: bytes, iterations: int) -> bytes:
        return hashlib.pbkdf2_hmac(
            "sha256", password.encode("utf-8"), salt, iterations
        )

    def hash(self, password: str) -> str:
        """Hash a password with a fresh random salt.

        Args:
            password: Cleartext password

        Returns:
            Encoded hash suitable for storage
        """
        salt = secrets.token_bytes(self.salt_bytes)
        digest = self._derive(password, salt, self.iterations)
        return f"{ALGORITHM}${self.iterations}${_b64encode(salt)}${_b64encode(digest)}"

    def verify(self, password: str, encoded: str) -> bool:
        """Check a password against an encoded hash in constant time.

        Malformed hashes never verify.
        """
        try:
            algorithm, iterations, salt, digest = encoded.split("$")
            if algorithm != ALGORITHM:
                return False
            expected = _b64decode(digest)
            actual = self._derive(password, _b64decode(salt), int(iterations))
        except (ValueError, TypeError):
            return False
        return hmac.compare_digest(expected, actual)

    def needs_rehash(self, encoded: str) -> bool:
        """True when a stored hash uses different parameters than this hasher."""
        try:
            algorithm, iterations, _salt, _digest = encoded.split("$")
            return algorithm != ALGORITHM or int(iterations) != self.iterations
        except ValueError:
            return True
