"""
Password hashing utilities using Argon2id.
"""

from passlib.context import CryptContext

# Hash of an unrelated, unguessable password. Verified against whenever the
# requested username does not exist so both failure paths cost the same.
DUMMY_PASSWORD_HASH = (
    "$argon2id$v=19$m=15000,t=2,p=1$"
    "gZiV/M1gPc22ElAH/Jh1Hw$CWOrkoo7oJBQ/iyh7uJ0LO2aLEfrHwTWllSAxT0zRno"
)


class PasswordHasher:
    """Password hashing and verification using Argon2id."""

    def __init__(
        self,
        memory_cost: int = 15000,
        time_cost: int = 2,
        parallelism: int = 1,
    ):
        self._context = CryptContext(
            schemes=["argon2"],
            deprecated="auto",
            argon2__type="ID",
            argon2__memory_cost=memory_cost,
            argon2__time_cost=time_cost,
            argon2__parallelism=parallelism,
        )

    def hash(self, password: str) -> str:
        """
        Hash a password using Argon2id.

        Args:
            password: Plain text password to hash

        Returns:
            PHC-formatted hash string (salt and parameters included)
        """
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against a hash.

        This is CPU and memory heavy by design; call it off the event loop.

        Args:
            plain_password: Plain text password to verify
            hashed_password: Stored PHC hash string

        Returns:
            True if password matches, False otherwise

        Raises:
            ValueError: if the stored hash cannot be parsed
        """
        return self._context.verify(plain_password, hashed_password)
