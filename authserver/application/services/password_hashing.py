"""Password hashing strategies."""

from __future__ import annotations

from argon2 import PasswordHasher as _Argon2Hasher
from argon2 import Type
from argon2.exceptions import InvalidHashError, VerificationError

from authserver.domain.users.exceptions import StoredHashCorruptedError
from authserver.domain.users.repositories import PasswordHasher


class Argon2PasswordHasher(PasswordHasher):
    """Argon2id hashing for passwords and stored refresh tokens.

    ``verify`` answers ``False`` for a wrong secret and raises
    :class:`StoredHashCorruptedError` when the stored value is not an
    Argon2 hash at all.
    """

    def __init__(self, *, time_cost: int = 3, memory_cost: int = 65536, parallelism: int = 4) -> None:
        self._hasher = _Argon2Hasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, hashed: str, password: str) -> bool:
        try:
            return self._hasher.verify(hashed, password)
        except InvalidHashError as exc:
            raise StoredHashCorruptedError("Stored hash is malformed") from exc
        except VerificationError:
            return False
