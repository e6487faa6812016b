"""
Password hashing - bcrypt implementation of the PasswordHasher port.
"""

import base64
import hashlib
from dataclasses import dataclass

import bcrypt


def _password_bytes(plaintext: str) -> bytes:
    """
    Digest the password to a fixed 44-byte input for bcrypt.

    bcrypt only reads 72 bytes and accepted passwords run to 256 characters,
    so every password is pre-hashed with SHA-256. Base64 keeps NUL bytes out
    of the bcrypt input.
    """
    return base64.b64encode(hashlib.sha256(plaintext.encode("utf-8")).digest())


@dataclass(frozen=True)
class BcryptPasswordHasher:
    """
    Salted bcrypt hashing with a tunable work factor.

    Both operations are CPU-bound and deliberately slow; treat them as
    blocking work when sizing worker pools.
    """

    rounds: int = 10

    def hash(self, plaintext: str) -> str:
        return bcrypt.hashpw(_password_bytes(plaintext), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, hashed: str, plaintext: str) -> bool:
        """
        Check ``plaintext`` against a stored hash in constant time.

        A malformed stored hash is treated as a mismatch.
        """
        try:
            return bcrypt.checkpw(_password_bytes(plaintext), hashed.encode())
        except ValueError:
            return False
