"""Password hashing with bcrypt."""

import logging
from functools import lru_cache

import bcrypt

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12
# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


@lru_cache(maxsize=4)
def _dummy_hash(rounds: int) -> bytes:
    return bcrypt.hashpw(b"no-such-user", bcrypt.gensalt(rounds=rounds))


class PasswordHasher:
    """Salted one-way hashing of user passwords."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        """Initialize hasher.

        Args:
            rounds: bcrypt cost factor (log2 of the iteration count)
        """
        self.rounds = rounds

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:MAX_PASSWORD_BYTES]

    def hash(self, password: str) -> str:
        """Hash a password with a fresh random salt.

        Hashing the same password twice gives two different strings.
        """
        return bcrypt.hashpw(self._encode(password), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored hash.

        Returns False for a malformed hash instead of raising.
        """
        try:
            return bcrypt.checkpw(self._encode(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError) as e:
            logger.warning(f"Password verification against malformed hash: {e}")
            return False

    def verify_dummy(self, password: str) -> bool:
        """Spend the same bcrypt work as verify() for a login with no matching user.

        Always returns False.
        """
        bcrypt.checkpw(self._encode(password), _dummy_hash(self.rounds))
        return False
