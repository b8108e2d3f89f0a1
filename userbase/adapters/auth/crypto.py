from functools import lru_cache

from passlib.context import CryptContext

from userbase.rules.models import PasswordHashingRules


@lru_cache(maxsize=None)
def _crypt_context(scheme: str, rounds: int) -> CryptContext:
    context = CryptContext(
        schemes=[scheme],
        deprecated="auto",
        **{f"{scheme}__rounds": rounds},
    )
    # Materialize the throwaway hash so each later dummy_verify is a single verification
    context.dummy_verify()
    return context


class PasslibPasswordHasher:
    """Salted one-way password hashing backed by a passlib CryptContext.

    Contexts are shared per (scheme, rounds); dummy_verify is one verification.
    """

    def __init__(self, scheme: str = "bcrypt", rounds: int = 10) -> None:
        self.scheme = scheme
        self.rounds = rounds
        self._context = _crypt_context(scheme, rounds)

    @classmethod
    def from_rules(cls, rules: PasswordHashingRules) -> "PasslibPasswordHasher":
        return cls(scheme=rules.scheme, rounds=rules.rounds)

    def hash_password(self, plain: str) -> str:
        result: str = self._context.hash(plain)
        return result

    def verify_password(self, plain: str, hashed: str) -> bool:
        try:
            result: bool = self._context.verify(plain, hashed)
        except ValueError:
            # Stored value is not a hash this context understands
            return False
        return result

    def dummy_verify(self) -> None:
        """Spend the same time as a real verification against a throwaway hash."""
        self._context.dummy_verify()
