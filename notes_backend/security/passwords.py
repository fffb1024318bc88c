from passlib.context import CryptContext

DEFAULT_ROUNDS = 12


# PUBLIC_INTERFACE
class PasswordHasher:
    """
    bcrypt hashing via passlib.

    Every call to hash() draws a fresh salt, so the same plaintext produces a
    different hash for every account.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )

    def hash(self, plaintext: str) -> str:
        if not plaintext:
            raise ValueError("cannot hash an empty password")
        return self.pwd_context.hash(plaintext)

    def verify(self, plaintext: str, hashed: str) -> bool:
        if not plaintext or not self.is_hash(hashed):
            return False
        return self.pwd_context.verify(plaintext, hashed)

    def is_hash(self, value) -> bool:
        """True if value looks like a hash this context produced."""
        if not value:
            return False
        return self.pwd_context.identify(value) is not None
