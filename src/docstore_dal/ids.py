"""Document id generation."""

import secrets
import string

DEFAULT_ID_ALPHABET = string.ascii_letters + string.digits
DEFAULT_ID_LENGTH = 20


class RandomIdGenerator:
    """Fixed-length ids drawn uniformly from an alphabet with a CSPRNG."""

    __slots__ = ("_alphabet", "_length")

    def __init__(
        self,
        length: int = DEFAULT_ID_LENGTH,
        alphabet: str = DEFAULT_ID_ALPHABET,
    ) -> None:
        if length <= 0:
            msg = "Id length must be positive"
            raise ValueError(msg)
        if not alphabet:
            msg = "Id alphabet must not be empty"
            raise ValueError(msg)
        self._length = length
        self._alphabet = alphabet

    def generate(self) -> str:
        return "".join(secrets.choice(self._alphabet) for _ in range(self._length))
