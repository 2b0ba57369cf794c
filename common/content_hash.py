"""Content addresses: the digest that identifies a stored payload."""

import hashlib
import re

HASH_ALGORITHM = "sha256"

HASH_LENGTH = hashlib.new(HASH_ALGORITHM).digest_size * 2

_HASH_PATTERN = re.compile(rf"^[0-9a-f]{{{HASH_LENGTH}}}$")


def compute_content_hash(data: bytes) -> str:
    """
    Compute the content address of a payload.

    Only the bytes matter; filename and content type never enter the digest.

    Args:
        data: Payload bytes

    Returns:
        Lowercase hex digest, HASH_LENGTH characters long
    """
    return hashlib.new(HASH_ALGORITHM, data).hexdigest()


def verify_content_hash(data: bytes, expected: str) -> bool:
    """True if data is addressed by expected."""
    return is_valid_hash(expected) and compute_content_hash(data) == expected


def is_valid_hash(value: str) -> bool:
    """Check that a string has the shape of a content address."""
    return bool(_HASH_PATTERN.match(value or ""))


class IncrementalContentHasher:
    """
    Build a content address from a payload read in pieces.

    finalize() may be called any number of times and always returns the same
    address; feeding more data after that raises ValueError until reset().
    The number of bytes seen is tracked so callers can check it against the
    size a server reports.
    """

    algorithm = HASH_ALGORITHM

    def __init__(self):
        self.reset()

    @property
    def bytes_hashed(self) -> int:
        return self._bytes_hashed

    @property
    def finalized(self) -> bool:
        return self._address is not None

    def update(self, data: bytes) -> "IncrementalContentHasher":
        if self.finalized:
            raise ValueError("Content address already finalized")
        self._digest.update(data)
        self._bytes_hashed += len(data)
        return self

    def finalize(self) -> str:
        if self._address is None:
            self._address = self._digest.hexdigest()
        return self._address

    def reset(self) -> None:
        self._digest = hashlib.new(self.algorithm)
        self._bytes_hashed = 0
        self._address = None
