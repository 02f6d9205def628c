from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from typing import Final

from protocol import Move, Reveal

logger = logging.getLogger(__name__)

KEY_BYTES: Final[int] = 32


class FairnessViolation(RuntimeError):
    """A revealed key does not reproduce the digest published for the round."""


def generate_key(num_bytes: int = KEY_BYTES) -> bytes:
    return secrets.token_bytes(num_bytes)


def compute_digest(*, key: bytes, move: Move) -> str:
    return hmac.new(key, move.encode("utf-8"), hashlib.sha256).hexdigest()


def verify_commitment(*, expected_digest: str, move: Move, key: str) -> bool:
    """Check a published digest against a revealed move and hex key."""
    try:
        raw_key = bytes.fromhex(key)
    except ValueError:
        return False
    computed = compute_digest(key=raw_key, move=move)
    return secrets.compare_digest(expected_digest.lower().encode("utf-8"), computed.encode("ascii"))


class Commitment:
    """The computer's hidden move for one round.

    Only the digest is readable until :meth:`reveal` is called, which hands out
    the move and key once.
    """

    __slots__ = ("_move", "_key", "_digest", "_revealed")

    def __init__(self, move: Move, key: bytes) -> None:
        self._move = move
        self._key = key
        self._digest = compute_digest(key=key, move=move)
        self._revealed = False

    @classmethod
    def create(cls, move: Move) -> "Commitment":
        commitment = cls(move, generate_key())
        logger.debug("committed to a move, digest=%s", commitment.digest)
        return commitment

    @property
    def digest(self) -> str:
        return self._digest

    @property
    def revealed(self) -> bool:
        return self._revealed

    def reveal(self) -> Reveal:
        if self._revealed:
            raise RuntimeError("commitment was already revealed")
        self._revealed = True
        reveal = Reveal(move=self._move, key=self._key.hex())
        if not verify_commitment(expected_digest=self._digest, move=reveal.move, key=reveal.key):
            raise FairnessViolation(f"revealed key does not match digest {self._digest}")
        return reveal

    def __repr__(self) -> str:
        return f"Commitment(digest={self._digest!r}, revealed={self._revealed})"
