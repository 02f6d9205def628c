from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final, Iterator, Literal

logger = logging.getLogger(__name__)

Move = str
Outcome = Literal["Win", "Lose", "Draw"]

WIN: Final[Outcome] = "Win"
LOSE: Final[Outcome] = "Lose"
DRAW: Final[Outcome] = "Draw"

MIN_MOVES: Final[int] = 3


class ConfigurationError(ValueError):
    """The move names cannot form a playable game."""


def validate_moves(names: list[str] | tuple[str, ...]) -> None:
    if len(names) < MIN_MOVES:
        raise ConfigurationError(f"at least {MIN_MOVES} moves are required, got {len(names)}")
    if len(names) % 2 == 0:
        raise ConfigurationError(f"the number of moves must be odd, got {len(names)}")
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ConfigurationError("moves must not repeat: " + ", ".join(duplicates))


@dataclass(frozen=True)
class MoveSet:
    """Ordered, distinct move names arranged on a circle.

    Each move loses to the (N-1)/2 moves that follow it and beats the (N-1)/2
    moves that precede it, wrapping around the end of the sequence.
    """

    names: tuple[Move, ...]

    def __post_init__(self) -> None:
        validate_moves(self.names)

    @classmethod
    def from_args(cls, args: list[str]) -> "MoveSet":
        move_set = cls(tuple(args))
        logger.debug("accepted %d moves: %s", len(move_set), ", ".join(move_set.names))
        return move_set

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self) -> Iterator[Move]:
        return iter(self.names)

    @property
    def half(self) -> int:
        return (len(self.names) - 1) // 2

    def index(self, name: Move) -> int:
        try:
            return self.names.index(name)
        except ValueError:
            raise KeyError(f"unknown move: {name!r}") from None

    def by_number(self, number: int) -> Move:
        # 1-based, as shown in the move menu
        if not 1 <= number <= len(self.names):
            raise IndexError(f"move number out of range: {number}")
        return self.names[number - 1]

    def _ahead(self, name: Move) -> list[Move]:
        i = self.index(name)
        n = len(self.names)
        return [self.names[(i + k) % n] for k in range(1, n)]

    def losing_to(self, name: Move) -> tuple[Move, ...]:
        """Moves that beat ``name``."""
        return tuple(self._ahead(name)[: self.half])

    def beating(self, name: Move) -> tuple[Move, ...]:
        """Moves that ``name`` beats."""
        return tuple(list(reversed(self._ahead(name)))[: self.half])

    def compare(self, a: Move, b: Move) -> Outcome:
        """Outcome of ``a`` played against ``b``, from ``a``'s side."""
        if self.index(a) == self.index(b):
            return DRAW
        if b in self.losing_to(a):
            return LOSE
        if b in self.beating(a):
            return WIN
        raise AssertionError(f"{b!r} is neither ahead of nor behind {a!r}")


@dataclass(frozen=True)
class Reveal:
    move: Move
    key: str
