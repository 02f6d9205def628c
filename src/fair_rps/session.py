from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass, field
from typing import Callable, Literal, Sequence

from commit_reveal import Commitment
from protocol import Move, MoveSet, Outcome
from rules import RuleTable

logger = logging.getLogger(__name__)

RoundState = Literal["idle", "move_committed", "awaiting_input", "resolved", "exited"]
Action = Literal["help", "exit"]

HELP_CHOICE = "?"
EXIT_CHOICE = 0


class InvalidChoice(ValueError):
    def __init__(self, raw: str, upper: int) -> None:
        self.raw = raw
        self.upper = upper
        super().__init__(f"Invalid input. Please enter a number between 0 and {upper}.")


@dataclass(frozen=True)
class RoundResult:
    human_move: Move
    system_move: Move
    outcome: Outcome
    key: str
    digest: str


@dataclass
class GameSession:
    """One round at a time: commit, take the human's choice, then reveal.

    The commitment is only revealed from ``awaiting_input``, after the human's
    choice is known.
    """

    rules: RuleTable
    chooser: Callable[[Sequence[Move]], Move] = field(default=secrets.choice, repr=False)
    state: RoundState = "idle"
    rounds_played: int = 0
    _commitment: Commitment | None = field(default=None, repr=False)

    @classmethod
    def from_moves(cls, names: list[str]) -> "GameSession":
        return cls(rules=RuleTable.build(MoveSet.from_args(names)))

    @property
    def move_set(self) -> MoveSet:
        return self.rules.move_set

    @property
    def digest(self) -> str:
        if self._commitment is None:
            raise RuntimeError("no move has been committed yet")
        return self._commitment.digest

    def commit(self) -> str:
        """Pick the computer's move and publish its digest."""
        if self.state == "exited":
            raise RuntimeError("session has exited")
        # An unrevealed commitment is dropped here when the prompt restarts.
        system_move = self.chooser(self.move_set.names)
        self._commitment = Commitment.create(system_move)
        self.state = "move_committed"
        return self._commitment.digest

    def await_input(self) -> None:
        self._require("move_committed")
        self.state = "awaiting_input"

    def submit(self, raw: str) -> RoundResult | Action:
        self._require("awaiting_input")
        choice = raw.strip()
        if choice == HELP_CHOICE:
            return "help"
        upper = len(self.move_set)
        if not (choice.isascii() and choice.isdigit()):
            raise InvalidChoice(raw, upper)
        number = int(choice)
        if number > upper:
            raise InvalidChoice(raw, upper)
        if number == EXIT_CHOICE:
            self.exit()
            return "exit"
        return self._resolve(self.move_set.by_number(number))

    def exit(self) -> None:
        self.state = "exited"

    def _resolve(self, human_move: Move) -> RoundResult:
        if self._commitment is None:
            raise RuntimeError("no move has been committed yet")
        reveal = self._commitment.reveal()
        outcome = self.rules.lookup(human_move, reveal.move)
        self.state = "resolved"
        self.rounds_played += 1
        logger.debug("round %d resolved: %s vs %s -> %s", self.rounds_played, human_move, reveal.move, outcome)
        return RoundResult(
            human_move=human_move,
            system_move=reveal.move,
            outcome=outcome,
            key=reveal.key,
            digest=self._commitment.digest,
        )

    def _require(self, state: RoundState) -> None:
        if self.state != state:
            raise RuntimeError(f"expected state {state!r}, session is {self.state!r}")
