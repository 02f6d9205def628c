from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from tabulate import tabulate

from protocol import Move, MoveSet, Outcome

TABLE_TITLE = "Rules of the game"


@dataclass(frozen=True)
class RuleTable:
    move_set: MoveSet
    _grid: Mapping[tuple[Move, Move], Outcome]

    @classmethod
    def build(cls, move_set: MoveSet) -> "RuleTable":
        grid = {(a, b): move_set.compare(a, b) for a in move_set for b in move_set}
        return cls(move_set=move_set, _grid=MappingProxyType(grid))

    def lookup(self, a: Move, b: Move) -> Outcome:
        """Outcome for ``a`` played against ``b``."""
        try:
            return self._grid[(a, b)]
        except KeyError:
            raise KeyError(f"unknown move pair: {a!r} vs {b!r}") from None

    def row(self, a: Move) -> dict[Move, Outcome]:
        return {b: self._grid[(a, b)] for b in self.move_set}

    def render(self) -> str:
        headers = ["You v PC >"] + list(self.move_set)
        rows = [[a] + [self._grid[(a, b)] for b in self.move_set] for a in self.move_set]
        return f"{TABLE_TITLE}\n" + tabulate(rows, headers=headers, tablefmt="grid", disable_numparse=True)
