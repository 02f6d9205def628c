from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
APP_DIR = ROOT / "src" / "fair_rps"
sys.path.insert(0, str(APP_DIR))

from commit_reveal import verify_commitment  # type: ignore[import-not-found]  # noqa: E402
from protocol import DRAW, LOSE, WIN  # type: ignore[import-not-found]  # noqa: E402
from session import GameSession, InvalidChoice  # type: ignore[import-not-found]  # noqa: E402

CLASSIC = ["rock", "paper", "scissors"]


def _session(system_move: str = "rock") -> GameSession:
    session = GameSession.from_moves(CLASSIC)
    session.chooser = lambda names: system_move
    return session


def test_round_walks_through_states() -> None:
    session = _session("scissors")
    assert session.state == "idle"
    digest = session.commit()
    assert session.state == "move_committed"
    session.await_input()
    assert session.state == "awaiting_input"
    result = session.submit("1")
    assert session.state == "resolved"
    assert result.human_move == "rock"
    assert result.system_move == "scissors"
    assert result.outcome == WIN
    assert result.digest == digest
    assert verify_commitment(expected_digest=digest, move=result.system_move, key=result.key)


@pytest.mark.parametrize("raw,outcome", [("1", DRAW), ("2", WIN), ("3", LOSE)])
def test_outcome_is_from_the_human_side(raw: str, outcome: str) -> None:
    session = _session("rock")
    session.commit()
    session.await_input()
    assert session.submit(raw).outcome == outcome


def test_cannot_resolve_before_commit() -> None:
    session = _session()
    with pytest.raises(RuntimeError):
        session.submit("1")
    session.commit()
    with pytest.raises(RuntimeError):
        session.submit("1")


def test_help_does_not_consume_the_round() -> None:
    session = _session()
    digest = session.commit()
    session.await_input()
    assert session.submit("?") == "help"
    assert session.state == "awaiting_input"
    assert session.digest == digest
    assert session.rounds_played == 0


def test_exit_does_not_resolve() -> None:
    session = _session()
    session.commit()
    session.await_input()
    assert session.submit("0") == "exit"
    assert session.state == "exited"
    assert session.rounds_played == 0
    with pytest.raises(RuntimeError):
        session.commit()


@pytest.mark.parametrize("raw", ["99", "4", "-1", "abc", "", "1.5", "²"])
def test_invalid_choices_are_recoverable(raw: str) -> None:
    session = _session()
    session.commit()
    session.await_input()
    with pytest.raises(InvalidChoice, match="between 0 and 3"):
        session.submit(raw)
    assert session.state == "awaiting_input"
    assert session.submit("2").human_move == "paper"


def test_rule_table_is_reused_across_rounds() -> None:
    session = GameSession.from_moves(CLASSIC)
    rules = session.rules
    digests = set()
    for _ in range(3):
        digests.add(session.commit())
        session.await_input()
        session.submit("1")
    assert session.rules is rules
    assert session.rounds_played == 3
    assert len(digests) == 3


def test_system_move_is_roughly_uniform() -> None:
    names = ["a", "b", "c", "d", "e"]
    session = GameSession.from_moves(names)
    trials = 5000
    counts: Counter[str] = Counter()
    for _ in range(trials):
        session.commit()
        session.await_input()
        counts[session.submit("1").system_move] += 1
    expected = trials / len(names)
    assert set(counts) == set(names)
    # roughly six standard deviations
    for name in names:
        assert abs(counts[name] - expected) < 6 * (expected * (1 - 1 / len(names))) ** 0.5


def test_resolve_without_commitment_raises() -> None:
    session = _session()
    with pytest.raises(RuntimeError, match="no move has been committed"):
        session._resolve("rock")
