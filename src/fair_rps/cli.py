from __future__ import annotations

import argparse
import logging
import sys

from commit_reveal import FairnessViolation, verify_commitment
from protocol import ConfigurationError
from session import GameSession, InvalidChoice, RoundResult

logger = logging.getLogger(__name__)

EXAMPLE = "Example: rps rock paper scissors"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="rps",
        description="Provably fair rock-paper-scissors over any odd number of moves.",
        epilog=EXAMPLE,
    )
    parser.add_argument("moves", nargs="*", help="Distinct move names, an odd number >= 3")
    parser.add_argument("--rounds", type=_positive_int, default=1, help="Rounds to play before exiting (default: 1)")
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS)

    args = parser.parse_intermixed_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        session = GameSession.from_moves(args.moves)
    except ConfigurationError as exc:
        print(f"Invalid input: {exc}.", file=sys.stderr)
        print("Please enter an odd number >= 3 of non-repeating moves.", file=sys.stderr)
        print(EXAMPLE, file=sys.stderr)
        return 1

    try:
        play(session, rounds=args.rounds)
    except FairnessViolation:
        logger.exception("commitment check failed")
        raise
    except (KeyboardInterrupt, EOFError):
        # Closing input mid-round exits without revealing anything.
        session.exit()
        print()
    return 0


def verify_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="rps-verify",
        description="Check that a revealed HMAC key reproduces the digest shown before your move.",
    )
    parser.add_argument("--move", required=True, help="Computer move as printed after the round")
    parser.add_argument("--key", required=True, help="HMAC key (hex) printed after the round")
    parser.add_argument("--digest", required=True, help="HMAC printed before you chose")
    args = parser.parse_args(argv)

    if verify_commitment(expected_digest=args.digest, move=args.move, key=args.key):
        print(f"OK: HMAC-SHA256(key, {args.move!r}) matches the published digest")
        return 0
    print("Mismatch: the key and move do not reproduce the published digest", file=sys.stderr)
    return 1


def play(session: GameSession, rounds: int = 1) -> list[RoundResult]:
    results: list[RoundResult] = []
    while len(results) < rounds:
        result = play_round(session)
        if result is None:
            break
        _show_result(result)
        results.append(result)
    return results


def play_round(session: GameSession) -> RoundResult | None:
    """Run the prompt loop for one round; ``None`` means the player exited."""
    session.commit()
    session.await_input()
    while True:
        _show_menu(session)
        try:
            action = session.submit(input("Enter your move: "))
        except InvalidChoice as exc:
            print(exc)
            session.commit()
            session.await_input()
            continue

        if action == "exit":
            return None
        if action == "help":
            print(session.rules.render())
            if not _prompt_help_choice():
                session.exit()
                return None
            continue
        return action


def _prompt_help_choice() -> bool:
    while True:
        print("1 - Play")
        print("0 - Exit")
        choice = input("Enter your choice: ").strip()
        if choice == "1":
            return True
        if choice == "0":
            return False
        print("Invalid input. Please enter 1 or 0.")


def _show_menu(session: GameSession) -> None:
    print(f"HMAC: {session.digest}")
    print("Available moves:")
    for number, name in enumerate(session.move_set, start=1):
        print(f"{number} - {name}")
    print("0 - Exit")
    print("? - Help")


def _show_result(result: RoundResult) -> None:
    print(f"Your move: {result.human_move}")
    print(f"Computer move: {result.system_move}")
    print(f"You {result.outcome}!")
    print(f"HMAC key: {result.key}")


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return number


if __name__ == "__main__":
    raise SystemExit(main())
