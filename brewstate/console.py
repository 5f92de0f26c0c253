"""
Command prompt driver for the coffee machine.

The loop asks the controller for its state and menu, lets the operator pick
one entry and submits it. Everything that blocks on the operator lives here;
the controller itself never reads input.
"""
import argparse
import sys
from typing import Callable, Optional, Sequence

from brewstate.config import LOG_LEVELS, MachineSettings, get_settings
from brewstate.controller import MachineController
from brewstate.domain.actions import InvalidActionError


def resolve_choice(answer: str, labels: Sequence[str]) -> str:
    """Turn a 1-based menu number into its label; anything else passes through."""
    answer = answer.strip()
    if answer.isdecimal():
        index = int(answer) - 1
        if 0 <= index < len(labels):
            return labels[index]
    return answer


def prompt_choice(prompt: str) -> Callable[[Sequence[str]], str]:
    def choose(labels: Sequence[str]) -> str:
        for number, label in enumerate(labels, start=1):
            print(f"  {number}) {label}")
        return input(prompt)

    return choose


def run(
    controller: MachineController,
    choose: Callable[[Sequence[str]], str],
    emit: Callable[[str], None] = print,
    max_actions: Optional[int] = None,
) -> int:
    """
    Drive ``controller`` until input ends or ``max_actions`` actions were accepted.

    Returns:
        The number of accepted actions.
    """
    accepted = 0
    emit(controller.render_status())
    while max_actions is None or accepted < max_actions:
        state = controller.current_state()
        labels = controller.available_actions(state)
        try:
            answer = choose(labels)
        except (EOFError, KeyboardInterrupt):
            break
        try:
            emit(controller.submit(resolve_choice(answer, labels)))
        except InvalidActionError as exc:
            emit(str(exc))
            continue
        accepted += 1
    return accepted


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the coffee machine simulator.")
    parser.add_argument("--max-actions", type=int, default=None, help="Stop after this many accepted actions.")
    parser.add_argument(
        "--log-level", type=str.upper, choices=LOG_LEVELS, default=None, help="Log level for machine events."
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    overrides = {}
    if args.max_actions is not None:
        overrides["max_actions"] = args.max_actions
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if overrides:
        settings = MachineSettings(**{**settings.model_dump(), **overrides})

    controller = MachineController(settings=settings)
    run(controller, prompt_choice(settings.prompt), max_actions=settings.max_actions)
    return 0


if __name__ == "__main__":
    sys.exit(main())
