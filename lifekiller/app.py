"""The interactive client: a board window plus commands on standard input."""

from __future__ import annotations

import os
import sys
import threading
from collections.abc import Sequence

from . import renderer
from .board import GameBoard
from .cli import run_cli
from .game import Game
from .ticker import State


def create_state() -> State:
    """A 20x20 dead board under the default rule, with no tickers."""
    return State(Game(GameBoard(20, 20)))


def _run_cli_thread(state: State) -> None:
    try:
        run_cli(state)
    except SystemExit as exc:
        sys.stdout.flush()
        sys.stderr.flush()
        os._exit(exc.code if isinstance(exc.code, int) else 0)


def main(argv: Sequence[str] | None = None) -> int:
    """Start reading commands in the background and show the window."""
    state = create_state()
    threading.Thread(target=_run_cli_thread, args=(state,), daemon=True).start()
    renderer.run(state)
    return 0


if __name__ == "__main__":
    sys.exit(main())