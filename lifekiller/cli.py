"""Line-based commands that control the client state."""

from __future__ import annotations

import re
import sys
from collections.abc import Iterable, Iterator
from typing import TextIO

from .board import GameBoard
from .networksave import NetworkSave
from .ticker import MLTicker, NatureTicker, State, Ticker, TickerHost

_UNSIGNED = re.compile(r"\+?[0-9]+")

DEFAULT_INTERVAL_MILLIS = 200


class CommandError(Exception):
    """A command could not be carried out."""


def _try_unsigned(text: str | None) -> int | None:
    if text is None or not _UNSIGNED.fullmatch(text):
        return None
    return int(text)


def _unsigned(text: str | None, missing: str, invalid: str | None = None) -> int:
    if text is None:
        raise CommandError(missing)
    value = _try_unsigned(text)
    if value is None:
        raise CommandError(invalid or f"invalid number '{text}'")
    return value


def _network_ticker_factory(path: str):
    def factory() -> Ticker:
        save = NetworkSave.load(path)
        return MLTicker(save.network, save.player_config)

    return factory


def _start(state: State, args: Iterator[str]) -> None:
    name = next(args, None)
    if name is None:
        raise CommandError("No name provided")

    interval_millis = _try_unsigned(next(args, None))
    if interval_millis is None:
        interval_millis = DEFAULT_INTERVAL_MILLIS

    kind = next(args, None)
    if kind in (None, "nature"):
        factory = NatureTicker
    elif kind == "network":
        path = next(args, None)
        if path is None:
            raise CommandError("No network path provided")
        factory = _network_ticker_factory(path)
    else:
        raise CommandError(f"Unknown ticker type '{kind}'")

    host = TickerHost.start(state, interval_millis / 1000, factory)
    with state.lock:
        state.tickers[name] = host


def handle_cmd(state: State, args: Iterable[str]) -> None:
    """Run one command given as its words; print OK on success, raise CommandError otherwise."""
    args = iter(args)
    command = next(args, None)
    if command is None:
        raise CommandError("No command")

    if command == "step":
        times = _try_unsigned(next(args, None) or "1")
        if times is None:
            raise CommandError("Not a valid integer")
        with state.lock:
            for _ in range(times):
                state.game.tick()

    elif command == "start":
        _start(state, args)

    elif command == "stop":
        name = next(args, None)
        if name is None:
            raise CommandError("No name provided")
        with state.lock:
            host = state.tickers.pop(name, None)
        if host is None:
            raise CommandError(f"No active ticker with name '{name}'")
        host.stop()

    elif command == "clear":
        with state.lock:
            state.game.board.clear()

    elif command == "resize":
        width = _unsigned(next(args, None), "missing width")
        height = _unsigned(next(args, None), "missing height")
        with state.lock:
            state.game.board.resize(width, height)

    elif command == "random":
        alive_count = _unsigned(next(args, None), "missing alive count")
        block_size = _try_unsigned(next(args, None))
        if block_size is None:
            block_size = 1
        with state.lock:
            board = state.game.board
            try:
                state.game.board = GameBoard.new_random(
                    board.width, board.height, alive_count, block_size
                )
            except ValueError as exc:
                raise CommandError(str(exc)) from exc

    elif command == "setrate":
        rate = _unsigned(next(args, None), "Missing tick rate millis", "Not a valid integer")
        with state.lock:
            for host in state.tickers.values():
                host.set_rate(rate)

    elif command == "exit":
        sys.exit(0)

    else:
        raise CommandError("Unknown command")

    print("OK")


def run_cli(state: State, stream: TextIO | None = None) -> None:
    """Read commands line by line, reporting failures on stderr."""
    for line in sys.stdin if stream is None else stream:
        try:
            handle_cmd(state, line.split())
        except CommandError as exc:
            print(f"! {exc}", file=sys.stderr)