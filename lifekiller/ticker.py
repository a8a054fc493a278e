"""Shared client state and background tickers that advance it."""

from __future__ import annotations

import queue
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field

from .game import Game
from .network import Network
from .player import NetworkPlayer, NetworkPlayerConfig


@dataclass
class State:
    """The game shown by the client and its running tickers; guard with `lock`."""

    game: Game
    tickers: dict[str, TickerHost] = field(default_factory=dict)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)


class Ticker(ABC):
    """Something that changes the state once per tick."""

    @abstractmethod
    def tick(self, state: State) -> None:
        """Advance `state` by one step."""


class NatureTicker(Ticker):
    """Advances the game by its own rule."""

    def tick(self, state: State) -> None:
        state.game.tick()


class MLTicker(Ticker):
    """Lets a network make one move per tick."""

    def __init__(self, network: Network, config: NetworkPlayerConfig) -> None:
        self.network = network
        self.player = NetworkPlayer(config, network)

    def tick(self, state: State) -> None:
        self.player.play_step(state.game)


class TickerHost:
    """A background thread ticking a ticker until stopped."""

    def __init__(
        self,
        stop_event: threading.Event,
        rates: queue.SimpleQueue[int],
        thread: threading.Thread,
    ) -> None:
        self._stop_event = stop_event
        self._rates = rates
        self.thread = thread

    @classmethod
    def start(
        cls,
        state: State,
        interval: float,
        ticker_factory: Callable[[], Ticker],
    ) -> TickerHost:
        """Start ticking `state` every `interval` seconds with a ticker made in the thread."""
        stop_event = threading.Event()
        rates: queue.SimpleQueue[int] = queue.SimpleQueue()

        def loop() -> None:
            ticker = ticker_factory()
            current = interval
            while not stop_event.is_set():
                with state.lock:
                    ticker.tick(state)
                try:
                    current = rates.get_nowait() / 1000
                except queue.Empty:
                    pass
                stop_event.wait(current)

        thread = threading.Thread(target=loop, daemon=True)
        thread.start()
        return cls(stop_event, rates, thread)

    def stop(self) -> None:
        """Ask the thread to finish after its current tick."""
        self._stop_event.set()

    def set_rate(self, rate_millis: int) -> None:
        """Change the interval between ticks, in milliseconds."""
        self._rates.put(rate_millis)