"""A network that plays the game by flipping one tile per step."""

from __future__ import annotations

import itertools
import random
from dataclasses import dataclass
from typing import Any

from .board import Position, TileState
from .game import Game
from .harness import NetworkHarness
from .kernel import Kernel
from .network import Network


@dataclass(frozen=True)
class NetworkPlayerConfig:
    """How a network player views the board."""

    kernel_diameter: int
    # Reuse network responses for identical kernels: faster, but removes any variety.
    use_kernel_cache: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "kernel_diameter": self.kernel_diameter,
            "use_kernel_cache": self.use_kernel_cache,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NetworkPlayerConfig:
        return cls(int(data["kernel_diameter"]), bool(data["use_kernel_cache"]))


@dataclass(frozen=True)
class NetworkPlayerMove:
    """A tile the player changed, and its new state."""

    position: Position
    new_state: TileState


@dataclass(frozen=True)
class KernelOutput:
    """Network response for one position."""

    score: float  # preference for choosing this position
    state: float  # how much the network wants the tile alive


class NetworkPlayer:
    """Picks the best-scoring tile and sets it to the state the network wants."""

    def __init__(self, config: NetworkPlayerConfig, network: Network) -> None:
        self.config = config
        self.network_harness: NetworkHarness[Kernel] = NetworkHarness(
            network, Kernel.input_providers(config.kernel_diameter)
        )
        self._kernel_cache: dict[Kernel, KernelOutput] | None = (
            {} if config.use_kernel_cache else None
        )

    def play_step(self, game: Game) -> NetworkPlayerMove | None:
        """Make one move on `game`; return it, or None if nothing changed."""
        chosen = self.compute(game)
        if chosen is None:
            return None
        position, output = chosen

        if output.state < -0.5:
            wanted = TileState.DEAD
        elif output.state >= 0.5:
            wanted = TileState.ALIVE
        else:
            return None

        if game.board[position] is wanted:
            return None
        game.board[position] = wanted
        return NetworkPlayerMove(position, wanted)

    def compute(self, game: Game) -> tuple[Position, KernelOutput] | None:
        """Score every position in random order and return the best one."""
        positions = [
            Position(x, y)
            for x, y in itertools.product(range(game.board.width), range(game.board.height))
        ]
        # Shuffled so the network cannot rely on the scan order.
        random.shuffle(positions)

        best: tuple[Position, KernelOutput] | None = None
        for pos in positions:
            output = self.compute_pos(game, pos)
            # Later candidates win ties, and NaN scores always replace the current best.
            if best is None or not best[1].score > output.score:
                best = (pos, output)
        return best

    def compute_pos(self, game: Game, pos: Position) -> KernelOutput:
        """Run the network on the kernel centred at `pos`."""
        kernel = self.get_kernel(game, pos)
        if self._kernel_cache is not None and kernel in self._kernel_cache:
            return self._kernel_cache[kernel]

        outputs = self.network_harness.compute(kernel)
        if len(outputs) < 2:
            raise ValueError("Not enough outputs in kernel network")
        output = KernelOutput(score=outputs[0], state=outputs[1])

        if self._kernel_cache is not None:
            self._kernel_cache[kernel] = output
        return output

    def get_kernel(self, game: Game, center_pos: Position) -> Kernel:
        """Collect the tiles around `center_pos`."""
        radius = self.config.kernel_diameter // 2
        offsets = range(-radius, radius + 1)
        tiles = []
        for rel_x, rel_y in itertools.product(offsets, offsets):
            x, y = center_pos.x + rel_x, center_pos.y + rel_y
            # Only strictly positive coordinates are looked up; row and column 0 read as off-board.
            if x > 0 and y > 0:
                tiles.append(game.board.get(Position(x, y)))
            else:
                tiles.append(None)
        return Kernel(tuple(tiles))