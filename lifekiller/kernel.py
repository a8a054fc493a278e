"""The square neighbourhood of tiles a network player looks at."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from .board import TileState


def _provider_for(tile_index: int) -> Callable[[Kernel], float]:
    def provide(kernel: Kernel) -> float:
        return kernel.input_value(tile_index)

    return provide


@dataclass(frozen=True)
class Kernel:
    """Tiles around a centre position, column by column; None lies off the board."""

    tiles: tuple[TileState | None, ...]

    @staticmethod
    def input_providers(kernel_diameter: int) -> Iterator[Callable[[Kernel], float]]:
        """Yield one network input provider per kernel tile."""
        for tile_index in range(kernel_diameter**2):
            yield _provider_for(tile_index)

    def input_value(self, tile_index: int) -> float:
        """Network input for a tile: 1 for alive, -1 for dead, -0 when off the board."""
        if not 0 <= tile_index < len(self.tiles):
            raise IndexError("Not enough input tiles")
        tile = self.tiles[tile_index]
        if tile is TileState.ALIVE:
            return 1.0
        if tile is None:
            return -0.0
        return -1.0