"""Game board, tile states, positions and life rules."""

from __future__ import annotations

import itertools
import random
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum


class TileState(Enum):
    """State of a single board tile."""

    ALIVE = "alive"
    DEAD = "dead"


@dataclass(frozen=True)
class Position:
    """A tile coordinate on the board."""

    x: int
    y: int

    def __add__(self, other: object) -> Position:
        if not isinstance(other, Position):
            return NotImplemented
        return Position(self.x + other.x, self.y + other.y)


PositionLike = Position | Sequence[int]


def _as_position(pos: PositionLike) -> Position:
    if isinstance(pos, Position):
        return pos
    x, y = pos
    return Position(x, y)


@dataclass
class Rule:
    """Neighbour counts that give birth to a dead cell or keep a live one alive."""

    birth: tuple[int, ...] = (3,)
    survive: tuple[int, ...] = (2, 3)


@dataclass
class GameBoard:
    """A rectangular grid of tiles, stored row by row."""

    width: int
    height: int
    tiles: list[TileState] | None = field(default=None)

    def __post_init__(self) -> None:
        if self.tiles is None:
            self.tiles = [TileState.DEAD] * (self.width * self.height)

    @classmethod
    def new_random(
        cls, width: int, height: int, alive_cells: int, block_size: int
    ) -> GameBoard:
        """Create a board with `alive_cells` randomly placed square blocks of live cells."""
        if block_size > width or block_size > height:
            raise ValueError("Block size larger than the board")

        board = cls(width, height)
        available = [
            Position(x, y)
            for x, y in itertools.product(
                range(width - block_size + 1), range(height - block_size + 1)
            )
        ]

        for _ in range(alive_cells):
            if not available:
                raise ValueError("Board size too small for requested alive cell count")
            chosen = random.randrange(len(available))
            # Swap-remove keeps removal constant time; order is irrelevant here.
            available[chosen], available[-1] = available[-1], available[chosen]
            root = available.pop()

            for dx, dy in itertools.product(range(block_size), repeat=2):
                board[root + Position(dx, dy)] = TileState.ALIVE

        return board

    def _index(self, pos: PositionLike) -> int | None:
        p = _as_position(pos)
        if not (0 <= p.x < self.width and 0 <= p.y < self.height):
            return None
        index = p.x + p.y * self.width
        return index if index < len(self.tiles) else None

    def _position(self, index: int) -> Position:
        y, x = divmod(index, self.width)
        return Position(x, y)

    def get(self, pos: PositionLike) -> TileState | None:
        """Return the tile at `pos`, or None when it lies outside the board."""
        index = self._index(pos)
        return None if index is None else self.tiles[index]

    def __getitem__(self, pos: PositionLike) -> TileState:
        index = self._index(pos)
        if index is None:
            raise IndexError(f"position {pos} is outside the board")
        return self.tiles[index]

    def __setitem__(self, pos: PositionLike, state: TileState) -> None:
        index = self._index(pos)
        if index is None:
            raise IndexError(f"position {pos} is outside the board")
        self.tiles[index] = state

    def enumerate_tiles(self) -> Iterator[tuple[Position, TileState]]:
        """Yield every tile with its position, row by row."""
        for index, tile in enumerate(self.tiles):
            yield self._position(index), tile

    def resize(self, width: int, height: int) -> None:
        """Change the dimensions, truncating or padding the tile list with dead tiles."""
        size = width * height
        self.tiles = self.tiles[:size] + [TileState.DEAD] * max(0, size - len(self.tiles))
        self.width = width
        self.height = height

    def clear(self) -> None:
        """Kill every tile."""
        self.tiles = [TileState.DEAD] * len(self.tiles)