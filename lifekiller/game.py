"""A game of life: a board ticked forward under a rule."""

from __future__ import annotations

from dataclasses import dataclass, field

from .board import GameBoard, Position, Rule, TileState

_NEIGHBOR_OFFSETS = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)


@dataclass
class Game:
    """A board together with the rule that evolves it."""

    board: GameBoard
    rule: Rule = field(default_factory=Rule)

    def tick(self) -> None:
        """Advance the board by one generation. Edges do not wrap."""
        next_tiles = [self._tick_tile(pos, tile) for pos, tile in self.board.enumerate_tiles()]
        self.board = GameBoard(self.board.width, self.board.height, next_tiles)

    def count_cells(self, variant: TileState) -> int:
        """Count tiles in the given state."""
        return sum(1 for tile in self.board.tiles if tile is variant)

    def _tick_tile(self, pos: Position, tile: TileState) -> TileState:
        alive_neighbors = sum(1 for n in self._neighbors(pos) if n is TileState.ALIVE)
        counts = self.rule.survive if tile is TileState.ALIVE else self.rule.birth
        return TileState.ALIVE if alive_neighbors in counts else TileState.DEAD

    def _neighbors(self, pos: Position) -> list[TileState]:
        neighbors = []
        for dx, dy in _NEIGHBOR_OFFSETS:
            x, y = pos.x + dx, pos.y + dy
            if x < 0 or y < 0:
                continue
            tile = self.board.get(Position(x, y))
            if tile is not None:
                neighbors.append(tile)
        return neighbors