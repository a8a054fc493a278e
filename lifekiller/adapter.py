"""Scoring a network by letting it play games against nature."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any

from .board import GameBoard, TileState
from .game import Game
from .network import Network
from .player import NetworkPlayer, NetworkPlayerConfig


@dataclass(frozen=True)
class GameTrainerAdapterConfig:
    """Settings for the games played during training."""

    width: int
    height: int
    alive_cells: int  # live cells spawned at the start, rounded down to whole blocks
    block_size: int  # side of each spawned square block of cells
    max_rounds: int  # a game also stops early once every cell is dead
    disable_nature: bool  # leave only the network to change the board
    evil: bool  # reward killed cells rather than cells brought to life

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "alive_cells": self.alive_cells,
            "block_size": self.block_size,
            "max_rounds": self.max_rounds,
            "disable_nature": self.disable_nature,
            "evil": self.evil,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameTrainerAdapterConfig:
        return cls(
            width=int(data["width"]),
            height=int(data["height"]),
            alive_cells=int(data["alive_cells"]),
            block_size=int(data["block_size"]),
            max_rounds=int(data["max_rounds"]),
            disable_nature=bool(data["disable_nature"]),
            evil=bool(data["evil"]),
        )


@dataclass
class GameTrainerAdapter:
    """One randomized game that every contender of an iteration plays."""

    config: GameTrainerAdapterConfig
    player_config: NetworkPlayerConfig
    game_template: Game

    @classmethod
    def new_randomized(
        cls, config: GameTrainerAdapterConfig, player_config: NetworkPlayerConfig
    ) -> GameTrainerAdapter:
        board = GameBoard.new_random(
            config.width, config.height, config.alive_cells, config.block_size
        )
        return cls(config, player_config, Game(board))

    def _reward(self, initial_alive: int, finished_alive: int) -> int:
        if self.config.evil:
            return initial_alive - finished_alive
        return finished_alive - initial_alive

    def reference_score(self, game: Game) -> int:
        """Score nature alone achieves over the maximum number of rounds."""
        if self.config.disable_nature:
            return 0
        game = copy.deepcopy(game)
        initial_alive = game.count_cells(TileState.ALIVE)
        for _ in range(self.config.max_rounds):
            game.tick()
        return self._reward(initial_alive, game.count_cells(TileState.ALIVE))

    def network_score(self, game: Game, network: Network) -> tuple[int, int]:
        """Play `game` with the network; return its reward and its punishment."""
        player = NetworkPlayer(self.player_config, network)
        initial_alive = game.count_cells(TileState.ALIVE)
        skipped_turns = 0
        rounds_taken = 0

        while True:
            rounds_taken += 1
            if player.play_step(game) is None:
                skipped_turns += 1
            if not self.config.disable_nature:
                game.tick()
            finished_alive = game.count_cells(TileState.ALIVE)
            if rounds_taken >= self.config.max_rounds or finished_alive == 0:
                break

        reward = self._reward(initial_alive, finished_alive)
        # Halved so it cannot cancel out the reward of cells killed directly.
        taken_rounds_punishment = (self.config.max_rounds - rounds_taken) // 2
        skipped_turns_punishment = skipped_turns // 5
        return reward, taken_rounds_punishment + skipped_turns_punishment

    def try_out(self, network: Network) -> int:
        """Score the network on a copy of the template game, relative to nature."""
        game = copy.deepcopy(self.game_template)
        reference = self.reference_score(game)
        network_reward, punishment = self.network_score(game, network)
        return network_reward - reference - punishment


@dataclass
class GameTrainerAdapterFactory:
    """Creates a freshly randomized adapter for each training iteration."""

    config: GameTrainerAdapterConfig
    player_config: NetworkPlayerConfig

    def create_adapter(self) -> GameTrainerAdapter:
        return GameTrainerAdapter.new_randomized(self.config, self.player_config)