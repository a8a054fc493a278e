import dataclasses

import pytest

from lifekiller.adapter import (
    GameTrainerAdapter,
    GameTrainerAdapterConfig,
    GameTrainerAdapterFactory,
)
from lifekiller.board import GameBoard, Position, TileState
from lifekiller.game import Game
from lifekiller.network import Network, NetworkConfig, NodeInput
from lifekiller.player import NetworkPlayerConfig

PLAYER_CONFIG = NetworkPlayerConfig(3, False)


def _config(**changes):
    base = GameTrainerAdapterConfig(
        width=8,
        height=8,
        alive_cells=10,
        block_size=1,
        max_rounds=10,
        disable_nature=True,
        evil=True,
    )
    return dataclasses.replace(base, **changes)


def _empty_network():
    return Network.new(NetworkConfig(), 9, 0, 0, 2)


def _killer_network():
    network = _empty_network()
    network.compute_layers[-1].nodes[0].inputs.append(NodeInput(4, 1.0))
    network.compute_layers[-1].nodes[1].inputs.append(NodeInput(4, -1.0))
    return network


def _single_cell_game():
    board = GameBoard(5, 5)
    board[Position(2, 2)] = TileState.ALIVE
    return Game(board)


def test_config_round_trip():
    config = _config()
    assert GameTrainerAdapterConfig.from_dict(config.to_dict()) == config
    assert set(config.to_dict()) == {
        "width",
        "height",
        "alive_cells",
        "block_size",
        "max_rounds",
        "disable_nature",
        "evil",
    }


def test_new_randomized_spawns_requested_cells():
    config = _config()
    adapter = GameTrainerAdapter.new_randomized(config, PLAYER_CONFIG)
    assert adapter.game_template.count_cells(TileState.ALIVE) == config.alive_cells
    assert adapter.game_template.board.width == config.width


def test_new_randomized_too_many_cells():
    with pytest.raises(ValueError):
        GameTrainerAdapter.new_randomized(_config(width=2, height=2, alive_cells=5), PLAYER_CONFIG)


def test_factory_creates_fresh_adapters():
    factory = GameTrainerAdapterFactory(_config(), PLAYER_CONFIG)
    adapter = factory.create_adapter()
    assert adapter.config == factory.config
    assert adapter.player_config == PLAYER_CONFIG
    assert adapter.game_template.count_cells(TileState.ALIVE) == factory.config.alive_cells


def test_reference_score_without_nature_is_zero():
    adapter = GameTrainerAdapter(_config(), PLAYER_CONFIG, _single_cell_game())
    assert adapter.reference_score(adapter.game_template) == 0


def test_reference_score_sign_depends_on_evil():
    template = GameTrainerAdapter.new_randomized(_config(disable_nature=False), PLAYER_CONFIG)
    good = GameTrainerAdapter(
        dataclasses.replace(template.config, evil=False), PLAYER_CONFIG, template.game_template
    )
    evil_score = template.reference_score(template.game_template)
    assert evil_score == -good.reference_score(template.game_template)


def test_reference_score_leaves_game_untouched():
    adapter = GameTrainerAdapter(_config(disable_nature=False), PLAYER_CONFIG, _single_cell_game())
    adapter.reference_score(adapter.game_template)
    assert adapter.game_template.count_cells(TileState.ALIVE) == 1


def test_killer_network_reward_counts_killed_cells():
    adapter = GameTrainerAdapter(_config(), PLAYER_CONFIG, _single_cell_game())
    game = _single_cell_game()
    initial = game.count_cells(TileState.ALIVE)
    reward, punishment = adapter.network_score(game, _killer_network())
    assert reward == initial
    assert game.count_cells(TileState.ALIVE) == 0
    assert punishment >= 0


def test_good_adapter_penalizes_killing():
    adapter = GameTrainerAdapter(_config(evil=False), PLAYER_CONFIG, _single_cell_game())
    game = _single_cell_game()
    reward, _ = adapter.network_score(game, _killer_network())
    assert reward == -1


def test_try_out_with_idle_network():
    adapter = GameTrainerAdapter(_config(), PLAYER_CONFIG, _single_cell_game())
    reward, punishment = adapter.network_score(_single_cell_game(), _empty_network())
    assert reward == 0
    assert adapter.try_out(_empty_network()) == -punishment


def test_try_out_does_not_change_template():
    adapter = GameTrainerAdapter(_config(), PLAYER_CONFIG, _single_cell_game())
    adapter.try_out(_killer_network())
    assert adapter.game_template.count_cells(TileState.ALIVE) == 1