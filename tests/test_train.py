import json
import math

import pytest

from lifekiller.adapter import GameTrainerAdapterConfig, GameTrainerAdapterFactory
from lifekiller.network import Network, NetworkConfig
from lifekiller.networksave import NetworkSave
from lifekiller.player import NetworkPlayerConfig
from lifekiller.train import (
    Config,
    ScoreWindow,
    change_colored,
    default_config,
    main,
    option_change_colored,
    run_training,
)
from lifekiller.trainer import Trainer, TrainerConfig


@pytest.fixture
def force_color(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("ANSI_COLORS_DISABLED", raising=False)
    monkeypatch.setenv("FORCE_COLOR", "1")


class _RisingTrainer:
    def __init__(self):
        self.calls = 0

    def train_generation(self, network):
        self.calls += 1
        return network, self.calls * 100


def test_score_window_keeps_latest():
    window = ScoreWindow(3)
    for value in [1, 5, 2, 8]:
        window.update(value)
    assert list(window.values) == [5, 2, 8]
    assert window.value() == 8
    assert window.max() == 8
    assert window.min() == 2
    assert window.average() == pytest.approx(5.0)
    assert window.averages_ready()


def test_score_window_empty():
    window = ScoreWindow(2)
    assert window.value() is None
    assert window.max() is None
    assert window.min() is None
    assert math.isnan(window.average())
    assert not window.averages_ready()


def test_default_config_values():
    config = default_config()
    assert config.trainer_config == TrainerConfig(16, 4, 3, 20)
    assert config.adapter_config == GameTrainerAdapterConfig(16, 16, 128, 1, 128, False, True)


def test_config_round_trip():
    config = default_config()
    assert Config.from_dict(json.loads(json.dumps(config.to_dict()))) == config


def test_change_colored_colors(force_color):
    assert "\x1b[92m" in change_colored(2, 1, str)
    assert "\x1b[91m" in change_colored(1, 2, str)
    assert "\x1b[97m" in change_colored(1, 1, str)
    assert "\x1b[97m" in change_colored(math.nan, 1.0, str)


def test_option_change_colored_defaults(force_color):
    assert option_change_colored(5, None, str) == change_colored(5, 5, str)
    assert option_change_colored(None, None, str) == change_colored(0, 0, str)
    assert "5" in option_change_colored(5, 3, str)


def test_main_writes_default_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    data = json.loads((tmp_path / "trainer_default_config.json").read_text())
    assert Config.from_dict(data) == default_config()


def test_main_with_dash_run_id_writes_default(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["-"]) == 0
    assert (tmp_path / "trainer_default_config.json").exists()


def test_run_training_real_trainer(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    adapter_config = GameTrainerAdapterConfig(4, 4, 3, 1, 2, False, True)
    player_config = NetworkPlayerConfig(3, False)
    trainer = Trainer(TrainerConfig(2, 1, 1, 1), GameTrainerAdapterFactory(adapter_config, player_config))
    network = Network.new(NetworkConfig(), 9, 0, 0, 2)
    result = run_training("run", trainer, player_config, network, 2)
    assert result.input_layer.height == 9
    assert len(result.compute_layers) == 1


def test_run_training_saves_on_improvement(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    player_config = NetworkPlayerConfig(3, False)
    network = Network.new(NetworkConfig(), 9, 0, 0, 2)
    run_training("run", _RisingTrainer(), player_config, network, 52)

    assert not (tmp_path / "networks" / "run_gen49.json").exists()
    saved = tmp_path / "networks" / "run_gen50.json"
    assert saved.exists()
    assert (tmp_path / "networks" / "run_gen51.json").exists()
    loaded = NetworkSave.load(saved)
    assert loaded.player_config == player_config
    assert loaded.network.input_layer.height == 9
    assert "IMPROVED" in capsys.readouterr().out