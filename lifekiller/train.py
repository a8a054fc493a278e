"""Command that trains a network generation after generation."""

from __future__ import annotations

import copy
import itertools
import json
import math
import sys
import time
from collections import deque
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, TypeVar

from termcolor import colored

from .adapter import GameTrainerAdapterConfig, GameTrainerAdapterFactory
from .network import Activator, Combinator, Network, NetworkConfig
from .networksave import NetworkSave
from .player import NetworkPlayerConfig
from .trainer import Trainer, TrainerConfig

T = TypeVar("T")

DEFAULT_CONFIG_PATH = Path("trainer_default_config.json")
NETWORKS_DIR = Path("networks")


@dataclass(frozen=True)
class Config:
    """Training settings and the settings of the games played."""

    trainer_config: TrainerConfig
    adapter_config: GameTrainerAdapterConfig

    def to_dict(self) -> dict[str, Any]:
        return {
            "trainer_config": self.trainer_config.to_dict(),
            "adapter_config": self.adapter_config.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        return cls(
            TrainerConfig.from_dict(data["trainer_config"]),
            GameTrainerAdapterConfig.from_dict(data["adapter_config"]),
        )


def default_config() -> Config:
    return Config(
        TrainerConfig(
            generation_contenders=16,
            generation_mutations=4,
            generation_mutations_jitter=3,
            generation_iterations=20,
        ),
        GameTrainerAdapterConfig(
            width=16,
            height=16,
            alive_cells=128,
            block_size=1,
            max_rounds=128,
            disable_nature=False,
            evil=True,
        ),
    )


class ScoreWindow:
    """The most recent scores, up to a fixed count."""

    def __init__(self, length: int) -> None:
        self.length = length
        self.values: deque[int] = deque(maxlen=length)

    def update(self, value: int) -> None:
        self.values.append(value)

    def value(self) -> int | None:
        return self.values[-1] if self.values else None

    def average(self) -> float:
        if not self.values:
            return math.nan
        return sum(self.values) / len(self.values)

    def max(self) -> int | None:
        return max(self.values, default=None)

    def min(self) -> int | None:
        return min(self.values, default=None)

    def averages_ready(self) -> bool:
        return len(self.values) >= self.length


def change_colored(new: T, old: T, fmt: Callable[[T], str]) -> str:
    """Format `new`, green if it rose over `old`, red if it fell, white otherwise."""
    text = fmt(new)
    try:
        if new > old:
            return colored(text, "light_green")
        if new < old:
            return colored(text, "light_red")
    except TypeError:
        pass
    return colored(text, "white")


def option_change_colored(new: int | None, old: int | None, fmt: Callable[[int], str]) -> str:
    """Like `change_colored`, with a missing new value read as 0 and a missing old as unchanged."""
    new_or_default = 0 if new is None else new
    return change_colored(new_or_default, new_or_default if old is None else old, fmt)


def _progress_line(
    improved: bool,
    generation: int,
    score: ScoreWindow,
    last: ScoreWindow,
    generations_per_second: float,
) -> str:
    prefix = colored("IMPROVED" if improved else " " * len("IMPROVED"), "green")
    int_fmt = "{:4}".format
    return (
        f"{prefix} gen {generation:7}: "
        f"{option_change_colored(score.value(), last.value(), int_fmt)} | "
        f"{option_change_colored(score.min(), last.min(), int_fmt)} < "
        f"{change_colored(score.average(), last.average(), '{:4.2f}'.format)} < "
        f"{option_change_colored(score.max(), last.max(), int_fmt)} | "
        f"{generations_per_second:4.2f} gen/s"
    )


def run_training(
    run_id: str,
    trainer: Trainer,
    player_config: NetworkPlayerConfig,
    network: Network,
    generations: int | None = None,
) -> Network:
    """Train for `generations` generations, or forever when None; return the last network.

    Progress is printed at most once a second, and the network is saved under
    `networks/` whenever the average score improves by 10 or a minute passes.
    """
    score = ScoreWindow(50)
    last_save_avg: float | None = None

    start = time.monotonic()
    last_notif_instant = start
    last_notif_generation = 0
    last_notif_score = copy.deepcopy(score)
    last_save_instant = start

    counter = itertools.count() if generations is None else range(generations)
    for generation in counter:
        network, new_score = trainer.train_generation(network)
        score.update(new_score)

        avg = score.average()
        if last_save_avg is None and score.averages_ready():
            last_save_avg = avg
        improved = last_save_avg is not None and avg >= last_save_avg + 10.0

        now = time.monotonic()
        if improved or now - last_notif_instant >= 1.0:
            elapsed = now - last_notif_instant
            generation_delta = generation - last_notif_generation
            if elapsed > 0:
                rate = generation_delta / elapsed
            else:
                rate = math.inf if generation_delta else math.nan
            print(_progress_line(improved, generation, score, last_notif_score, rate))

            last_notif_instant = now
            last_notif_generation = generation
            last_notif_score = copy.deepcopy(score)

        if improved or int(now - last_save_instant) > 60:
            path = NETWORKS_DIR / f"{run_id}_gen{generation}.json"
            NetworkSave(player_config, copy.deepcopy(network)).save(path)
            last_save_avg = avg
            last_save_instant = now

    return network


def _initial_network_save() -> NetworkSave:
    kernel_diameter = 5
    network = Network.new(
        NetworkConfig(activator=Activator.RELU, combinator=Combinator.MUL),
        kernel_diameter**2,
        3,
        16,
        2,
    )
    return NetworkSave(NetworkPlayerConfig(kernel_diameter, False), network)


def main(argv: Sequence[str] | None = None) -> int:
    """Arguments: [run id or -] [config path] [network save path or -].

    Without a config path, the default config is written out and nothing is trained.
    """
    args = list(sys.argv[1:] if argv is None else argv)

    run_id = args[0] if args and args[0] != "-" else datetime.now().strftime("%Y%m%d")

    if len(args) < 2:
        try:
            DEFAULT_CONFIG_PATH.write_text(
                json.dumps(default_config().to_dict(), indent=2), encoding="utf-8"
            )
            print(f"Default config written to '{DEFAULT_CONFIG_PATH}'.")
        except OSError as exc:
            print(f"Error writing default config to '{DEFAULT_CONFIG_PATH}': {exc!r}", file=sys.stderr)
        return 0

    config = Config.from_dict(json.loads(Path(args[1]).read_text(encoding="utf-8")))

    if len(args) >= 3 and args[2] != "-":
        network_save = NetworkSave.load(args[2])
    else:
        network_save = _initial_network_save()

    factory = GameTrainerAdapterFactory(config.adapter_config, network_save.player_config)
    trainer = Trainer(config.trainer_config, factory)
    run_training(run_id, trainer, network_save.player_config, network_save.network)
    return 0


if __name__ == "__main__":
    sys.exit(main())