"""Evolutionary training: mutate, play, keep the best."""

from __future__ import annotations

import copy
import random
from dataclasses import dataclass
from typing import Any, Protocol

from .mutation import input_creation, input_deletion, weight_adjustment
from .network import Network

# Weighted orders in which the three kinds of mutation are tried.
_MUTATION_ORDERS = (
    (weight_adjustment, input_creation, input_deletion),
    (input_creation, weight_adjustment, input_deletion),
    (input_deletion, weight_adjustment, input_creation),
)
_MUTATION_ORDER_WEIGHTS = (7, 1, 2)


class TrainerAdapter(Protocol):
    def try_out(self, network: Network) -> int: ...


class TrainerAdapterFactory(Protocol):
    def create_adapter(self) -> TrainerAdapter: ...


@dataclass(frozen=True)
class TrainerConfig:
    """Settings of the training process."""

    generation_contenders: int  # mutated networks competing per generation
    generation_mutations: int  # mutations applied to each contender
    generation_mutations_jitter: int  # random spread of the mutation count
    generation_iterations: int  # games whose scores are averaged

    def to_dict(self) -> dict[str, Any]:
        return {
            "generation_contenders": self.generation_contenders,
            "generation_mutations": self.generation_mutations,
            "generation_mutations_jitter": self.generation_mutations_jitter,
            "generation_iterations": self.generation_iterations,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TrainerConfig:
        return cls(
            generation_contenders=int(data["generation_contenders"]),
            generation_mutations=int(data["generation_mutations"]),
            generation_mutations_jitter=int(data["generation_mutations_jitter"]),
            generation_iterations=int(data["generation_iterations"]),
        )


def _div_trunc(a: int, b: int) -> int:
    q = abs(a) // b
    return q if a >= 0 else -q


class Trainer:
    """Runs generations of mutated contenders through adapters."""

    def __init__(self, config: TrainerConfig, adapter_factory: TrainerAdapterFactory) -> None:
        self.config = config
        self.adapter_factory = adapter_factory

    def train_generation(self, network: Network) -> tuple[Network, int]:
        """Mutate copies of `network`, score all, and return the best with its score.

        The score is ten times the average, truncated. The original network
        competes too and wins ties.
        """
        config = self.config
        if config.generation_contenders < 1:
            raise ValueError("generation_contenders must be at least 1")
        if config.generation_iterations < 1:
            raise ValueError("generation_iterations must be at least 1")

        contenders = []
        jitter = config.generation_mutations_jitter
        for _ in range(config.generation_contenders - 1):
            contender = copy.deepcopy(network)
            mutation_count = max(config.generation_mutations + random.randrange(-jitter, jitter), 1)
            for _ in range(mutation_count):
                contender = self.mutate(contender)
            contenders.append(contender)
        contenders.append(network)

        scores: list[list[int]] = [[] for _ in contenders]
        for _ in range(config.generation_iterations):
            adapter = self.adapter_factory.create_adapter()
            for contender, contender_scores in zip(contenders, scores):
                contender_scores.append(adapter.try_out(contender))

        best: tuple[Network, int] | None = None
        for contender, contender_scores in zip(contenders, scores):
            score = _div_trunc(sum(contender_scores) * 10, len(contender_scores))
            if best is None or score >= best[1]:
                best = (contender, score)
        return best

    def mutate(self, network: Network) -> Network:
        """Try one mutation of each kind, in a randomly weighted order, in place."""
        (order,) = random.choices(_MUTATION_ORDERS, weights=_MUTATION_ORDER_WEIGHTS)
        for provider in order:
            mutation = provider(network)
            if mutation is not None:
                mutation.apply()
        return network