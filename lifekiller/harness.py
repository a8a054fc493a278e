"""Feeding a network from an arbitrary state object."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Generic, TypeVar

from .network import Network

S = TypeVar("S")

InputProvider = Callable[[S], float]


class NetworkHarness(Generic[S]):
    """Binds a network to input providers that read values from a state."""

    def __init__(
        self, network: Network, input_providers: Iterable[InputProvider] = ()
    ) -> None:
        self.network = network
        self.input_providers: list[InputProvider] = list(input_providers)

    def add_inputs(self, inputs: Iterable[InputProvider]) -> None:
        self.input_providers.extend(inputs)

    def add_input(self, provider: InputProvider) -> None:
        self.input_providers.append(provider)

    def compute(self, state: S) -> list[float]:
        """Load the network's inputs from `state` and return its outputs."""
        self.network.input_layer.update(provider(state) for provider in self.input_providers)
        return self.network.compute()