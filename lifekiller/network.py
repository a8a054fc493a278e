"""A small layered network of weighted node inputs."""

from __future__ import annotations

import itertools
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Combinator(Enum):
    """How the activated inputs of a node are folded together."""

    ADD = "add"
    MUL = "mul"

    def combine(self, a: float, b: float) -> float:
        if self is Combinator.ADD:
            return a + b
        return a * b


class Activator(Enum):
    """Activation applied to each weighted input."""

    BINARY = "binary"
    RELU = "relu"
    TANH = "tanh"

    def activate(self, value: float) -> float:
        if self is Activator.BINARY:
            return 1.0 if value > 0.5 else 0.0
        if self is Activator.RELU:
            return max(value, 0.0)
        return math.tanh(value)


@dataclass(frozen=True)
class NetworkConfig:
    """Functions used throughout a network."""

    activator: Activator = Activator.TANH
    combinator: Combinator = Combinator.ADD


@dataclass
class NodeInput:
    """A weighted link from a node of the previous layer."""

    node_index: int
    weight: float

    def compute(self, config: NetworkConfig, input_values: list[float]) -> float:
        if not 0 <= self.node_index < len(input_values):
            raise IndexError("Missing input")
        return config.activator.activate(input_values[self.node_index] * self.weight)


@dataclass
class Node:
    """A node combining the activated values of its inputs."""

    inputs: list[NodeInput] = field(default_factory=list)

    def compute(self, config: NetworkConfig, input_values: list[float]) -> float:
        values = (node_input.compute(config, input_values) for node_input in self.inputs)
        try:
            result = next(values)
        except StopIteration:
            return 0.0
        for value in values:
            result = config.combinator.combine(result, value)
        return result


@dataclass
class InputLayer:
    """The first layer, holding the values last fed into the network."""

    height: int
    output_values: list[float] | None = None

    def __post_init__(self) -> None:
        if self.output_values is None:
            self.output_values = [0.0] * self.height

    def update(self, values: Iterable[float]) -> None:
        """Overwrite the leading output values; the rest keep their previous values."""
        count = len(self.output_values)
        for index, value in enumerate(values):
            if index >= count:
                raise ValueError(f"Input layer too short ({count}) for all values")
            self.output_values[index] = value

    def get_outputs(self, config: NetworkConfig, inputs: list[float] | None) -> list[float]:
        return list(self.output_values)

    def output_node_indices(self) -> list[int]:
        return list(range(len(self.output_values)))


@dataclass
class ComputeLayer:
    """A hidden or output layer of nodes."""

    nodes: list[Node] = field(default_factory=list)

    @classmethod
    def default_n_nodes(cls, count: int) -> ComputeLayer:
        return cls([Node() for _ in range(count)])

    def get_outputs(self, config: NetworkConfig, inputs: list[float] | None) -> list[float]:
        if inputs is None:
            raise ValueError("Compute layer wasn't given inputs")
        return [node.compute(config, inputs) for node in self.nodes]

    def output_node_indices(self) -> list[int]:
        return list(range(len(self.nodes)))


Layer = InputLayer | ComputeLayer


@dataclass
class Network:
    """An input layer followed by compute layers, the last being the output layer."""

    config: NetworkConfig
    input_layer: InputLayer
    compute_layers: list[ComputeLayer]

    @classmethod
    def new(
        cls,
        config: NetworkConfig,
        input_layer_height: int,
        hidden_layer_count: int,
        hidden_layer_height: int,
        output_layer_height: int,
    ) -> Network:
        """Create an unconnected network of the given shape."""
        hidden = [ComputeLayer.default_n_nodes(hidden_layer_height) for _ in range(hidden_layer_count)]
        output = ComputeLayer.default_n_nodes(output_layer_height)
        return cls(config, InputLayer(input_layer_height), hidden + [output])

    def compute(self) -> list[float]:
        """Propagate the current input values through every layer."""
        values: list[float] | None = None
        for layer in self.layers():
            values = layer.get_outputs(self.config, values)
        return values

    def layers(self) -> Iterator[Layer]:
        yield self.input_layer
        yield from self.compute_layers

    def layer(self, index: int) -> Layer | None:
        if index < 0:
            return None
        return next(itertools.islice(self.layers(), index, None), None)

    def to_dict(self) -> dict[str, Any]:
        """Serializable form; the config is not included."""
        return {
            "input_layer": {
                "height": self.input_layer.height,
                "output_values": list(self.input_layer.output_values),
            },
            "compute_layers": [
                {
                    "nodes": [
                        {
                            "inputs": [
                                {"node_index": i.node_index, "weight": i.weight}
                                for i in node.inputs
                            ]
                        }
                        for node in layer.nodes
                    ]
                }
                for layer in self.compute_layers
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Network:
        """Rebuild a network from `to_dict` output, using the default config."""
        input_data = data["input_layer"]
        input_layer = InputLayer(
            int(input_data["height"]),
            [float(v) for v in input_data["output_values"]],
        )
        compute_layers = [
            ComputeLayer(
                [
                    Node(
                        [
                            NodeInput(int(i["node_index"]), float(i["weight"]))
                            for i in node["inputs"]
                        ]
                    )
                    for node in layer["nodes"]
                ]
            )
            for layer in data["compute_layers"]
        ]
        return cls(NetworkConfig(), input_layer, compute_layers)