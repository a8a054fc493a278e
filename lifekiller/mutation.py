"""Random structural and weight mutations of a network."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Union

from .network import Network, Node, NodeInput


@dataclass(eq=False)
class AdjustWeight:
    """Shift the weight of one node input."""

    input: NodeInput
    adjustment: float

    def apply(self) -> None:
        self.input.weight += self.adjustment


@dataclass(eq=False)
class InputCreation:
    """Link a node to a node of the previous layer."""

    node: Node
    src_node_index: int
    weight: float

    def apply(self) -> None:
        self.node.inputs.append(NodeInput(self.src_node_index, self.weight))


@dataclass(eq=False)
class InputDeletion:
    """Remove one input of a node."""

    node: Node
    input_index: int

    def apply(self) -> None:
        self.node.inputs.pop(self.input_index)


Mutation = Union[AdjustWeight, InputCreation, InputDeletion]


def _random_node(network: Network) -> Node | None:
    if not network.compute_layers:
        return None
    layer = random.choice(network.compute_layers)
    if not layer.nodes:
        return None
    return random.choice(layer.nodes)


def weight_adjustment(network: Network) -> AdjustWeight | None:
    """Propose a change of a random input's weight by up to half its magnitude."""
    node = _random_node(network)
    if node is None or not node.inputs:
        return None
    node_input = random.choice(node.inputs)
    max_magnitude = max(abs(node_input.weight) / 2.0, 0.01)
    return AdjustWeight(node_input, random.uniform(-max_magnitude, max_magnitude))


def input_creation(network: Network) -> InputCreation | None:
    """Propose a new input from the previous layer to a random node."""
    layer_count = len(network.compute_layers)
    if layer_count == 0:
        return None
    comp_layer_index = random.randrange(layer_count)

    # A compute layer index is the general index of the layer before it.
    prev_layer = network.layer(comp_layer_index)
    if prev_layer is None:
        return None
    src_indices = prev_layer.output_node_indices()
    if not src_indices:
        return None
    src_node_index = random.choice(src_indices)

    nodes = network.compute_layers[comp_layer_index].nodes
    if not nodes:
        return None
    node = random.choice(nodes)

    if any(i.node_index == src_node_index for i in node.inputs):
        return None

    return InputCreation(node, src_node_index, random.uniform(-2.0, 2.0))


def input_deletion(network: Network) -> InputDeletion | None:
    """Propose removing a random input of a random node."""
    node = _random_node(network)
    if node is None or not node.inputs:
        return None
    return InputDeletion(node, random.randrange(len(node.inputs)))