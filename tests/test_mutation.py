import pytest

from lifekiller.mutation import (
    AdjustWeight,
    InputCreation,
    InputDeletion,
    input_creation,
    input_deletion,
    weight_adjustment,
)
from lifekiller.network import ComputeLayer, InputLayer, Network, NetworkConfig, Node, NodeInput


def _network(inputs=None, input_height=3, nodes=1):
    layer_nodes = [Node(list(inputs or [])) for _ in range(1)]
    layer_nodes += [Node() for _ in range(nodes - 1)]
    return Network(NetworkConfig(), InputLayer(input_height), [ComputeLayer(layer_nodes)])


def test_weight_adjustment_none_without_inputs():
    assert weight_adjustment(_network()) is None


def test_weight_adjustment_none_without_layers():
    network = Network(NetworkConfig(), InputLayer(2), [])
    assert weight_adjustment(network) is None


@pytest.mark.parametrize("weight,bound", [(1.0, 0.5), (-4.0, 2.0), (0.0, 0.01)])
def test_weight_adjustment_bounded(weight, bound):
    node_input = NodeInput(0, weight)
    network = _network([node_input])
    for _ in range(50):
        mutation = weight_adjustment(network)
        assert isinstance(mutation, AdjustWeight)
        assert mutation.input is node_input
        assert abs(mutation.adjustment) <= bound


def test_adjust_weight_apply():
    node_input = NodeInput(0, 1.0)
    AdjustWeight(node_input, 0.25).apply()
    assert node_input.weight == 1.25


def test_input_creation_none_without_layers():
    network = Network(NetworkConfig(), InputLayer(2), [])
    assert input_creation(network) is None


def test_input_creation_none_for_duplicate_source():
    network = _network([NodeInput(0, 1.0)], input_height=1)
    assert input_creation(network) is None


def test_input_creation_valid_source_and_weight():
    network = Network.new(NetworkConfig(), 4, 2, 3, 2)
    for _ in range(50):
        mutation = input_creation(network)
        assert isinstance(mutation, InputCreation)
        assert -2.0 <= mutation.weight <= 2.0
        layer_index = next(
            i for i, layer in enumerate(network.compute_layers)
            if any(node is mutation.node for node in layer.nodes)
        )
        prev = network.layer(layer_index)
        assert mutation.src_node_index in prev.output_node_indices()


def test_input_creation_apply_appends():
    node = Node()
    InputCreation(node, 2, 0.5).apply()
    assert node.inputs == [NodeInput(2, 0.5)]


def test_input_deletion_none_without_inputs():
    assert input_deletion(_network()) is None


def test_input_deletion_apply_removes():
    inputs = [NodeInput(0, 1.0), NodeInput(1, 2.0)]
    network = _network(inputs)
    mutation = input_deletion(network)
    assert isinstance(mutation, InputDeletion)
    assert mutation.input_index in (0, 1)
    removed = network.compute_layers[0].nodes[0].inputs[mutation.input_index]
    mutation.apply()
    remaining = network.compute_layers[0].nodes[0].inputs
    assert len(remaining) == 1
    assert removed not in remaining