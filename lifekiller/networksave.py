"""Saving and loading a network together with its player configuration."""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import msgpack
from msgpack.exceptions import UnpackException

from .network import ComputeLayer, Network, Node


def _node_to_wire(node: Node) -> list[Any]:
    return [[[i.node_index, i.weight] for i in node.inputs]]


def _layer_to_wire(layer: ComputeLayer) -> list[Any]:
    return [[_node_to_wire(node) for node in layer.nodes]]


def _network_to_wire(network: Network) -> list[Any]:
    # Structs travel as positional arrays; the network config is not stored.
    input_layer = network.input_layer
    return [
        [input_layer.height, list(input_layer.output_values)],
        [_layer_to_wire(layer) for layer in network.compute_layers],
    ]


def _field(obj: Any, index: int, name: str) -> Any:
    if isinstance(obj, dict):
        return obj[name]
    if isinstance(obj, (list, tuple)):
        return obj[index]
    raise ValueError(f"expected a struct for field '{name}'")


def _network_from_wire(obj: Any) -> Network:
    input_layer = _field(obj, 0, "input_layer")
    data = {
        "input_layer": {
            "height": _field(input_layer, 0, "height"),
            "output_values": _field(input_layer, 1, "output_values"),
        },
        "compute_layers": [
            {
                "nodes": [
                    {
                        "inputs": [
                            {
                                "node_index": _field(i, 0, "node_index"),
                                "weight": _field(i, 1, "weight"),
                            }
                            for i in _field(node, 0, "inputs")
                        ]
                    }
                    for node in _field(layer, 0, "nodes")
                ]
            }
            for layer in _field(obj, 1, "compute_layers")
        ],
    }
    return Network.from_dict(data)


def encode_network(network: Network) -> str:
    """Pack a network as MessagePack and encode it as standard base64."""
    packed = msgpack.packb(_network_to_wire(network), use_single_float=True)
    return base64.b64encode(packed).decode("ascii")


def decode_network(text: str) -> Network:
    """Inverse of `encode_network`; the network gets the default config."""
    try:
        packed = base64.b64decode(text, validate=True)
        obj = msgpack.unpackb(packed, raw=False, strict_map_key=False)
        return _network_from_wire(obj)
    except (binascii.Error, UnpackException, KeyError, IndexError, TypeError, ValueError) as exc:
        raise ValueError(f"Base64 encoded and MessagePack serialized data expected: {exc}") from exc


# Imported late: the player module is only needed for the save's config.
from .player import NetworkPlayerConfig  # noqa: E402


@dataclass
class NetworkSave:
    """A network and the player configuration it was trained with."""

    player_config: NetworkPlayerConfig
    network: Network

    def to_json(self) -> str:
        return json.dumps(
            {
                "player_config": self.player_config.to_dict(),
                "network": encode_network(self.network),
            },
            indent=2,
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> NetworkSave:
        try:
            data = json.loads(text)
            player_config = NetworkPlayerConfig.from_dict(data["player_config"])
            network_text = data["network"]
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Couldn't deserialize network save: {exc}") from exc
        if not isinstance(network_text, str):
            raise ValueError("Couldn't deserialize network save: network is not a string")
        return cls(player_config, decode_network(network_text))

    def save(self, path: str | Path) -> None:
        """Write the save as JSON, creating parent directories as needed."""
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            pass
        path.write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path: str | Path) -> NetworkSave:
        return cls.from_json(Path(path).read_bytes())