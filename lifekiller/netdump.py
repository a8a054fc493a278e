"""Dump the network of a save file as readable JSON next to it."""

from __future__ import annotations

import json
import sys
from collections.abc import Sequence
from pathlib import Path

from .networksave import NetworkSave


def main(argv: Sequence[str] | None = None) -> int:
    """Arguments are joined with spaces into the path of a network save."""
    if argv is None:
        argv = sys.argv[1:]
    path = Path(" ".join(argv))
    network_save = NetworkSave.load(path)
    dump = json.dumps(network_save.network.to_dict(), indent=2)
    path.with_name(path.name + ".netdump.json").write_text(dump, encoding="utf-8")
    return 0


if __name__ == "__main__":
    sys.exit(main())