# lifekiller

A Game of Life playground where small evolved neural networks take turns
flipping cells on the board. A network looks at the square kernel of tiles
around every position and scores each one. It then picks the best position and
sets that tile alive or dead. The trainer evolves networks by random mutation.
With `evil` on, it rewards killing as many cells as possible. With `evil` off,
it rewards keeping as many cells alive as possible.

## Installation

```
pip install .
```

Run the tests with:

```
pip install ".[test]"
pytest
```

## Training

```
lifekiller-train [RUN_ID] [CONFIG] [NETWORK]
```

- `RUN_ID` names the saved networks. Use `-`, or leave it out, to use today's
  date (`YYYYMMDD`).
- `CONFIG` is a JSON file with `trainer_config` and `adapter_config` objects.
  Without it, the command writes the default configuration to
  `trainer_default_config.json` in the current directory and exits without
  training. That gives you a file to edit.
- `NETWORK` is a network save to continue from. Use `-`, or leave it out, to
  start a fresh network: a 5×5 kernel, three hidden layers of 16 nodes, two
  outputs, ReLU activation and multiplicative combination.

Training runs until interrupted.

Each generation, every contender plays the same randomized games. The best
contender moves on, and the unmutated network wins ties. A generation's score
is ten times the average game score.

Progress is printed at most once a second, and also whenever the average
improves. Each progress line shows the latest, minimum, average and maximum
score over the last 50 generations. Each value is coloured by whether it went
up or down since the previous line.

A network is saved to `networks/<run_id>_gen<N>.json` in either of two cases:

- the rolling average has risen by at least 10 since the last save;
- more than a minute has passed since the last save.

## Inspecting a network

```
lifekiller-netdump networks/20240101_gen1200.json
```

This writes the network's input layer and the node inputs of its compute layers
as readable JSON next to the save. For the example above, the output is
`networks/20240101_gen1200.json.netdump.json`.

## The client

```
lifekiller
```

This opens a window showing a 20×20 board. Click, or click and drag, to toggle
cells.

Commands are read from standard input, one per line. A command that succeeds
prints `OK`. A command that fails prints an error starting with `!` to
standard error.

| Command | Effect |
| --- | --- |
| `step [N]` | advance the game N ticks (default 1) |
| `start NAME [MILLIS] [nature]` | tick the game every MILLIS ms (default 200) in the background |
| `start NAME MILLIS network PATH` | let the network in a save file make one move every MILLIS ms |
| `stop NAME` | stop the named ticker |
| `setrate MILLIS` | change the interval of every running ticker |
| `clear` | kill every cell |
| `resize WIDTH HEIGHT` | change the board size, keeping or padding tiles in row order |
| `random COUNT [BLOCK]` | replace the board with COUNT randomly placed BLOCK×BLOCK blocks of live cells |
| `exit` | quit |

## Library use

```python
from lifekiller.board import GameBoard, Rule
from lifekiller.game import Game
from lifekiller.network import Network, NetworkConfig
from lifekiller.player import NetworkPlayer, NetworkPlayerConfig

game = Game(GameBoard.new_random(16, 16, 64, 1), Rule())
network = Network.new(NetworkConfig(), 25, 3, 16, 2)
player = NetworkPlayer(NetworkPlayerConfig(kernel_diameter=5, use_kernel_cache=False), network)

move = player.play_step(game)  # a NetworkPlayerMove, or None if nothing changed
game.tick()
```

The main modules are:

- `lifekiller.board` and `lifekiller.game`: the board and its rules.
- `lifekiller.network` and `lifekiller.harness`: the networks.
- `lifekiller.mutation`, `lifekiller.trainer` and `lifekiller.adapter`: the
  evolution.

Network saves are JSON files. Each holds the player configuration and the
network, stored as base64-encoded MessagePack. Use
`lifekiller.networksave.NetworkSave` to load and write them.

## Limitations

- A save does not store the network's activator and combinator. A loaded
  network always uses the default configuration: tanh activation and additive
  combination.
- The trainer scores contenders one after another in a single process.
- The window is a plain pygame view of the board. It has no menus or on-screen
  controls; everything other than toggling cells is done through the commands
  above.