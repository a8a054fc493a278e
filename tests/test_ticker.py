import copy
import threading

from lifekiller.board import GameBoard, TileState
from lifekiller.game import Game
from lifekiller.network import Activator, Combinator, Network, NetworkConfig, NodeInput
from lifekiller.player import NetworkPlayerConfig
from lifekiller.ticker import MLTicker, NatureTicker, State, Ticker, TickerHost


def blinker_state():
    board = GameBoard(5, 5)
    for x in range(1, 4):
        board[(x, 2)] = TileState.ALIVE
    return State(Game(board))


class CountingTicker(Ticker):
    def __init__(self, target):
        self.count = 0
        self.target = target
        self.reached = threading.Event()

    def tick(self, state):
        self.count += 1
        if self.count >= self.target:
            self.reached.set()


def test_nature_ticker_matches_game_tick():
    state = blinker_state()
    expected = copy.deepcopy(state.game)
    expected.tick()
    NatureTicker().tick(state)
    assert state.game.board == expected.board


def test_ml_ticker_makes_a_move():
    network = Network.new(NetworkConfig(Activator.RELU, Combinator.ADD), 9, 0, 0, 2)
    for node in network.compute_layers[0].nodes:
        node.inputs.append(NodeInput(4, -1.0))
    state = State(Game(GameBoard(3, 3)))
    MLTicker(network, NetworkPlayerConfig(3, False)).tick(state)
    assert state.game.count_cells(TileState.ALIVE) == 1
    alive = [pos for pos, tile in state.game.board.enumerate_tiles() if tile is TileState.ALIVE]
    assert alive[0].x > 0 and alive[0].y > 0


def test_host_ticks_until_stopped():
    state = blinker_state()
    ticker = CountingTicker(3)
    host = TickerHost.start(state, 0.001, lambda: ticker)
    assert ticker.reached.wait(5.0)
    host.stop()
    host.thread.join(5.0)
    assert not host.thread.is_alive()
    assert ticker.count >= 3


def test_host_accepts_rate_change():
    state = blinker_state()
    ticker = CountingTicker(2)
    host = TickerHost.start(state, 0.001, lambda: ticker)
    host.set_rate(1)
    assert ticker.reached.wait(5.0)
    host.stop()
    host.thread.join(5.0)
    assert not host.thread.is_alive()