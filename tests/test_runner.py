import threading

import pytest

from tetris_engine.config import GameConfig
from tetris_engine.game_state import GameState
from tetris_engine.runner import GameRunner
from tetris_engine.tetromino import TetrominoType
from tetris_engine.utils import tick_interval_ms


class SequenceRng:
    def __init__(self, values):
        self.values = list(values)

    def randrange(self, stop):
        value = self.values.pop(0)
        self.values.append(value)
        return value


def make_runner(*types, **kwargs):
    state = GameState(rng=SequenceRng([int(t) for t in types]))
    runner = GameRunner(state, **kwargs)
    runner.start()
    return runner


@pytest.mark.parametrize(
    "lines,interval",
    [(0, 500), (9, 500), (10, 400), (19, 400), (20, 300), (29, 300), (30, 200), (120, 200)],
)
def test_tick_interval_thresholds(lines, interval):
    assert tick_interval_ms(lines) == interval


def test_advance_ticks_once_per_interval():
    runner = make_runner(TetrominoType.O)
    assert runner.advance(499) == 0
    assert runner.state.active.y == 0
    assert runner.advance(1) == 1
    assert runner.state.active.y == 1
    assert runner.advance(1500) == 3
    assert runner.state.active.y == 4


def test_not_running_or_paused_does_not_tick():
    runner = GameRunner(GameState(rng=SequenceRng([3])))
    assert runner.advance(5000) == 0
    runner.start()
    runner.pause()
    assert runner.paused
    assert runner.advance(5000) == 0
    assert not runner.move_left()
    assert runner.state.active.x == 4
    assert runner.toggle_pause() is False
    assert runner.advance(500) == 1


def test_negative_elapsed_rejected():
    runner = make_runner(TetrominoType.O)
    with pytest.raises(ValueError):
        runner.advance(-1)


def test_interval_follows_lines_cleared():
    runner = make_runner(TetrominoType.I, TetrominoType.O)
    assert runner.interval_ms == 500
    runner.state.lines_cleared = 19
    runner.state.board.lock(((1,) * 6,), 0, 19, 1)
    runner.move_right()
    runner.move_right()
    assert runner.hard_drop() == 1
    assert runner.state.lines_cleared == 20
    assert runner.interval_ms == 300


def test_game_over_reported_once_and_stops_gravity():
    seen = []
    runner = make_runner(TetrominoType.O, on_game_over=seen.append)
    runner.state.board.lock(((1, 1),) * 18, 4, 2, 0)
    assert runner.advance(500) == 1
    assert runner.state.is_game_over()
    assert seen == [runner.state]
    assert runner.advance(10_000) == 0
    runner.move_left()
    assert len(seen) == 1


def test_restart_resets_engine_and_speed():
    runner = make_runner(TetrominoType.O)
    runner.state.lines_cleared = 30
    runner.state.score = 900
    runner.move_left()
    assert runner.interval_ms == 200
    runner.pause()
    runner.restart()
    assert not runner.paused
    assert runner.running
    assert runner.state.score == 0
    assert runner.interval_ms == 500


def test_stop_ignores_input():
    runner = make_runner(TetrominoType.O)
    runner.stop()
    assert not runner.running
    assert not runner.rotate()
    assert runner.hard_drop() == 0
    assert runner.state.board.occupied_count() == 0


def test_config_base_interval_is_used():
    runner = GameRunner(config=GameConfig(seed=1, base_interval_ms=250))
    runner.start()
    assert runner.interval_ms == 250
    assert runner.advance(250) == 1


def test_concurrent_input_and_ticks_keep_invariants():
    runner = GameRunner(config=GameConfig(seed=3))
    runner.start()

    def gravity():
        for _ in range(300):
            runner.advance(runner.interval_ms)

    def player():
        for i in range(300):
            (runner.move_left, runner.move_right, runner.rotate)[i % 3]()

    threads = [threading.Thread(target=gravity), threading.Thread(target=player)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    state = runner.state
    if not state.is_game_over():
        for row, col, _ in state.active_piece_cells():
            assert 0 <= col < state.board.cols
            assert row < state.board.rows
            if row >= 0:
                assert state.cell_at(row, col) == 0


def test_fast_base_interval_never_slows_down():
    runner = GameRunner(config=GameConfig(seed=1, base_interval_ms=250))
    runner.start()
    seen = [runner.interval_ms]
    for lines in (9, 10, 20, 30, 45):
        runner.state.lines_cleared = lines
        runner.move_left()
        seen.append(runner.interval_ms)
    assert seen == [250, 250, 250, 250, 200, 200]
    assert all(later <= earlier for earlier, later in zip(seen, seen[1:]))


def test_state_and_config_together_rejected():
    with pytest.raises(ValueError):
        GameRunner(GameState(rng=SequenceRng([3])), config=GameConfig())
