import logging

from tetris_engine.__main__ import main


def test_main_prints_final_frame(capsys):
    main(["--seed", "1", "--ticks", "60"])
    lines = capsys.readouterr().out.splitlines()
    frame, summary = lines[:20], lines[20]
    assert all(len(row) == 10 and set(row) <= {"#", "."} for row in frame)
    assert any("#" in row for row in frame)
    assert summary.startswith("score=")
    assert "game_over=" in summary


def test_main_logs_tick_count(caplog):
    with caplog.at_level(logging.INFO, logger="tetris_engine.__main__"):
        main(["--seed", "2", "--ticks", "5", "--log-level", "INFO"])
    assert "Played 5 tick(s)" in caplog.text
