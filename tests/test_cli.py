import logging

import pytest

from blockblast.__main__ import main, parse_args, simulate


def test_ascii_frame(capsys):
    main(["--seed", "4"])
    out = capsys.readouterr().out.splitlines()
    assert out[:10] == ["." * 10] * 10
    assert out[10].startswith("Tray: ")
    assert out[11] == "Score: 0"


def test_simulate_logs_scores(caplog):
    with caplog.at_level(logging.INFO, logger="blockblast.__main__"):
        scores = simulate(2, seed=0)
    assert len(scores) == 2
    assert all(score > 0 for score in scores)
    assert "Game 2" in "".join(caplog.messages)


def test_negative_simulate_rejected():
    with pytest.raises(SystemExit):
        parse_args(["--simulate", "-1"])
