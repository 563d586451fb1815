import logging

from pyso3 import SO3
from pyso3.verify import bracket_failures, explog_failures, main, sample_rotations, sample_tangents


def test_samples():
    assert len(sample_rotations()) == 9
    assert len(sample_tangents()) == 7


def test_explog():
    assert explog_failures() == []


def test_bracket():
    assert bracket_failures() == []


def test_failures_reported(caplog):
    with caplog.at_level(logging.ERROR, logger="pyso3.verify"):
        failures = explog_failures([SO3.exp([0.2, 0.5, 0.0])], eps=-1.0)
    assert len(failures) == 3
    assert len([r for r in caplog.records if r.levelno == logging.ERROR]) == 3


def test_main():
    assert main([]) == 0
    assert main(["--eps", "-1"]) == 1
