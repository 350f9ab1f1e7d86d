"""Tests for main.py: the headless --simulate mode and argument handling."""

import pytest

from main import main, run_simulation
from picker.config import WheelConfig


class TestRunSimulation:
    """run_simulation prints a table and returns the uniformity report."""

    def test_report(self, capsys):
        report = run_simulation(5, 1000, 0, WheelConfig())
        assert len(report.counts) == 5
        assert report.counts.sum() == 1000
        assert report.frequencies.sum() == pytest.approx(1.0)
        assert 0.0 <= report.p_value <= 1.0

        out = capsys.readouterr().out
        assert "1000 spins over 5 slices" in out
        assert "slice 4:" in out
        assert "max deviation" in out

    def test_seed_reproducible(self, capsys):
        a = run_simulation(4, 500, 3, WheelConfig())
        b = run_simulation(4, 500, 3, WheelConfig())
        assert list(a.counts) == list(b.counts)


class TestMainSimulate:

    def test_exit_code_success(self, capsys):
        assert main(["--simulate", "5", "--trials", "1000", "--seed", "0"]) == 0
        assert "5 slices" in capsys.readouterr().out

    def test_too_few_items(self):
        assert main(["--simulate", "1", "--trials", "100"]) == 2

    def test_invalid_duration(self):
        assert main(["--duration", "0", "--simulate", "5"]) == 2
