"""Tests for the command-line front end."""

import argparse

import pytest
from igisoro.cli import main as cli
from igisoro.utils import rich_display


def test_parse_pit():
    assert cli.parse_pit("2,0") == (2, 0)
    assert cli.parse_pit(" 3 7 ") == (3, 7)

    with pytest.raises(argparse.ArgumentTypeError):
        cli.parse_pit("2")
    with pytest.raises(argparse.ArgumentTypeError):
        cli.parse_pit("a,b")


def test_trace_prints_steps(capsys):
    code = cli.main(["trace", "2,0", "1,3"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Player 1 plays (2, 0)" in out
    assert "relay" in out
    assert "Player 1 to move" in out


def test_trace_stops_at_rejected_move(capsys):
    code = cli.main(["trace", "0,0"])

    out = capsys.readouterr().out
    assert code == 1
    assert "other player" in out


def test_no_command():
    assert cli.main([]) == 1


def test_play_until_quit(monkeypatch, capsys):
    answers = iter(["0,0", "nonsense", "2,0", "q"])
    monkeypatch.setattr(rich_display.console, "input", lambda prompt="": next(answers))

    code = cli.main(["play", "--no-animate"])

    out = capsys.readouterr().out
    assert code == 0
    assert "other player" in out
    assert "Expected ROW,COL" in out
    assert "Player 1 sowed 10 steps" in out
