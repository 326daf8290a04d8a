"""
Tests for the command-line interface.
"""
import argparse

import pytest

from hexgame.debug import DebugLevel, debug
from hexgame.interfaces.cli import SimpleCLI, positive_int


def teardown_function(function):
    # The CLI reconfigures the shared logger
    debug.configure(level=DebugLevel.INFO)


def test_benchmark_command(capsys):
    """Test that the benchmark plays the requested number of games."""
    cli = SimpleCLI()
    result = cli.run(['benchmark', '--games', '3', '--size', '9', '--seed', '1'])

    out = capsys.readouterr().out
    assert result == 0
    assert "Played 3 games" in out
    assert "Wins:" in out


@pytest.mark.parametrize("games", ['0', '-2'])
def test_benchmark_rejects_non_positive_game_count(games, capsys):
    """Test that a benchmark without games is a usage error, not a crash."""
    cli = SimpleCLI()
    with pytest.raises(SystemExit) as excinfo:
        cli.run(['benchmark', '--games', games])

    assert excinfo.value.code == 2
    assert "must be at least 1" in capsys.readouterr().err


def test_positive_int():
    """Test the argparse type used for counts."""
    assert positive_int('1') == 1
    assert positive_int('25') == 25
    with pytest.raises(argparse.ArgumentTypeError):
        positive_int('0')


def test_play_random_players(capsys):
    """Test a full game between two random players."""
    cli = SimpleCLI(input_func=lambda prompt: 'n')
    result = cli.run(['play', '--player1', 'random', '--player2', 'random',
                      '--size', '9', '--seed', '3'])

    out = capsys.readouterr().out
    assert result == 0
    assert "Game over!" in out
    assert "Winning path:" in out


def test_play_again_resets_game(capsys):
    """Test that answering 'y' plays a second game on the same board."""
    answers = iter(['y', 'n'])
    cli = SimpleCLI(input_func=lambda prompt: next(answers))
    cli.run(['play', '--player1', 'random', '--player2', 'random', '--size', '9'])

    out = capsys.readouterr().out
    assert out.count("Game over!") == 2


def test_human_can_quit(capsys):
    """Test that a human player quitting ends the CLI cleanly."""
    cli = SimpleCLI(input_func=lambda prompt: 'q')
    result = cli.run(['play', '--player1', 'human', '--size', '9'])

    out = capsys.readouterr().out
    assert result == 0
    assert "Quitting game." in out


def test_no_command(capsys):
    """Test that running without a command prints a hint."""
    cli = SimpleCLI()
    assert cli.run([]) == 1
    assert "Please specify a command" in capsys.readouterr().out
