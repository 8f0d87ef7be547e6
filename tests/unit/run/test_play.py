"""
Unit tests for fourai.run.play module.

The game loops are driven through scripted input and captured output.
"""

import pytest

from fourai.errors    import CheckpointError
from fourai.game      import Board, Spot
from fourai.phenotype import RandomPlayer
from fourai.pool      import Agent, CheckpointStore
from fourai.run.play  import load_agent, play_against_ai, play_local, render_board


def scripted(*answers):
    """An input function returning the given answers in turn."""
    answers = iter(answers)
    return lambda prompt: next(answers)


def column_agent(column, fitness=0):
    reference = [0.0] * 7
    reference[column] = 1.0
    agent = Agent(RandomPlayer(reference=reference))
    agent.fitness = fitness
    return agent


@pytest.fixture
def prefix(tmp_path):
    """A checkpoint at generation 40 whose fittest agent always plays column 7."""
    prefix = tmp_path / 'saves' / 'gen'
    CheckpointStore(prefix).save(40, [column_agent(0, fitness=1), column_agent(6, fitness=9), column_agent(3)])
    return prefix


# ============================================================================
# Test Rendering
# ============================================================================

class TestRenderBoard:

    def test_plain(self):
        board = Board()
        board.insert(0, Spot.FIRST)
        board.insert(6, Spot.SECOND)
        lines = render_board(board, color=False).splitlines()

        assert len(lines) == 9
        assert lines[0].split() == ['1', '2', '3', '4', '5', '6', '7']
        assert 'XX' in lines[-2] and 'OO' in lines[-2]
        assert 'XX' not in lines[2]
        assert '\x1b[' not in '\n'.join(lines)

    def test_colored(self):
        board = Board()
        board.insert(3, Spot.FIRST)
        board.insert(3, Spot.SECOND)
        text = render_board(board)

        assert '\x1b[31m' in text
        assert '\x1b[33m' in text

    def test_rows_have_the_same_width(self):
        board = Board()
        board.insert(2, Spot.FIRST)
        widths = {len(line) for line in render_board(board, color=False).splitlines()[1:]}
        assert len(widths) == 1


# ============================================================================
# Test Loading
# ============================================================================

class TestLoadAgent:

    def test_fittest_of_latest(self, prefix):
        generation, agent = load_agent(str(prefix))
        assert generation == 40
        assert agent.fitness == 9

    def test_specific_generation(self, prefix):
        CheckpointStore(prefix).save(80, [column_agent(1, fitness=2)])
        assert load_agent(prefix)[0] == 80
        assert load_agent(prefix, generation=40)[0] == 40

    def test_missing(self, tmp_path):
        with pytest.raises(CheckpointError):
            load_agent(tmp_path / 'nothing' / 'gen')


# ============================================================================
# Test Local Play
# ============================================================================

class TestPlayLocal:

    def test_vertical_win(self):
        lines = []
        winner = play_local(scripted('1', '2', '1', '2', '1', '2', '1'), lines.append, color=False)

        assert winner is Spot.FIRST
        assert lines[-1] == "RED wins!"

    def test_invalid_input_is_reprompted(self):
        lines = []
        winner = play_local(scripted('abc', '0', '8', '', '1', '2', '1', '2', '1', '2', '1'),
                            lines.append, color=False)

        assert winner is Spot.FIRST
        assert sum("Invalid input" in line for line in lines) == 4

    def test_full_column_is_reprompted(self):
        lines = []
        moves = ['1'] * 6 + ['1', '2'] + ['3', '4', '3', '4', '3', '5', '3']
        winner = play_local(scripted(*moves), lines.append, color=False)

        assert any("column is full" in line for line in lines)
        assert winner is Spot.SECOND
        assert lines[-1] == "YELLOW wins!"


# ============================================================================
# Test Play Against the AI
# ============================================================================

class TestPlayAgainstAI:

    def test_human_first(self, prefix):
        lines = []
        winner = play_against_ai(prefix, input_fn=scripted('1', '1', '1', '1'), output_fn=lines.append, color=False)

        assert winner is Spot.FIRST
        assert "generation 40" in lines[0]

    def test_ai_first(self, prefix):
        lines = []
        winner = play_against_ai(prefix, ai_first=True, input_fn=scripted('1', '1', '1'),
                                 output_fn=lines.append, color=False)
        assert winner is Spot.FIRST
        assert lines[-1] == "RED wins!"

    def test_ai_wins_as_second(self, prefix):
        lines = []
        winner = play_against_ai(prefix, input_fn=scripted('1', '2', '3', '1'), output_fn=lines.append, color=False)
        assert winner is Spot.SECOND

    def test_missing_checkpoint(self, tmp_path):
        with pytest.raises(CheckpointError):
            play_against_ai(tmp_path / 'gen', input_fn=scripted(), output_fn=print)
