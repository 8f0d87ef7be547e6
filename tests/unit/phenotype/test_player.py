"""
Unit tests for fourai.phenotype.player module.

Covers the shared move policy of Player and the evolution operators of
NeuralPlayer.
"""

from unittest.mock import patch

import numpy as np
import pytest

from fourai.game      import Board, Spot, NUM_ROWS
from fourai.phenotype import Network, NeuralPlayer, Player


# ============================================================================
# Helpers
# ============================================================================

class FixedPlayer(Player):
    """A player that always returns the same preferences."""

    def __init__(self, preferences):
        self.preferences = preferences
        self.calls = 0

    def get_move(self, board):
        self.calls += 1
        return self.preferences


@pytest.fixture
def small_player():
    return NeuralPlayer.random([42, 5, 7], ['elu', 'sigmoid'])


# ============================================================================
# Test play_move
# ============================================================================

class TestPlayMove:

    def test_player_is_abstract(self):
        with pytest.raises(TypeError):
            Player()

    def test_plays_highest_preference(self, board):
        player = FixedPlayer([0.1, 0.2, 0.9, 0.3, 0.0, 0.5, 0.4])
        result = player.play_move(board, Spot.FIRST)

        assert result == (True, None)
        assert board.get(2, NUM_ROWS - 1) is Spot.FIRST

    def test_full_column_falls_back_to_next_best(self, board):
        for color in [Spot.FIRST, Spot.SECOND] * 3:
            board.insert(2, color)

        player = FixedPlayer([0.1, 0.2, 0.9, 0.3, 0.0, 0.8, 0.4])
        player.play_move(board, Spot.SECOND)

        assert board.get(5, NUM_ROWS - 1) is Spot.SECOND
        assert board.moves == 7

    def test_several_full_columns(self, board):
        for column in (0, 1):
            for color in [Spot.FIRST, Spot.SECOND] * 3:
                board.insert(column, color)

        player = FixedPlayer([9.0, 8.0, 1.0, 2.0, 3.0, 4.0, 5.0])
        player.play_move(board, Spot.FIRST)

        assert board.get(6, NUM_ROWS - 1) is Spot.FIRST

    def test_ties_go_to_lowest_column(self, board):
        FixedPlayer([0.5] * 7).play_move(board, Spot.FIRST)
        assert board.get(0, NUM_ROWS - 1) is Spot.FIRST

    def test_nan_ranks_last(self, board):
        FixedPlayer([np.nan, -5.0, np.nan, np.nan, np.nan, np.nan, np.nan]).play_move(board, Spot.FIRST)
        assert board.get(1, NUM_ROWS - 1) is Spot.FIRST

    def test_preferences_queried_once(self, board):
        player = FixedPlayer(np.arange(7.0))
        player.play_move(board, Spot.FIRST)
        assert player.calls == 1

    def test_wrong_preference_length(self, board):
        with pytest.raises(ValueError, match="expected 7 column preferences"):
            FixedPlayer([1.0, 2.0]).play_move(board, Spot.FIRST)

    def test_full_board_raises(self, board, draw_moves):
        for column, color in draw_moves:
            board.insert(column, color)
        with pytest.raises(RuntimeError, match="no legal move"):
            FixedPlayer(np.arange(7.0)).play_move(board, Spot.FIRST)

    def test_returns_winning_result(self, board):
        for _ in range(3):
            board.insert(4, Spot.SECOND)
        result = FixedPlayer([0, 0, 0, 0, 1, 0, 0]).play_move(board, Spot.SECOND)
        assert result == (True, Spot.SECOND)


# ============================================================================
# Test NeuralPlayer
# ============================================================================

class TestNeuralPlayer:

    def test_get_move_is_forward_pass_of_flat_board(self, board, small_player):
        board.insert(3, Spot.FIRST)
        expected = small_player.network.forward_pass(board.flatten())
        np.testing.assert_array_equal(small_player.get_move(board), expected)

    def test_random(self):
        player = NeuralPlayer.random([42, 91, 91, 91, 7], ['sigmoid'] * 4)
        assert player.network.structure == [42, 91, 91, 91, 7]

    def test_clone_is_independent(self, small_player):
        clone = small_player.clone()
        clone.network.weights[0] += 1.0
        assert not np.array_equal(clone.network.weights[0], small_player.network.weights[0])


class TestMutate:

    def test_zero_probability_changes_nothing(self, small_player):
        before = [w.copy() for w in small_player.network.weights]
        small_player.mutate(0.5, probability=0.0)
        for w, b in zip(small_player.network.weights, before):
            np.testing.assert_array_equal(w, b)

    def test_changes_stay_within_range(self, small_player):
        before = [w.copy() for w in small_player.network.weights]
        small_player.mutate(0.05, probability=1.0)
        for w, b in zip(small_player.network.weights, before):
            assert np.all(np.abs(w - b) <= 0.05)
            assert np.any(w != b)

    def test_partial_probability(self):
        player = NeuralPlayer.random([42, 91, 7], ['sigmoid', 'sigmoid'])
        before = player.network.weights[0].copy()
        player.mutate(0.1, probability=0.3)

        changed = np.mean(player.network.weights[0] != before)
        assert 0.2 < changed < 0.4

    def test_shapes_preserved(self, small_player):
        shapes = [w.shape for w in small_player.network.weights]
        small_player.mutate(1.0)
        assert [w.shape for w in small_player.network.weights] == shapes


class TestCrossover:

    def test_layers_come_from_either_parent(self, small_player):
        other = NeuralPlayer.random([42, 5, 7], ['elu', 'sigmoid'])
        mine  = [w.copy() for w in small_player.network.weights]
        small_player.crossover(other)

        for w, m, o in zip(small_player.network.weights, mine, other.network.weights):
            assert np.array_equal(w, m) or np.array_equal(w, o)

    def test_inherits_all_layers(self, small_player):
        other = NeuralPlayer.random([42, 5, 7], ['elu', 'sigmoid'])
        with patch('random.random', return_value=0.0):
            small_player.crossover(other)

        for w, o in zip(small_player.network.weights, other.network.weights):
            np.testing.assert_array_equal(w, o)
            assert w is not o

    def test_keeps_all_layers(self, small_player):
        other = NeuralPlayer.random([42, 5, 7], ['elu', 'sigmoid'])
        mine  = [w.copy() for w in small_player.network.weights]
        with patch('random.random', return_value=0.9):
            small_player.crossover(other)

        for w, m in zip(small_player.network.weights, mine):
            np.testing.assert_array_equal(w, m)

    def test_other_is_unchanged(self, small_player):
        other  = NeuralPlayer.random([42, 5, 7], ['elu', 'sigmoid'])
        before = [w.copy() for w in other.network.weights]
        small_player.crossover(other)
        small_player.network.weights[0] += 1.0

        for w, b in zip(other.network.weights, before):
            np.testing.assert_array_equal(w, b)

    def test_structures_must_match(self, small_player):
        other = NeuralPlayer.random([42, 6, 7], ['elu', 'sigmoid'])
        with pytest.raises(ValueError, match="different structures"):
            small_player.crossover(other)
