import unittest
from dataclasses import replace
from typing import Optional

from ai.base_ai import BaseAI
from ai.sampling_ai import Difficulty, SamplingAI
from engine.board import Board, Move
from engine.game import (
    HUMAN_COLOR,
    OPPONENT_COLOR,
    GameState,
    GameStatus,
    TurnEngine,
    apply_move,
    apply_opponent_turn,
    apply_policy_move,
    initial_state,
    select_or_move,
)
from engine.pieces import Color, Kind, Piece


class StubAI(BaseAI):
    """Returns a fixed move (or None) and records calls."""

    def __init__(self, move: Optional[Move]) -> None:
        self.move = move
        self.calls = 0

    def choose_move(self, board: Board, color: Color) -> Optional[Move]:
        self.calls += 1
        return self.move


def black_to_move(board: Board) -> GameState:
    return GameState(board=board, white_to_move=False)


class InitialStateTests(unittest.TestCase):
    def test_initial_state(self):
        state = initial_state()
        self.assertEqual(state.board, Board.standard())
        self.assertTrue(state.white_to_move)
        self.assertIs(state.side_to_move, Color.WHITE)
        self.assertIs(state.status, GameStatus.PLAYING)
        self.assertEqual(state.captured_by_white, ())
        self.assertEqual(state.captured_by_black, ())
        self.assertIsNone(state.selected)
        self.assertEqual(state.valid_moves, ())

    def test_human_plays_white(self):
        self.assertIs(HUMAN_COLOR, Color.WHITE)
        self.assertIs(OPPONENT_COLOR, Color.BLACK)

    def test_initial_states_do_not_alias_boards(self):
        first = initial_state()
        second = initial_state()
        self.assertIsNot(first.board, second.board)
        self.assertIsNot(first.board.grid, second.board.grid)

    def test_states_compare_by_value_and_are_unhashable(self):
        self.assertEqual(initial_state(), initial_state())
        self.assertNotEqual(initial_state(), apply_move(initial_state(), (6, 4), (4, 4)))
        with self.assertRaises(TypeError):
            hash(initial_state())


class ApplyMoveTests(unittest.TestCase):
    def test_move_relocates_piece_and_flips_turn(self):
        state = initial_state()
        moved = apply_move(state, (6, 4), (4, 4))

        self.assertIsNone(moved.board.get_cell((6, 4)))
        self.assertEqual(moved.board.get_cell((4, 4)), Piece(Kind.PAWN, Color.WHITE))
        self.assertFalse(moved.white_to_move)
        self.assertEqual(moved.last_move, Move((6, 4), (4, 4)))
        self.assertIsNone(moved.last_captured)
        self.assertEqual(moved.captured_by_white, ())
        # Previous snapshot unchanged.
        self.assertEqual(state.board, Board.standard())
        self.assertTrue(state.white_to_move)

    def test_capture_appends_to_capturing_side(self):
        board = Board.from_ascii(
            """
            ....k...
            ........
            ........
            ...n....
            ........
            ........
            ........
            ...RK...
            """
        )
        state = GameState(board=board)
        after_white = apply_move(state, (7, 3), (3, 3))
        self.assertEqual(after_white.captured_by_white, ("♞",))
        self.assertEqual(after_white.captured_by_black, ())
        self.assertEqual(after_white.last_captured, Piece(Kind.KNIGHT, Color.BLACK))

        after_black = apply_move(after_white, (0, 4), (0, 3))
        self.assertEqual(after_black.captured_by_black, ())
        self.assertTrue(after_black.white_to_move)

    def test_capture_tallies_keep_order(self):
        board = Board.from_ascii(
            """
            r.......
            ........
            ........
            ........
            ........
            ........
            q.......
            R.......
            """
        )
        state = apply_move(GameState(board=board), (7, 0), (6, 0))
        state = apply_move(state, (0, 0), (6, 0))
        self.assertEqual(state.captured_by_white, ("♛",))
        self.assertEqual(state.captured_by_black, ("♖",))
        self.assertTrue(state.white_to_move)

    def test_rejects_unreachable_destination(self):
        state = initial_state()
        self.assertIs(apply_move(state, (6, 4), (3, 4)), state)
        self.assertIs(apply_move(state, (7, 0), (5, 0)), state)

    def test_rejects_wrong_color_or_empty_source(self):
        state = initial_state()
        self.assertIs(apply_move(state, (1, 4), (3, 4)), state)
        self.assertIs(apply_move(state, (4, 4), (3, 4)), state)
        self.assertIs(apply_move(state, (9, 4), (3, 4)), state)

    def test_moving_into_check_is_allowed(self):
        board = Board.from_ascii(
            """
            ....r...
            ........
            ........
            ........
            ........
            ........
            ........
            ...K....
            """
        )
        state = apply_move(GameState(board=board), (7, 3), (7, 4))
        self.assertEqual(state.board.get_cell((7, 4)), Piece(Kind.KING, Color.WHITE))
        self.assertIs(state.status, GameStatus.PLAYING)


class SelectOrMoveTests(unittest.TestCase):
    def test_selecting_own_piece_caches_destinations(self):
        state = select_or_move(initial_state(), (6, 4))
        self.assertEqual(state.selected, (6, 4))
        self.assertEqual(set(state.valid_moves), {(5, 4), (4, 4)})

    def test_clicking_destination_applies_move(self):
        state = select_or_move(initial_state(), (6, 4))
        state = select_or_move(state, (4, 4))
        self.assertFalse(state.white_to_move)
        self.assertIsNone(state.selected)
        self.assertEqual(state.valid_moves, ())
        self.assertEqual(state.board.get_cell((4, 4)), Piece(Kind.PAWN, Color.WHITE))

    def test_reselecting_another_own_piece(self):
        state = select_or_move(initial_state(), (6, 4))
        state = select_or_move(state, (7, 6))
        self.assertEqual(state.selected, (7, 6))
        self.assertEqual(set(state.valid_moves), {(5, 5), (5, 7)})
        self.assertTrue(state.white_to_move)

    def test_clicking_non_destination_clears_selection(self):
        selected = select_or_move(initial_state(), (6, 4))
        for pos in [(3, 3), (1, 4), (0, 0)]:
            cleared = select_or_move(selected, pos)
            self.assertIsNone(cleared.selected)
            self.assertEqual(cleared.valid_moves, ())
            self.assertTrue(cleared.white_to_move)
            self.assertEqual(cleared.board, Board.standard())

    def test_clicking_without_selection_is_noop(self):
        state = initial_state()
        self.assertIs(select_or_move(state, (4, 4)), state)
        self.assertIs(select_or_move(state, (1, 1)), state)
        self.assertIs(select_or_move(state, (8, 0)), state)

    def test_gated_on_turn_and_status(self):
        moved = select_or_move(select_or_move(initial_state(), (6, 4)), (4, 4))
        self.assertIs(select_or_move(moved, (6, 3)), moved)

        finished = replace(initial_state(), status=GameStatus.CHECKMATE)
        self.assertIs(select_or_move(finished, (6, 4)), finished)


class OpponentTurnTests(unittest.TestCase):
    def test_opening_exchange_returns_turn_to_white(self):
        state = select_or_move(select_or_move(initial_state(), (6, 4)), (4, 4))
        self.assertIs(select_or_move(state, (6, 4)), state)
        self.assertIsNone(state.board.get_cell((6, 4)))

        after = apply_opponent_turn(state, SamplingAI(Difficulty.HARD, seed=3))
        self.assertTrue(after.white_to_move)
        self.assertIsNotNone(after.last_move)
        moved_piece = after.board.get_cell(after.last_move.to_pos)
        self.assertIs(moved_piece.color, Color.BLACK)

    def test_noop_on_humans_turn(self):
        stub = StubAI(Move((1, 0), (2, 0)))
        state = initial_state()
        self.assertIs(apply_opponent_turn(state, stub), state)
        self.assertEqual(stub.calls, 0)

    def test_noop_when_not_playing(self):
        stub = StubAI(Move((1, 0), (2, 0)))
        state = replace(initial_state(), white_to_move=False, status=GameStatus.DRAW)
        self.assertIs(apply_opponent_turn(state, stub), state)

    def test_stall_leaves_state_unchanged(self):
        board = Board.from_ascii(
            """
            ........
            ........
            ........
            ........
            ........
            ........
            ....K...
            p.......
            """
        )
        state = black_to_move(board)
        with self.assertLogs("engine.game", level="WARNING"):
            after = apply_opponent_turn(state, SamplingAI(Difficulty.HARD, seed=1))
        self.assertIs(after, state)
        self.assertFalse(after.white_to_move)

    def test_policy_move_is_validated(self):
        state = black_to_move(Board.standard())
        bogus = StubAI(Move((0, 0), (4, 0)))
        self.assertIs(apply_policy_move(state, bogus), state)

    def test_policy_move_for_either_side(self):
        state = apply_policy_move(initial_state(), StubAI(Move((7, 1), (5, 2))))
        self.assertFalse(state.white_to_move)
        self.assertEqual(state.board.get_cell((5, 2)), Piece(Kind.KNIGHT, Color.WHITE))


class TurnEngineTests(unittest.TestCase):
    def test_full_turn_cycle(self):
        engine = TurnEngine(policy=SamplingAI(Difficulty.HARD, seed=11))
        self.assertIsNone(engine.schedule_opponent_turn())

        engine.select_square((6, 4))
        engine.select_square((4, 4))
        self.assertTrue(engine.opponent_turn_due())

        ticket = engine.schedule_opponent_turn()
        self.assertIsNotNone(ticket)
        self.assertTrue(engine.run_opponent_turn(ticket))
        self.assertTrue(engine.state.white_to_move)
        # A second run with the same ticket has nothing left to do.
        self.assertFalse(engine.run_opponent_turn(ticket))

    def test_reset_invalidates_pending_opponent_turn(self):
        stub = StubAI(Move((1, 0), (2, 0)))
        engine = TurnEngine(policy=stub)
        engine.select_square((6, 4))
        engine.select_square((4, 4))
        ticket = engine.schedule_opponent_turn()

        engine.reset()
        engine.select_square((6, 3))
        engine.select_square((4, 3))

        self.assertFalse(engine.run_opponent_turn(ticket))
        self.assertEqual(stub.calls, 0)
        self.assertFalse(engine.state.white_to_move)
        self.assertEqual(engine.state.board.get_cell((1, 0)), Piece(Kind.PAWN, Color.BLACK))

        fresh = engine.schedule_opponent_turn()
        self.assertTrue(engine.run_opponent_turn(fresh))
        self.assertEqual(engine.state.board.get_cell((2, 0)), Piece(Kind.PAWN, Color.BLACK))

    def test_reset_restores_initial_state(self):
        engine = TurnEngine(policy=SamplingAI(Difficulty.HARD, seed=5))
        engine.select_square((6, 4))
        engine.select_square((4, 4))
        engine.run_opponent_turn(engine.schedule_opponent_turn())
        engine.select_square((7, 6))

        state = engine.reset()
        self.assertEqual(state, initial_state())
        self.assertIs(engine.state, state)


if __name__ == "__main__":
    unittest.main()
