import random
import unittest
from unittest.mock import patch

from game import (
    MAX_PORTION,
    TRANSFERING_WAIT,
    TUBE_COUNT,
    Color,
    Playing,
    PuzzleEngine,
    Select,
    Transfering,
    color_counts,
    deal_tubes,
)

# Colors 3..8 parked in full tubes 2..7 so scenarios only deal with colors 1 and 2.
FILLER = [[c] * MAX_PORTION for c in range(3, 9)]


def make_engine(first, second, eighth=(), ninth=()):
    return PuzzleEngine.from_tubes([list(first), list(second)] + FILLER + [list(eighth), list(ninth)])


def top_run(tube):
    run = 0
    for portion in reversed(tube):
        if portion != tube[-1]:
            break
        run += 1
    return run


class TestNewGame(unittest.TestCase):
    def test_given_seed_when_new_game_then_deal_is_deterministic(self):
        a = PuzzleEngine(seed=42)
        b = PuzzleEngine(seed=42)
        self.assertEqual(a.seed, 42)
        self.assertEqual(a.tubes, b.tubes)
        expected = tuple(tuple(t) for t in deal_tubes(random.Random(42)))
        self.assertEqual(a.tubes, expected)

    def test_given_new_game_when_inspecting_then_initial_state_reset(self):
        e = PuzzleEngine(seed=1)
        self.assertEqual(e.frame, -1)
        self.assertIsNone(e.from_tube)
        self.assertIsInstance(e.phase, Playing)
        self.assertFalse(e.is_clear)
        self.assertEqual(e.requested_sounds, [])
        self.assertEqual(len(e.tubes), TUBE_COUNT)
        self.assertEqual(e.tubes[-1], ())
        self.assertEqual(e.tubes[-2], ())

    def test_given_no_seed_when_new_game_then_wall_clock_seed_used_and_returned(self):
        with patch("watersort_core.engine.new_seed", return_value=1234):
            e = PuzzleEngine()
        self.assertEqual(e.seed, 1234)
        with patch("watersort_core.engine.new_seed", return_value=77):
            self.assertEqual(e.new_game(), 77)

    def test_given_rng_factory_when_new_game_then_factory_receives_seed(self):
        seen = []

        def factory(seed):
            seen.append(seed)
            return random.Random(seed)

        e = PuzzleEngine(seed=9, rng_factory=factory)
        e.new_game(10)
        self.assertEqual(seen, [9, 10])

    def test_given_new_game_when_logging_then_seed_reported(self):
        with self.assertLogs("watersort_core.engine", level="INFO") as cm:
            PuzzleEngine(seed=321)
        self.assertTrue(any("321" in line for line in cm.output))

    def test_given_game_in_progress_when_restarted_then_everything_reset(self):
        e = PuzzleEngine(seed=3)
        e.tick(Select(0))
        e.tick(Select(8))
        self.assertTrue(e.is_transfering)
        e.new_game(3)
        self.assertEqual(e.tubes, PuzzleEngine(seed=3).tubes)
        self.assertFalse(e.is_transfering)
        self.assertIsNone(e.from_tube)
        self.assertEqual(e.frame, -1)
        self.assertEqual(e.drain_sounds(), [])


class TestFromTubes(unittest.TestCase):
    def test_given_prepared_board_when_building_then_nothing_dealt_and_factory_kept(self):
        seen = []

        def factory(seed):
            seen.append(seed)
            return random.Random(seed)

        e = PuzzleEngine.from_tubes([[1, 1, 1, 2], [2, 2, 2, 1]] + FILLER + [[], []], rng_factory=factory)
        self.assertEqual(seen, [])
        self.assertIsNone(e.rng)
        self.assertEqual(e.seed, 0)
        self.assertEqual(e.frame, -1)
        self.assertEqual(e.tubes[0], (Color(1), Color(1), Color(1), Color(2)))
        e.new_game(4)
        self.assertEqual(seen, [4])
        self.assertEqual(e.tubes, PuzzleEngine(seed=4).tubes)

    def test_given_bad_boards_when_building_then_value_error(self):
        with self.assertRaises(ValueError):
            PuzzleEngine.from_tubes([[1] * 4])  # too few tubes
        with self.assertRaises(ValueError):
            make_engine([1, 1, 1, 1, 2], [2, 2, 2])  # overfull tube
        with self.assertRaises(ValueError):
            make_engine([1, 1, 1, 1], [1, 2, 2, 2])  # color 1 five times
        with self.assertRaises(ValueError):
            make_engine([1, 1, 1, 1], [2, 2, 2, 9])  # unknown color


class TestSelection(unittest.TestCase):
    def test_given_frames_when_ticking_then_frame_counter_increments(self):
        e = PuzzleEngine(seed=1)
        e.tick(None)
        self.assertEqual(e.frame, 0)
        e.tick(Select(9))  # rejected selection still counts a frame
        self.assertEqual(e.frame, 1)

    def test_given_empty_tube_when_selected_as_source_then_rejected(self):
        e = PuzzleEngine(seed=1)
        e.tick(Select(9))
        self.assertIsNone(e.from_tube)

    def test_given_same_tube_when_selected_twice_then_deselected(self):
        e = PuzzleEngine(seed=1)
        e.tick(Select(2))
        self.assertEqual(e.from_tube, 2)
        e.tick(Select(2))
        self.assertIsNone(e.from_tube)
        self.assertIsInstance(e.phase, Playing)

    def test_given_full_mismatched_destination_when_selected_then_nothing_changes(self):
        e = make_engine([1, 1, 1, 2], [2, 2, 2, 1])
        before = e.tubes
        e.tick(Select(0))
        e.tick(Select(1))
        self.assertEqual(e.tubes, before)
        self.assertEqual(e.from_tube, 0)
        self.assertIsInstance(e.phase, Playing)
        self.assertEqual(e.drain_sounds(), [])

    def test_given_out_of_range_index_when_ticking_then_index_error(self):
        e = PuzzleEngine(seed=1)
        with self.assertRaises(IndexError):
            e.tick(Select(TUBE_COUNT))


class TestTransfer(unittest.TestCase):
    def test_given_dealt_board_when_pouring_into_empty_then_top_run_moves(self):
        e = PuzzleEngine(seed=2024)
        source = list(e.tubes[0])
        run = top_run(source)
        e.tick(Select(0))
        e.tick(Select(8))
        self.assertEqual(list(e.tubes[0]), source[:-run])
        self.assertEqual(list(e.tubes[8]), source[-run:])
        self.assertEqual(e.drain_sounds(), ["pour"])
        self.assertIsInstance(e.phase, Transfering)
        self.assertEqual(e.transfering_color, source[-1])
        self.assertEqual(e.transferred_count, run)
        self.assertEqual(e.transfering_wait, TRANSFERING_WAIT)
        self.assertEqual(e.from_tube, 0)  # kept for the renderer until the animation ends

    def test_given_pour_when_animating_then_exactly_fifteen_ticks_and_commands_ignored(self):
        e = make_engine([1, 2, 2, 2], [1, 1, 1], eighth=[2])
        e.tick(Select(0))
        e.tick(Select(9))
        for i in range(TRANSFERING_WAIT - 1):
            e.tick(Select(1))
            self.assertTrue(e.is_transfering, f"tick {i}")
            self.assertEqual(e.from_tube, 0)
        self.assertEqual(e.transfering_wait, 1)
        e.tick(None)
        self.assertIsInstance(e.phase, Playing)
        self.assertIsNone(e.from_tube)
        self.assertEqual(e.transferred_count, 0)
        self.assertIsNone(e.transfering_color)

    def test_given_limited_space_when_pouring_then_dest_filled_and_rest_stays(self):
        e = make_engine([1, 2, 2, 2], [1, 1, 2], eighth=[1])
        e.tick(Select(0))
        e.tick(Select(1))
        self.assertEqual(e.tubes[0], (Color(1), Color(2), Color(2)))
        self.assertEqual(e.tubes[1], (Color(1), Color(1), Color(2), Color(2)))
        self.assertEqual(e.transferred_count, 1)

    def test_given_random_play_when_ticking_then_conservation_and_capacity_hold(self):
        rng = random.Random(8)
        e = PuzzleEngine(seed=8)
        for _ in range(3000):
            before = e.tubes
            was_playing = not e.is_transfering and not e.is_clear
            source = e.from_tube
            command = Select(rng.randrange(TUBE_COUNT)) if rng.random() < 0.5 else None
            e.tick(command)
            self.assertEqual(set(color_counts([list(t) for t in e.tubes]).values()), {MAX_PORTION})
            for tube in e.tubes:
                self.assertLessEqual(len(tube), MAX_PORTION)
            if e.tubes != before:
                # A board change only happens on a valid pour from the selected source.
                self.assertTrue(was_playing)
                dest = command.index
                self.assertIsNotNone(source)
                self.assertTrue(before[dest] == () or (
                    len(before[dest]) < MAX_PORTION and before[dest][-1] == before[source][-1]))
                poured = before[source][-1]
                self.assertEqual(e.tubes[dest][-1], poured)
                self.assertTrue(
                    e.tubes[source] == ()
                    or e.tubes[source][-1] != poured
                    or len(e.tubes[dest]) == MAX_PORTION
                )
            e.drain_sounds()


class TestDirectTransfer(unittest.TestCase):
    def test_given_no_source_when_transfer_called_then_rejected(self):
        e = make_engine([1, 1, 1, 2], [2, 2, 2, 1])
        before = e.tubes
        self.assertFalse(e.transfer(8))
        self.assertEqual(e.tubes, before)
        self.assertEqual(e.requested_sounds, [])

    def test_given_full_mismatched_or_same_tube_when_transfer_called_then_rejected(self):
        e = make_engine([1, 1, 1, 2], [2, 2, 2, 1], eighth=[], ninth=[])
        e.tick(Select(0))
        before = e.tubes
        self.assertFalse(e.transfer(1))
        self.assertFalse(e.transfer(0))
        self.assertEqual(e.tubes, before)
        self.assertIsInstance(e.phase, Playing)
        self.assertEqual(e.requested_sounds, [])

    def test_given_animation_running_when_transfer_called_then_rejected(self):
        e = make_engine([1, 2, 2, 2], [1, 1, 1], eighth=[2])
        e.tick(Select(0))
        e.tick(Select(9))
        e.drain_sounds()
        before = e.tubes
        self.assertFalse(e.transfer(8))
        self.assertEqual(e.tubes, before)
        self.assertEqual(e.transferred_count, 3)
        self.assertEqual(e.transfering_wait, TRANSFERING_WAIT)
        self.assertEqual(e.requested_sounds, [])

    def test_given_valid_target_when_transfer_called_then_pour_starts(self):
        e = make_engine([1, 2, 2, 2], [1, 1, 1], eighth=[2])
        e.tick(Select(0))
        self.assertTrue(e.transfer(8))
        self.assertEqual(e.tubes[8], (Color(2), Color(2), Color(2), Color(2)))
        self.assertEqual(e.requested_sounds, ["pour"])


class TestClear(unittest.TestCase):
    def _finish(self):
        e = make_engine([1, 1, 1], [2, 2, 2, 2], eighth=[1])
        e.tick(Select(8))
        e.tick(Select(0))
        for _ in range(TRANSFERING_WAIT):
            self.assertFalse(e.is_clear)
            e.tick(None)
        return e

    def test_given_last_pour_when_animation_ends_then_clear_and_bravo(self):
        e = self._finish()
        self.assertTrue(e.is_clear)
        self.assertEqual(e.drain_sounds(), ["pour", "bravo"])
        self.assertEqual(e.drain_sounds(), [])

    def test_given_cleared_game_when_selecting_then_board_frozen(self):
        e = self._finish()
        e.drain_sounds()
        frozen = e.tubes
        for index in (0, 8, 1, 9, 0, 9):
            e.tick(Select(index))
        self.assertEqual(e.tubes, frozen)
        self.assertIsNone(e.from_tube)
        self.assertTrue(e.is_clear)
        self.assertEqual(e.drain_sounds(), [])

    def test_given_unsolved_board_when_check_clear_then_false_and_no_sound(self):
        e = make_engine([1, 1, 1, 2], [2, 2, 2, 1])
        self.assertFalse(e.check_clear())
        self.assertEqual(e.requested_sounds, [])

    def test_given_cleared_game_when_new_game_then_flag_reset(self):
        e = self._finish()
        e.new_game(5)
        self.assertFalse(e.is_clear)
        e.tick(Select(0))
        self.assertEqual(e.from_tube, 0)


if __name__ == '__main__':
    unittest.main(verbosity=2)
