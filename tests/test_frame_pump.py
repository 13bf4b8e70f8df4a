import random
import threading
import unittest
from unittest.mock import create_autospec

from app.config import AppConfig
from app.pipeline import build_pump
from core.cooldown_manager import CooldownManager
from core.frame_pump import FramePump, MSG_DETECTING, MSG_NO_HAND, MSG_READY
from core.round_engine import RoundEngine
from core.score_keeper import ScoreKeeper
from core.state_stabilizer import GestureStabilizer
from domain.enums import Gesture, Outcome, SessionPhase
from domain.models import RoundOutcome, ScoreTally, StabilizationState
from tests.fakes import (
    FakeClock, FakeSource, POINT_HAND, PAPER_HAND, ROCK_HAND, RecordingSink,
    SCISSORS_HAND, ScriptedTracker,
)


def fixed_rng(move):
    rng = create_autospec(random.Random, instance=True)
    rng.choice.return_value = move
    return rng


class PumpTestCase(unittest.TestCase):
    cpu_move = Gesture.SCISSORS

    def setUp(self):
        self.clock = FakeClock()
        self.stabilizer = GestureStabilizer(threshold=6)
        self.scores = ScoreKeeper()
        self.engine = RoundEngine(
            self.stabilizer,
            self.scores,
            CooldownManager(1.5, clock=self.clock),
            rng=fixed_rng(self.cpu_move),
        )
        self.tracker = ScriptedTracker()
        self.sink = RecordingSink()
        self.source = FakeSource([])
        self.pump = FramePump(self.source, self.tracker, self.engine, self.stabilizer, self.sink)

    def feed(self, frames):
        for frame in frames:
            self.pump.submit(frame)


class TestFramePumpDetection(PumpTestCase):
    def test_one_round_after_threshold_frames(self):
        self.feed([ROCK_HAND] * 5)
        self.assertEqual(self.sink.rounds, [])
        self.assertEqual(self.stabilizer.state, StabilizationState(Gesture.ROCK, 5))

        self.feed([ROCK_HAND])
        self.assertEqual(
            self.sink.rounds, [RoundOutcome(Gesture.ROCK, Gesture.SCISSORS, Outcome.WIN)]
        )
        self.assertEqual(self.sink.scores, [ScoreTally(wins=1)])
        self.assertIs(self.engine.phase, SessionPhase.LOCKED)

    def test_status_lines(self):
        self.feed(["no-hand", POINT_HAND, PAPER_HAND])
        self.assertEqual(
            self.sink.statuses, [MSG_NO_HAND, MSG_DETECTING, "Detected: Paper"]
        )
        self.assertEqual(self.sink.gestures, [Gesture.UNKNOWN, Gesture.PAPER])

    def test_hand_loss_resets_the_run(self):
        self.feed([PAPER_HAND] * 5 + ["no-hand"] + [PAPER_HAND] * 5)
        self.assertEqual(self.sink.rounds, [])
        self.assertEqual(self.stabilizer.count, 5)

        self.feed([PAPER_HAND])
        self.assertEqual(len(self.sink.rounds), 1)

    def test_empty_landmark_list_counts_as_no_hand(self):
        self.feed([SCISSORS_HAND] * 3 + [[]])
        self.assertEqual(self.stabilizer.state, StabilizationState(Gesture.UNKNOWN, 0))
        self.assertEqual(self.sink.statuses[-1], MSG_NO_HAND)

    def test_interrupted_run_needs_full_new_run(self):
        self.feed([ROCK_HAND] * 5 + [PAPER_HAND] * 5)
        self.assertEqual(self.sink.rounds, [])
        self.feed([PAPER_HAND])
        self.assertEqual(self.sink.rounds[0].player_move, Gesture.PAPER)

    def test_tracker_error_is_contained(self):
        self.feed([SCISSORS_HAND] * 4 + [RuntimeError("backend hiccup")])
        self.assertEqual(self.stabilizer.state, StabilizationState(Gesture.UNKNOWN, 0))
        self.assertIn("[ERROR] Hand tracker: backend hiccup", self.sink.logs)
        self.assertEqual(self.sink.statuses[-1], MSG_NO_HAND)

        self.feed([SCISSORS_HAND] * 6)
        self.assertEqual(len(self.sink.rounds), 1)

    def test_unsized_tracker_result_counts_as_no_hand(self):
        self.feed([ROCK_HAND] * 3)
        self.assertTrue(self.pump.submit(42))
        self.assertEqual(self.stabilizer.state, StabilizationState(Gesture.UNKNOWN, 0))
        self.assertEqual(self.sink.statuses[-1], MSG_NO_HAND)

        self.assertTrue(self.pump.submit(p for p in ROCK_HAND))
        self.assertEqual(self.stabilizer.state, StabilizationState(Gesture.UNKNOWN, 0))


class TestFramePumpCooldown(PumpTestCase):
    def test_end_to_end_round(self):
        self.feed([ROCK_HAND] * 6)
        self.assertEqual(len(self.sink.rounds), 1)
        self.assertEqual(self.sink.rounds[0].player_move, Gesture.ROCK)
        calls_when_locked = self.tracker.calls

        # frames during the cooldown are consumed, not classified
        self.clock.advance(1.0)
        self.feed([ROCK_HAND] * 20)
        self.assertEqual(len(self.sink.rounds), 1)
        self.assertEqual(self.tracker.calls, calls_when_locked)
        self.assertIs(self.engine.phase, SessionPhase.LOCKED)

        # first frame after the window unlocks and starts a fresh run
        self.clock.advance(0.5)
        self.feed(["no-hand"])
        self.assertIs(self.engine.phase, SessionPhase.DETECTING)
        self.assertEqual(self.stabilizer.state, StabilizationState(Gesture.UNKNOWN, 0))
        self.assertIn(MSG_READY, self.sink.statuses)
        self.assertEqual(len(self.sink.rounds), 1)

    def test_second_round_after_cooldown(self):
        self.feed([ROCK_HAND] * 6)
        self.clock.advance(1.5)
        self.feed([PAPER_HAND] * 5)
        self.assertEqual(len(self.sink.rounds), 1)
        self.feed([PAPER_HAND])
        self.assertEqual(len(self.sink.rounds), 2)
        self.assertEqual(self.sink.scores[-1], ScoreTally(wins=1, losses=1))


class TestFramePumpUserActions(PumpTestCase):
    def test_reset_clears_everything_but_phase(self):
        self.feed([ROCK_HAND] * 6)
        self.pump.reset_session()

        self.assertIsNone(self.sink.rounds[-1])
        self.assertEqual(self.sink.scores[-1], ScoreTally())
        self.assertIsNone(self.engine.last_outcome)
        self.assertIs(self.engine.phase, SessionPhase.LOCKED)

        self.clock.advance(1.5)
        self.feed([ROCK_HAND])
        self.assertIs(self.engine.phase, SessionPhase.DETECTING)

    def test_reset_mid_run(self):
        self.feed([PAPER_HAND] * 4)
        self.pump.reset_session()
        self.assertEqual(self.stabilizer.state, StabilizationState(Gesture.UNKNOWN, 0))
        self.assertEqual(self.sink.statuses[-1], MSG_READY)

    def test_switch_source_keeps_score(self):
        self.feed([ROCK_HAND] * 6)
        self.clock.advance(1.5)
        self.feed([PAPER_HAND] * 3)

        new_source = FakeSource([])
        previous = self.pump.switch_source(new_source)

        self.assertIs(previous, self.source)
        self.assertEqual(self.stabilizer.state, StabilizationState(Gesture.UNKNOWN, 0))
        self.assertIsNone(self.engine.last_outcome)
        self.assertIsNone(self.sink.rounds[-1])
        self.assertEqual(self.engine.tally, ScoreTally(wins=1))


class TestFramePumpIntake(PumpTestCase):
    def test_step_pulls_and_releases(self):
        self.source = FakeSource([ROCK_HAND, "no-hand"])
        self.pump.switch_source(self.source)

        self.assertTrue(self.pump.step())
        self.assertTrue(self.pump.step())
        self.assertFalse(self.pump.step())
        self.assertEqual(self.source.leased, 3)
        self.assertEqual(self.source.released, 3)

    def test_step_hands_frame_out_while_leased(self):
        self.source = FakeSource([PAPER_HAND])
        self.pump.switch_source(self.source)
        seen = []

        def on_frame(frame):
            seen.append((frame, self.source.released, list(self.sink.gestures)))

        self.assertTrue(self.pump.step(on_frame=on_frame))
        self.assertEqual(seen, [(PAPER_HAND, 0, [Gesture.PAPER])])
        self.assertEqual(self.source.released, 1)

        self.assertFalse(self.pump.step(on_frame=on_frame))
        self.assertEqual(len(seen), 1)

    def test_frame_released_when_tracker_fails(self):
        self.source = FakeSource([ValueError("bad tensor")])
        self.pump.switch_source(self.source)
        self.assertTrue(self.pump.step())
        self.assertEqual(self.source.released, 1)

    def test_frame_released_when_sink_raises(self):
        class BrokenSink(RecordingSink):
            failed = False

            def on_status(self, message):
                if not self.failed:
                    self.failed = True
                    raise RuntimeError("display gone")
                super().on_status(message)

        source = FakeSource([ROCK_HAND])
        sink = BrokenSink()
        pump = FramePump(source, self.tracker, self.engine, self.stabilizer, sink)
        with self.assertRaises(RuntimeError):
            pump.step()
        self.assertEqual(source.released, 1)

        # the in-flight slot was freed: the next frame is processed, not dropped
        self.assertTrue(pump.submit(ROCK_HAND))
        self.assertEqual(pump.dropped_frames, 0)
        self.assertEqual(sink.statuses, ["Detected: Rock"])

    def test_run_until_source_is_empty(self):
        self.source = FakeSource([ROCK_HAND] * 6 + [ROCK_HAND] * 3)
        self.pump.switch_source(self.source)
        self.pump.run()
        self.assertEqual(len(self.sink.rounds), 2)  # one round, one clear from switch
        self.assertEqual(self.sink.rounds[-1].player_move, Gesture.ROCK)

    def test_run_stops_on_request(self):
        self.source = FakeSource([PAPER_HAND] * 10)
        self.pump.switch_source(self.source)
        checks = iter([False, False, False, True])
        self.pump.run(should_stop=lambda: next(checks))
        self.assertEqual(self.tracker.calls, 3)

    def test_overlapping_frame_is_dropped(self):
        entered = threading.Event()
        release = threading.Event()

        class SlowTracker(ScriptedTracker):
            def detect(self, frame):
                entered.set()
                release.wait(5)
                return super().detect(frame)

        tracker = SlowTracker()
        pump = FramePump(self.source, tracker, self.engine, self.stabilizer, self.sink)
        worker = threading.Thread(target=pump.submit, args=(ROCK_HAND,))
        worker.start()
        self.assertTrue(entered.wait(5))

        self.assertFalse(pump.submit(ROCK_HAND))
        self.assertEqual(pump.dropped_frames, 1)

        release.set()
        worker.join(5)
        self.assertEqual(tracker.calls, 1)
        self.assertEqual(self.stabilizer.count, 1)
        self.assertTrue(pump.submit(ROCK_HAND))
        self.assertEqual(self.stabilizer.count, 2)


class TestBuildPump(unittest.TestCase):
    def test_wires_config(self):
        clock = FakeClock()
        config = AppConfig(stable_frames=3, cooldown=2.0, rng_seed=42)
        sink = RecordingSink()
        pump = build_pump(config, FakeSource([]), ScriptedTracker(), sink=sink, clock=clock)

        for _ in range(3):
            pump.submit(SCISSORS_HAND)
        self.assertEqual(len(sink.rounds), 1)
        self.assertTrue(pump.engine.is_locked)
        self.assertEqual(pump.cooldown_remaining, 2.0)

        clock.advance(2.0)
        pump.submit("no-hand")
        self.assertFalse(pump.engine.is_locked)

    def test_same_seed_same_cpu_moves(self):
        def cpu_moves():
            clock = FakeClock()
            sink = RecordingSink()
            pump = build_pump(
                AppConfig(stable_frames=1, rng_seed=3), FakeSource([]),
                ScriptedTracker(), sink=sink, clock=clock,
            )
            for _ in range(10):
                pump.submit(ROCK_HAND)
                clock.advance(1.5)
            return [outcome.cpu_move for outcome in sink.rounds]

        self.assertEqual(cpu_moves(), cpu_moves())


if __name__ == '__main__':
    unittest.main()
