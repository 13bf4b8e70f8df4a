import unittest

from core.cooldown_manager import CooldownManager
from core.score_keeper import ScoreKeeper
from domain.enums import Outcome
from domain.models import ScoreTally
from tests.fakes import FakeClock


class TestScoreKeeper(unittest.TestCase):
    def test_tally_and_reset(self):
        scores = ScoreKeeper()
        for outcome in [Outcome.WIN, Outcome.DRAW, Outcome.LOSS, Outcome.WIN]:
            scores.record(outcome)
        self.assertEqual(scores.tally, ScoreTally(wins=2, draws=1, losses=1))
        self.assertEqual(scores.tally.rounds, 4)

        scores.reset()
        self.assertEqual(scores.tally, ScoreTally(0, 0, 0))

    def test_record_returns_snapshot(self):
        scores = ScoreKeeper()
        snapshot = scores.record(Outcome.LOSS)
        scores.record(Outcome.LOSS)
        self.assertEqual(snapshot, ScoreTally(losses=1))


class TestCooldownManager(unittest.TestCase):
    def test_window(self):
        clock = FakeClock()
        cooldown = CooldownManager(1.5, clock=clock)
        self.assertFalse(cooldown.active())
        self.assertEqual(cooldown.remaining(), 0.0)

        cooldown.start()
        self.assertTrue(cooldown.active())
        clock.advance(1.0)
        self.assertTrue(cooldown.active())
        self.assertEqual(cooldown.remaining(), 0.5)
        clock.advance(0.5)
        self.assertFalse(cooldown.active())
        self.assertEqual(cooldown.remaining(), 0.0)

    def test_negative_duration(self):
        with self.assertRaises(ValueError):
            CooldownManager(-1.0)


if __name__ == '__main__':
    unittest.main()
