"""Tests for the TalkTimer state machine and the variant factory.

Covers: tt.core.timer, tt.core.timer_state
"""

import unittest

from fakes import T0, FakeClock, ManualScheduler, RecordingSink

from tt.core.timer import TICK_PERIOD, TalkTimer, select, select_variant
from tt.core.variants import Countdown, Countup, EndTime, TimeOfDay


class TimerTestCase(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.scheduler = ManualScheduler()
        self.sink = RecordingSink()

    def make(self, duration=0, end_time=0, start_time=0, show_clock=False):
        return select(
            duration, end_time, 0, start_time, show_clock,
            clock=self.clock, scheduler=self.scheduler, sink=self.sink,
        )

    def tick(self, seconds=1):
        self.clock.advance(seconds)
        self.scheduler.fire()


# ──────────────────────────────────────────────────────────────────────────
# Construction and pretalk
# ──────────────────────────────────────────────────────────────────────────

class TestConstruction(TimerTestCase):

    def test_renders_on_construction(self):
        self.make(duration=600)
        self.assertEqual(self.sink.text, "10:00")
        self.assertEqual(self.sink.tags, frozenset())

    def test_no_start_time_waits_stopped_at_zero(self):
        timer = self.make(duration=600)
        self.assertFalse(timer.running)
        self.assertEqual(timer.elapsed, 0)
        self.assertFalse(timer.is_paused())

    def test_future_start_time_is_pretalk_and_running(self):
        timer = self.make(duration=600, start_time=T0 + 120)
        self.assertLess(timer.elapsed, 0)
        self.assertTrue(timer.running)
        self.assertIn("pretalk", timer.tags)
        self.assertEqual(self.sink.text, "-02:00")

    def test_pretalk_countdown_ticks_towards_start(self):
        self.make(start_time=T0 + 120)
        self.tick(30)
        self.assertEqual(self.sink.text, "-01:30")
        self.assertIn("pretalk", self.sink.tags)

    def test_pretalk_runs_into_talk_on_its_own(self):
        timer = self.make(start_time=T0 + 5)
        self.tick(7)
        self.assertEqual(timer.elapsed, 2)
        self.assertEqual(self.sink.text, "00:02")
        self.assertNotIn("pretalk", self.sink.tags)

    def test_registers_one_second_period(self):
        self.make(start_time=T0 + 60)
        (period, _), = self.scheduler.active.values()
        self.assertEqual(period, TICK_PERIOD)
        self.assertEqual(TICK_PERIOD, 1)

    def test_past_start_time_is_reset_to_zero(self):
        timer = self.make(duration=600, start_time=T0 - 100)
        self.assertEqual(timer.elapsed, 0)
        self.assertFalse(timer.running)


# ──────────────────────────────────────────────────────────────────────────
# start / stop
# ──────────────────────────────────────────────────────────────────────────

class TestStartStop(TimerTestCase):

    def test_start_registers_tick_and_counts(self):
        timer = self.make()
        timer.start()
        self.assertTrue(timer.running)
        self.assertEqual(self.scheduler.registered, 1)
        self.tick(75)
        self.assertEqual(self.sink.text, "01:15")

    def test_start_while_running_in_talk_is_noop(self):
        timer = self.make()
        timer.start()
        self.tick(10)
        timer.start()
        self.assertEqual(self.scheduler.registered, 1)
        self.assertEqual(timer.elapsed, 10)
        self.assertEqual(self.sink.text, "00:10")

    def test_start_during_pretalk_jumps_to_talk(self):
        timer = self.make(duration=600, start_time=T0 + 300)
        self.tick(10)
        timer.start()
        self.assertEqual(timer.elapsed, 0)
        self.assertEqual(timer.state.start_reference, T0 + 10)
        self.assertEqual(self.scheduler.registered, 1)
        self.assertEqual(self.sink.text, "10:00")
        self.assertNotIn("pretalk", self.sink.tags)

    def test_start_resumes_from_frozen_elapsed(self):
        timer = self.make()
        timer.start()
        self.tick(40)
        timer.stop()
        self.clock.advance(500)
        timer.start()
        self.assertEqual(timer.elapsed, 40)
        self.tick(2)
        self.assertEqual(timer.elapsed, 42)

    def test_stop_freezes_elapsed(self):
        timer = self.make()
        timer.start()
        self.tick(40)
        timer.stop()
        self.clock.advance(100)
        self.scheduler.fire()
        self.assertEqual(timer.elapsed, 40)
        self.assertFalse(timer.running)

    def test_stop_is_idempotent(self):
        timer = self.make()
        timer.start()
        timer.stop()
        timer.stop()
        self.assertEqual(self.scheduler.cancelled, 1)
        self.assertFalse(timer.running)
        self.assertEqual(self.scheduler.active, {})

    def test_stop_without_registration_is_safe(self):
        timer = self.make()
        timer.stop()
        self.assertEqual(self.scheduler.cancelled, 0)

    def test_tick_always_continues(self):
        timer = self.make()
        timer.start()
        self.assertTrue(timer.tick())


# ──────────────────────────────────────────────────────────────────────────
# pause / is_paused
# ──────────────────────────────────────────────────────────────────────────

class TestPause(TimerTestCase):

    def test_pause_running_talk(self):
        timer = self.make()
        timer.start()
        self.tick(75)
        self.assertTrue(timer.pause())
        self.assertFalse(timer.running)
        self.assertTrue(timer.is_paused())

    def test_pause_again_resumes(self):
        timer = self.make()
        timer.start()
        self.tick(75)
        timer.pause()
        self.clock.advance(100)
        self.assertFalse(timer.pause())
        self.assertTrue(timer.running)
        self.assertFalse(timer.is_paused())
        self.tick(5)
        self.assertEqual(self.sink.text, "01:20")

    def test_pause_in_pretalk_does_nothing(self):
        timer = self.make(duration=600, start_time=T0 + 60)
        handle = timer.state.registration
        self.assertFalse(timer.pause())
        self.assertTrue(timer.running)
        self.assertEqual(timer.state.registration, handle)
        self.assertFalse(timer.is_paused())

    def test_pause_fresh_timer_returns_false(self):
        for duration in (0, 600):
            with self.subTest(duration=duration):
                timer = self.make(duration=duration)
                self.assertFalse(timer.pause())
                self.assertFalse(timer.running)
                self.assertIsNone(timer.state.registration)

    def test_pause_at_exact_talk_start_does_nothing(self):
        timer = self.make()
        timer.start()
        self.assertEqual(timer.elapsed, 0)
        self.assertFalse(timer.pause())
        self.assertTrue(timer.running)


# ──────────────────────────────────────────────────────────────────────────
# reset / set_progress
# ──────────────────────────────────────────────────────────────────────────

class TestReset(TimerTestCase):

    def test_reset_in_talk_zeroes_and_stops(self):
        timer = self.make(duration=600)
        timer.start()
        self.tick(90)
        timer.reset()
        self.assertEqual(timer.elapsed, 0)
        self.assertFalse(timer.running)
        self.assertEqual(self.sink.text, "10:00")

    def test_reset_in_pretalk_keeps_running(self):
        timer = self.make(start_time=T0 + 300)
        self.tick(100)
        timer.reset()
        self.assertTrue(timer.running)
        self.assertEqual(timer.elapsed, -200)
        self.assertEqual(self.sink.text, "-03:20")

    def test_reset_after_pretalk_skip_goes_back_to_zero(self):
        timer = self.make(start_time=T0 + 300)
        timer.start()
        self.tick(20)
        timer.reset()
        self.assertEqual(timer.elapsed, 0)
        self.assertFalse(timer.running)

    def test_set_progress_waits_for_next_readout(self):
        timer = self.make(duration=600)
        timer.start()
        self.tick(330)
        renders = len(self.sink.readouts)
        timer.set_progress(0.5)
        self.assertEqual(len(self.sink.readouts), renders)
        self.assertEqual(timer.state.progress, 0.5)
        self.tick(0)
        self.assertIn("big-change-needed", self.sink.tags)


# ──────────────────────────────────────────────────────────────────────────
# EndTime
# ──────────────────────────────────────────────────────────────────────────

class TestEndTimeTimer(TimerTestCase):

    def test_stopped_shows_until(self):
        self.make(end_time=T0 + 3600, start_time=T0)
        self.assertEqual(self.sink.text, "Until 23:13")

    def test_start_derives_duration(self):
        timer = self.make(end_time=T0 + 3600, start_time=T0)
        timer.start()
        self.assertEqual(timer.variant.duration, 3600)
        self.assertEqual(self.sink.text, "60:00")

    def test_stop_shows_until_again(self):
        timer = self.make(end_time=T0 + 3600, start_time=T0)
        timer.start()
        self.tick(60)
        self.assertEqual(self.sink.text, "59:00")
        timer.stop()
        self.assertEqual(self.sink.text, "Until 23:13")

    def test_late_start_shortens_duration(self):
        timer = self.make(end_time=T0 + 3600)
        self.clock.advance(600)
        timer.start()
        self.assertEqual(timer.variant.duration, 3000)
        self.assertEqual(self.sink.text, "50:00")

    def test_reset_in_talk_shows_until(self):
        timer = self.make(end_time=T0 + 3600, start_time=T0)
        timer.start()
        self.tick(60)
        timer.reset()
        self.assertFalse(timer.running)
        self.assertEqual(self.sink.text, "Until 23:13")

    def test_pretalk_counts_down_to_start(self):
        timer = self.make(end_time=T0 + 3600, start_time=T0 + 600)
        self.assertTrue(timer.running)
        self.assertEqual(timer.variant.duration, 3000)
        self.assertEqual(self.sink.text, "-10:00")
        self.assertIn("pretalk", self.sink.tags)

    def test_pause_shows_until(self):
        timer = self.make(end_time=T0 + 3600, start_time=T0)
        timer.start()
        self.tick(60)
        self.assertTrue(timer.pause())
        self.assertEqual(self.sink.text, "Until 23:13")
        self.assertFalse(timer.pause())
        self.assertEqual(self.sink.text, "59:00")


# ──────────────────────────────────────────────────────────────────────────
# TimeOfDay
# ──────────────────────────────────────────────────────────────────────────

class TestTimeOfDayTimer(TimerTestCase):

    def test_runs_from_construction(self):
        timer = self.make(show_clock=True)
        self.assertTrue(timer.running)
        # 22:13:20 is 80000 seconds past midnight
        self.assertEqual(self.sink.text, "1333:20")

    def test_follows_the_clock(self):
        self.make(show_clock=True)
        self.tick(45)
        self.assertEqual(self.sink.text, "1334:05")

    def test_never_pauses(self):
        timer = self.make(show_clock=True)
        self.tick(10)
        self.assertFalse(timer.pause())
        self.assertFalse(timer.is_paused())
        self.assertTrue(timer.running)
        timer.stop()
        self.assertFalse(timer.pause())
        self.assertFalse(timer.is_paused())

    def test_ticks_leave_elapsed_alone(self):
        timer = self.make(show_clock=True, start_time=T0 + 500)
        for _ in range(3):
            self.tick(100)
        self.assertEqual(timer.elapsed, 0)
        self.assertEqual(timer.state.start_reference, T0 + 500)

    def test_reset_restarts(self):
        timer = self.make(show_clock=True)
        timer.stop()
        self.assertFalse(timer.running)
        timer.reset()
        self.assertTrue(timer.running)
        self.assertEqual(self.scheduler.registered, 2)

    def test_start_twice_keeps_one_registration(self):
        timer = self.make(show_clock=True)
        timer.start()
        self.assertEqual(self.scheduler.registered, 1)


# ──────────────────────────────────────────────────────────────────────────
# Factory
# ──────────────────────────────────────────────────────────────────────────

class TestFactory(unittest.TestCase):

    def test_clock_wins_over_everything(self):
        self.assertIsInstance(select_variant(600, T0, 5, show_clock=True), TimeOfDay)

    def test_end_time_wins_over_duration(self):
        variant = select_variant(600, T0, 300)
        self.assertIsInstance(variant, EndTime)
        self.assertEqual(variant.end_time, T0)
        self.assertEqual(variant.last_minutes, 300)

    def test_duration_gives_countdown(self):
        variant = select_variant(600, 0, 300)
        self.assertIs(type(variant), Countdown)
        self.assertEqual(variant.duration, 600)

    def test_nothing_gives_countup(self):
        self.assertIsInstance(select_variant(0, 0), Countup)

    def test_select_builds_timer(self):
        timer = select(
            600, 0, 0, T0,
            clock=FakeClock(), scheduler=ManualScheduler(), sink=RecordingSink(),
        )
        self.assertIsInstance(timer, TalkTimer)
        self.assertIsInstance(timer.variant, Countdown)
        self.assertEqual(timer.state.start_reference, T0)


if __name__ == "__main__":
    unittest.main()
