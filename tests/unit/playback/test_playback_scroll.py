"""Tests for the timer-driven scroll driver."""

from __future__ import annotations

import unittest

from lazyreel.playback import ScrollDriver, TimerScheduler


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class ScrollDriverTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.scheduler = TimerScheduler(clock=self.clock)
        self.offsets: list[int] = []
        self.ends = 0
        self.driver = ScrollDriver(
            self.scheduler,
            on_scroll=self.offsets.append,
            on_end=self._on_end,
            step=1,
            grace_seconds=1.5,
        )

    def _on_end(self) -> None:
        self.ends += 1

    def advance_to(self, when: float) -> None:
        self.clock.now = when
        while self.scheduler.run_due():
            pass

    def test_scrolls_to_bottom_then_reports_end_once(self) -> None:
        self.driver.start(total_rows=5, viewport_rows=3, interval=0.1)

        self.advance_to(0.25)
        self.assertEqual(self.offsets, [1, 2])
        self.assertEqual(self.ends, 0)

        self.advance_to(1.0)
        self.assertEqual(self.offsets, [1, 2])
        self.assertEqual(self.ends, 1)
        self.assertFalse(self.driver.active)

    def test_only_one_timer_is_ever_armed(self) -> None:
        self.driver.start(total_rows=50, viewport_rows=10, interval=0.1)
        self.driver.start(total_rows=50, viewport_rows=10, interval=0.1)
        self.driver.set_interval(0.05)
        self.assertEqual(self.scheduler.pending_count(), 1)

        self.advance_to(0.3)
        self.assertEqual(self.scheduler.pending_count(), 1)

    def test_empty_document_waits_for_grace_delay(self) -> None:
        self.driver.start(total_rows=0, viewport_rows=10, interval=0.1)
        self.assertTrue(self.driver.holding)

        self.advance_to(1.0)
        self.assertEqual(self.ends, 0)

        self.advance_to(1.5)
        self.assertEqual(self.ends, 1)
        self.assertEqual(self.offsets, [])

    def test_document_fitting_viewport_is_held_before_end(self) -> None:
        self.driver.start(total_rows=4, viewport_rows=10, interval=0.1)
        self.advance_to(0.5)
        self.assertEqual(self.ends, 0)
        self.advance_to(1.6)
        self.assertEqual(self.ends, 1)

    def test_doubling_speed_halves_interval_not_step(self) -> None:
        self.driver.start(total_rows=100, viewport_rows=10, interval=0.2)
        self.advance_to(0.4)
        self.assertEqual(self.offsets, [1, 2])

        self.driver.set_interval(0.1)
        self.assertAlmostEqual(self.driver.interval, 0.1)
        self.advance_to(0.85)
        self.assertEqual(self.offsets, [1, 2, 3, 4, 5, 6])
        self.assertEqual({b - a for a, b in zip(self.offsets, self.offsets[1:])}, {1})

    def test_stalled_loop_catches_up_one_row_per_pass(self) -> None:
        self.driver.start(total_rows=100, viewport_rows=10, interval=0.1)
        self.clock.now = 1.05

        self.assertEqual(self.scheduler.run_due(), 1)
        self.assertEqual(self.offsets, [1])
        self.assertLessEqual(self.scheduler.next_deadline(), self.clock.now)

        self.scheduler.run_due()
        self.assertEqual(self.offsets, [1, 2])

    def test_set_interval_does_not_shorten_grace_hold(self) -> None:
        self.driver.start(total_rows=0, viewport_rows=10, interval=0.2)
        self.driver.set_interval(0.01)
        self.advance_to(1.0)
        self.assertEqual(self.ends, 0)

    def test_stop_cancels_pending_tick(self) -> None:
        self.driver.start(total_rows=20, viewport_rows=5, interval=0.1)
        self.driver.stop()
        self.advance_to(5.0)
        self.assertEqual(self.offsets, [])
        self.assertEqual(self.ends, 0)

    def test_start_resumes_from_offset(self) -> None:
        self.driver.start(total_rows=20, viewport_rows=5, interval=0.1, offset=7)
        self.advance_to(0.1)
        self.assertEqual(self.offsets, [8])

    def test_rejects_invalid_step_and_interval(self) -> None:
        with self.assertRaises(ValueError):
            ScrollDriver(self.scheduler, on_scroll=lambda _o: None, on_end=lambda: None, step=0)
        with self.assertRaises(ValueError):
            self.driver.start(total_rows=10, viewport_rows=5, interval=0)


if __name__ == "__main__":
    unittest.main()
