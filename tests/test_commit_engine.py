import unittest
from signscribe.config import EngineConfig, RELEASE_MS, WORD_GAP_MS
from signscribe.core.commit_engine import CommitEngine
from signscribe.core.types import Action, ActionKind, Prediction

A_HIGH = Prediction("a", 0.97)
A_LOW = Prediction("a", 0.80)
B_HIGH = Prediction("b", 0.97)

class TestCommitEngine(unittest.TestCase):
    def setUp(self):
        """Runs before every test."""
        self.engine = CommitEngine()
        self.config = EngineConfig(threshold=0.95, hold_ms=600)

    def feed(self, prediction, start, stop, step=50):
        """Ticks `prediction` over [start, stop] and returns {t: action} for non-NONE actions."""
        out = {}
        for t in range(start, stop + 1, step):
            action = self.engine.on_tick(prediction, t, self.config)
            if not action.is_none:
                out[t] = action
        return out

    def test_initial_state(self):
        st = self.engine.state
        self.assertIsNone(st.tracked_label)
        self.assertIsNone(st.tracked_since)
        self.assertIsNone(st.last_emitted_label)
        self.assertIsNone(st.release_started_at)
        self.assertIsNone(st.pending_boundary_deadline)

    def test_below_threshold_never_commits(self):
        """Sub-threshold ticks return NONE and clear tracking."""
        self.engine.on_tick(A_HIGH, 0, self.config)
        self.assertEqual(self.engine.state.tracked_label, "a")

        for t in range(100, 2000, 100):
            action = self.engine.on_tick(A_LOW, t, self.config)
            self.assertEqual(action.kind, ActionKind.NONE)
            self.assertIsNone(self.engine.state.tracked_label)
            self.assertIsNone(self.engine.state.tracked_since)

    def test_release_timer_starts_once_per_excursion(self):
        self.engine.on_tick(A_LOW, 100, self.config)
        self.engine.on_tick(A_LOW, 200, self.config)
        self.assertEqual(self.engine.state.release_started_at, 100)

    def test_minimum_dwell(self):
        """Emits exactly once, at the first tick where dwell reaches hold_ms."""
        emitted = self.feed(A_HIGH, 0, 599, step=1)
        self.assertEqual(emitted, {})

        action = self.engine.on_tick(A_HIGH, 600, self.config)
        self.assertEqual(action, Action.emit("A"))

    def test_label_change_restarts_dwell(self):
        self.engine.on_tick(A_HIGH, 0, self.config)
        self.engine.on_tick(B_HIGH, 400, self.config)
        self.assertEqual(self.engine.state.tracked_since, 400)

        self.assertTrue(self.engine.on_tick(B_HIGH, 999, self.config).is_none)
        self.assertEqual(self.engine.on_tick(B_HIGH, 1000, self.config), Action.emit("B"))

    def test_flicker_resets_dwell(self):
        """A single low frame invalidates the dwell in progress."""
        self.engine.on_tick(A_HIGH, 0, self.config)
        self.engine.on_tick(A_LOW, 500, self.config)
        self.assertTrue(self.engine.on_tick(A_HIGH, 550, self.config).is_none)
        self.assertTrue(self.engine.on_tick(A_HIGH, 700, self.config).is_none)
        self.assertEqual(self.engine.on_tick(A_HIGH, 1150, self.config), Action.emit("A"))

    def test_no_duplicate_without_release(self):
        emitted = self.feed(A_HIGH, 0, 20000, step=100)
        self.assertEqual(list(emitted), [600])

    def test_label_switch_without_release_commits_new_label(self):
        self.feed(A_HIGH, 0, 600)
        emitted = self.feed(B_HIGH, 650, 1300)
        self.assertEqual(emitted, {1250: Action.emit("B")})

    def test_end_to_end_scenario(self):
        emitted = self.feed(A_HIGH, 0, 1000, step=100)
        self.assertEqual(emitted, {600: Action.emit("A")})
        self.assertEqual(self.engine.state.pending_boundary_deadline, 600 + WORD_GAP_MS)

    def test_doubled_letter_scenario(self):
        first = self.feed(A_HIGH, 0, 600)
        dip = self.feed(A_LOW, 650, 900)
        second = self.feed(A_HIGH, 950, 1600)

        self.assertEqual(first, {600: Action.emit("A")})
        self.assertEqual(dip, {})
        self.assertEqual(second, {1550: Action.emit("A")})

    def test_repeat_waits_for_release_window(self):
        """With a short hold, the repeat is gated by RELEASE_MS measured from the dip."""
        self.config.set_hold_ms(200)
        self.assertEqual(self.feed(A_HIGH, 0, 200), {200: Action.emit("A")})
        self.engine.on_tick(A_LOW, 250, self.config)

        emitted = self.feed(A_HIGH, 300, 2000)
        self.assertEqual(emitted, {250 + RELEASE_MS: Action.emit("A")})

    def test_commit_clears_release_timer(self):
        self.feed(A_HIGH, 0, 600)
        self.feed(A_LOW, 650, 1000)
        self.feed(A_HIGH, 1050, 1650)
        self.assertIsNone(self.engine.state.release_started_at)
        self.assertEqual(self.engine.state.last_emitted_label, "a")

    def test_hold_change_applies_next_tick(self):
        self.engine.on_tick(A_HIGH, 0, self.config)
        self.config.set_hold_ms(200)
        self.assertEqual(self.engine.on_tick(A_HIGH, 300, self.config), Action.emit("A"))
        self.assertEqual(self.engine.state.tracked_since, 0)

    # --- WORD BOUNDARIES ---
    def test_boundary_fires_for_current_deadline(self):
        self.feed(A_HIGH, 0, 600)
        deadline = self.engine.state.pending_boundary_deadline
        action = self.engine.on_boundary_deadline(deadline, deadline, "A")
        self.assertEqual(action, Action.boundary())
        self.assertIsNone(self.engine.state.pending_boundary_deadline)

    def test_stale_boundary_is_ignored(self):
        self.feed(A_HIGH, 0, 600)
        stale = self.engine.state.pending_boundary_deadline
        self.feed(B_HIGH, 650, 1250)
        current = self.engine.state.pending_boundary_deadline
        self.assertEqual(current, 1250 + WORD_GAP_MS)

        action = self.engine.on_boundary_deadline(stale, stale, "AB")
        self.assertTrue(action.is_none)
        self.assertEqual(self.engine.state.pending_boundary_deadline, current)

    def test_stale_boundary_is_logged_with_delivery_time(self):
        self.feed(A_HIGH, 0, 600)
        stale = self.engine.state.pending_boundary_deadline
        self.feed(B_HIGH, 650, 1250)
        with self.assertLogs("signscribe.core.commit_engine", level="DEBUG") as logs:
            self.engine.on_boundary_deadline(3700, stale, "AB")
        self.assertIn("3600ms ignored at 3700ms", logs.output[0])

    def test_boundary_never_follows_boundary(self):
        self.feed(A_HIGH, 0, 600)
        deadline = self.engine.state.pending_boundary_deadline
        action = self.engine.on_boundary_deadline(deadline, deadline, "A ")
        self.assertTrue(action.is_none)
        # Deadline is consumed either way
        self.assertIsNone(self.engine.state.pending_boundary_deadline)

    def test_boundary_skipped_for_empty_text(self):
        self.feed(A_HIGH, 0, 600)
        deadline = self.engine.state.pending_boundary_deadline
        self.assertTrue(self.engine.on_boundary_deadline(deadline, deadline, "").is_none)

    def test_hold_progress(self):
        self.assertEqual(self.engine.hold_progress(0, self.config), 0.0)
        self.engine.on_tick(A_HIGH, 0, self.config)
        self.assertAlmostEqual(self.engine.hold_progress(300, self.config), 0.5)
        self.assertEqual(self.engine.hold_progress(5000, self.config), 1.0)

    def test_reset(self):
        self.feed(A_HIGH, 0, 600)
        self.engine.on_tick(A_LOW, 650, self.config)
        self.engine.reset()
        self.assertIsNone(self.engine.state.last_emitted_label)
        self.assertIsNone(self.engine.state.release_started_at)
        self.assertIsNone(self.engine.state.pending_boundary_deadline)

if __name__ == '__main__':
    unittest.main()
