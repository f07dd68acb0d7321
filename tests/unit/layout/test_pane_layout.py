"""Pane split geometry tests.

Checks the default split, minimum pane sizes, exact maximize targets and that
repeated one-line resizes never drift off the line grid.
"""

from __future__ import annotations

import unittest

from httpedit.layout import DEFAULT_SPLIT_RATIO, PaneLayout


class PaneLayoutTests(unittest.TestCase):
    def test_default_split_on_24_row_terminal(self) -> None:
        layout = PaneLayout(terminal_width=80, terminal_height=24)
        self.assertEqual(layout.total_content_height, 22)
        self.assertEqual(layout.request_height(), 11)
        self.assertEqual(layout.response_height(), 11)

    def test_without_response_request_pane_takes_all_but_status_row(self) -> None:
        layout = PaneLayout(terminal_height=24)
        self.assertEqual(layout.request_height(has_response=False), 23)
        self.assertEqual(layout.response_height(has_response=False), 0)

    def test_maximize_request_lands_exactly_on_total_minus_minimum(self) -> None:
        layout = PaneLayout(terminal_height=24)
        self.assertTrue(layout.maximize_request())
        self.assertEqual(layout.request_height(), 19)
        self.assertEqual(layout.response_height(), 3)
        self.assertFalse(layout.expand_request())

    def test_maximize_response_keeps_three_request_lines(self) -> None:
        layout = PaneLayout(terminal_height=40)
        self.assertTrue(layout.maximize_response())
        self.assertEqual(layout.request_height(), 3)
        self.assertEqual(layout.response_height(), 35)
        self.assertFalse(layout.shrink_request())
        self.assertFalse(layout.expand_response())

    def test_repeated_single_line_steps_stay_on_line_grid(self) -> None:
        layout = PaneLayout(terminal_height=31)
        total = layout.total_content_height
        expected = layout.request_height()
        while layout.expand_request():
            expected += 1
            self.assertEqual(layout.request_height(), expected)
        self.assertEqual(layout.request_height(), total - 3)
        while layout.shrink_request():
            expected -= 1
            self.assertEqual(layout.request_height(), expected)
        self.assertEqual(layout.request_height(), 3)

    def test_response_side_steps_mirror_request_side(self) -> None:
        layout = PaneLayout(terminal_height=24)
        self.assertTrue(layout.expand_response())
        self.assertEqual(layout.response_height(), 12)
        self.assertTrue(layout.shrink_response())
        self.assertEqual(layout.response_height(), 11)

    def test_operations_are_noops_when_panes_cannot_fit(self) -> None:
        layout = PaneLayout(terminal_height=7)
        self.assertFalse(layout.can_split)
        self.assertFalse(layout.expand_request())
        self.assertFalse(layout.shrink_request())
        self.assertFalse(layout.maximize_request())
        self.assertFalse(layout.maximize_response())
        self.assertEqual(layout.split_ratio, DEFAULT_SPLIT_RATIO)

    def test_resize_keeps_ratio_and_reclamps_to_new_bounds(self) -> None:
        layout = PaneLayout(terminal_height=60)
        layout.maximize_request()
        layout.resize(100, 24)
        self.assertEqual(layout.terminal_width, 100)
        self.assertLessEqual(layout.request_height(), 19)
        self.assertGreaterEqual(layout.response_height(), 3)

    def test_collapse_and_restore(self) -> None:
        layout = PaneLayout(terminal_height=24)
        layout.collapse_response()
        self.assertEqual(layout.split_ratio, 1.0)
        layout.restore_after_collapse()
        self.assertEqual(layout.split_ratio, DEFAULT_SPLIT_RATIO)

    def test_reset_split_reports_change(self) -> None:
        layout = PaneLayout(terminal_height=24)
        self.assertFalse(layout.reset_split())
        layout.expand_request()
        self.assertTrue(layout.reset_split())
        self.assertEqual(layout.request_height(), 11)


if __name__ == "__main__":
    unittest.main()
