"""Editing and navigation tests for the request buffer.

Covers line splitting/joining, deletion at buffer edges, paste splitting and
the scroll-aware vertical motions the panes rely on.
"""

from __future__ import annotations

import random
import unittest

from httpedit.editor import EditorBuffer, ResponseView


def _assert_in_bounds(test: unittest.TestCase, buffer: EditorBuffer) -> None:
    test.assertGreaterEqual(len(buffer.lines), 1)
    test.assertTrue(0 <= buffer.cursor_line < len(buffer.lines))
    test.assertTrue(0 <= buffer.cursor_col <= len(buffer.lines[buffer.cursor_line]))
    test.assertTrue(0 <= buffer.scroll_offset < len(buffer.lines))
    for line in buffer.lines:
        test.assertNotIn("\n", line)


class EditorBufferEditingTests(unittest.TestCase):
    def test_typing_request_and_body_builds_expected_lines(self) -> None:
        buffer = EditorBuffer()
        buffer.insert_text("GET /users")
        buffer.split_line()
        buffer.split_line()
        buffer.insert_text('{"a":1}')

        self.assertEqual(buffer.lines, ["GET /users", "", '{"a":1}'])
        self.assertEqual((buffer.cursor_line, buffer.cursor_col), (2, 7))

    def test_insert_then_backspace_restores_text_and_cursor(self) -> None:
        buffer = EditorBuffer.from_text("POST /items\nbody")
        buffer.cursor_line, buffer.cursor_col = 0, 4
        for ch in "xyz":
            buffer.insert_char(ch)
        for _ in range(3):
            buffer.backspace()

        self.assertEqual(buffer.lines, ["POST /items", "body"])
        self.assertEqual((buffer.cursor_line, buffer.cursor_col), (0, 4))

    def test_backspace_at_column_zero_joins_previous_line(self) -> None:
        buffer = EditorBuffer.from_text("abc\ndef")
        buffer.cursor_line, buffer.cursor_col = 1, 0
        buffer.backspace()

        self.assertEqual(buffer.lines, ["abcdef"])
        self.assertEqual((buffer.cursor_line, buffer.cursor_col), (0, 3))

    def test_backspace_at_buffer_start_is_noop(self) -> None:
        buffer = EditorBuffer.from_text("abc")
        buffer.backspace()
        self.assertEqual(buffer.lines, ["abc"])
        self.assertEqual((buffer.cursor_line, buffer.cursor_col), (0, 0))

    def test_delete_at_line_end_joins_next_line_and_is_noop_at_buffer_end(self) -> None:
        buffer = EditorBuffer.from_text("ab\ncd")
        buffer.cursor_col = 2
        buffer.delete_at_cursor()
        self.assertEqual(buffer.lines, ["abcd"])

        buffer.move_to_line_end()
        buffer.delete_at_cursor()
        self.assertEqual(buffer.lines, ["abcd"])

    def test_join_inserts_single_space_only_without_seam_whitespace(self) -> None:
        buffer = EditorBuffer.from_text("foo\nbar\nbaz \nqux")
        buffer.join_with_next_line()
        self.assertEqual(buffer.lines[0], "foo bar")

        buffer.cursor_line = 1
        buffer.join_with_next_line()
        self.assertEqual(buffer.lines[1], "baz qux")

    def test_delete_line_on_only_line_empties_it(self) -> None:
        buffer = EditorBuffer.from_text("GET /")
        deleted = buffer.delete_line()

        self.assertEqual(deleted, "GET /")
        self.assertEqual(buffer.lines, [""])

    def test_delete_last_line_moves_cursor_up(self) -> None:
        buffer = EditorBuffer.from_text("one\ntwo")
        buffer.cursor_line = 1
        self.assertEqual(buffer.delete_line(), "two")
        self.assertEqual(buffer.lines, ["one"])
        self.assertEqual(buffer.cursor_line, 0)

    def test_paste_multiline_clipboard_splits_into_lines(self) -> None:
        buffer = EditorBuffer.from_text("a\nb")
        buffer.paste_below("x\ny")
        self.assertEqual(buffer.lines, ["a", "x", "y", "b"])
        self.assertEqual(buffer.cursor_line, 1)

        buffer.paste_above("top")
        self.assertEqual(buffer.lines, ["a", "top", "x", "y", "b"])

    def test_delete_to_line_end_returns_removed_tail(self) -> None:
        buffer = EditorBuffer.from_text("Authorization: secret")
        buffer.cursor_col = 13
        self.assertEqual(buffer.delete_to_line_end(), ": secret")
        self.assertEqual(buffer.lines, ["Authorization"])

    def test_delete_range_collapses_lines_at_selection_start(self) -> None:
        buffer = EditorBuffer.from_text("line1\nline2\nline3")
        buffer.delete_range((0, 2), (2, 3))

        self.assertEqual(buffer.lines, ["li" + "e3"])
        self.assertEqual((buffer.cursor_line, buffer.cursor_col), (0, 2))

    def test_delete_every_line_leaves_one_empty_line(self) -> None:
        buffer = EditorBuffer.from_text("a\nb\nc")
        buffer.delete_lines(0, 2)
        self.assertEqual(buffer.lines, [""])
        self.assertEqual((buffer.cursor_line, buffer.cursor_col), (0, 0))

    def test_random_edit_sequences_keep_cursor_in_bounds(self) -> None:
        rng = random.Random(7)
        buffer = EditorBuffer.from_text("GET /a\n\nbody one\nbody two")
        ops = [
            lambda: buffer.insert_char(rng.choice("ab {")),
            buffer.backspace,
            buffer.delete_at_cursor,
            lambda: buffer.split_line(3),
            buffer.join_with_next_line,
            buffer.delete_to_line_end,
            buffer.delete_line,
            lambda: buffer.paste_below("p\nq"),
            buffer.move_left,
            buffer.move_right,
            buffer.move_up,
            lambda: buffer.move_down(3),
            buffer.move_word_forward,
            buffer.move_word_backward,
            lambda: buffer.move_to_end(3),
            buffer.move_to_start,
            lambda: buffer.scroll_down_with_cursor(2, 3),
            lambda: buffer.scroll_up_with_cursor(2),
        ]
        for _ in range(500):
            rng.choice(ops)()
            _assert_in_bounds(self, buffer)


class EditorBufferScrollTests(unittest.TestCase):
    def test_split_line_scrolls_to_keep_cursor_visible(self) -> None:
        buffer = EditorBuffer.from_text("\n".join(f"l{i}" for i in range(5)))
        buffer.move_to_end()
        buffer.split_line(visible_height=5)

        self.assertEqual(buffer.cursor_line, 5)
        self.assertEqual(buffer.scroll_offset, 1)

    def test_move_down_and_up_follow_viewport(self) -> None:
        buffer = EditorBuffer.from_text("\n".join(str(i) for i in range(10)))
        for _ in range(4):
            buffer.move_down(visible_height=3)
        self.assertEqual((buffer.cursor_line, buffer.scroll_offset), (4, 2))

        for _ in range(3):
            buffer.move_up()
        self.assertEqual((buffer.cursor_line, buffer.scroll_offset), (1, 1))

    def test_move_to_end_scrolls_last_page_into_view(self) -> None:
        buffer = EditorBuffer.from_text("\n".join(str(i) for i in range(20)))
        buffer.move_to_end(visible_height=8)
        self.assertEqual((buffer.cursor_line, buffer.cursor_col), (19, 2))
        self.assertEqual(buffer.scroll_offset, 12)

        buffer.move_to_start()
        self.assertEqual((buffer.cursor_line, buffer.cursor_col, buffer.scroll_offset), (0, 0, 0))

    def test_page_scroll_is_bounded_by_max_scroll(self) -> None:
        buffer = EditorBuffer.from_text("\n".join(str(i) for i in range(10)))
        self.assertEqual(buffer.scroll_down(100, visible_height=4), 6)
        self.assertEqual(buffer.scroll_offset, 6)
        self.assertEqual(buffer.scroll_up(2), 2)
        self.assertEqual(buffer.scroll_up(100), 4)
        self.assertEqual(buffer.scroll_offset, 0)

    def test_scroll_with_cursor_moves_cursor_by_same_amount(self) -> None:
        buffer = EditorBuffer.from_text("\n".join(str(i) for i in range(30)))
        buffer.cursor_line = 2
        buffer.scroll_down_with_cursor(5, visible_height=10)
        self.assertEqual((buffer.scroll_offset, buffer.cursor_line), (5, 7))

        buffer.scroll_up_with_cursor(5)
        self.assertEqual((buffer.scroll_offset, buffer.cursor_line), (0, 2))

    def test_follow_viewport_pulls_cursor_on_screen(self) -> None:
        buffer = EditorBuffer.from_text("\n".join(str(i) for i in range(30)))
        buffer.scroll_down(10, visible_height=5)
        buffer.follow_viewport(5)
        self.assertEqual(buffer.cursor_line, 10)


class ResponseViewTests(unittest.TestCase):
    def test_empty_response_has_single_empty_line(self) -> None:
        view = ResponseView.from_text("")
        self.assertEqual(view.lines, [""])

    def test_response_lines_split_like_splitlines(self) -> None:
        view = ResponseView.from_text('{\n  "ok": true\n}\n')
        self.assertEqual(view.lines, ["{", '  "ok": true', "}"])
        view.move_to_end(visible_height=2)
        self.assertEqual((view.cursor_line, view.scroll_offset), (2, 1))


if __name__ == "__main__":
    unittest.main()
