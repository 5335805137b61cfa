"""
单元测试：加粗范围解析
"""
import unittest
import os
import sys

# 添加项目根目录到路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from figma_core.models import TypeStyle
from figma_core.simplify.bold_ranges import parse_bold_ranges, is_bold_style

BOLD = TypeStyle(font_weight=700)
REGULAR = TypeStyle(font_weight=400)


class TestIsBoldStyle(unittest.TestCase):

    def test_weight_threshold(self):
        self.assertTrue(is_bold_style(TypeStyle(font_weight=500)))
        self.assertFalse(is_bold_style(TypeStyle(font_weight=499)))

    def test_font_style_markers(self):
        self.assertTrue(is_bold_style(TypeStyle(font_weight=400, font_style="Semi Bold")))
        self.assertTrue(is_bold_style(TypeStyle(font_style="Medium Italic")))
        # case-sensitive
        self.assertFalse(is_bold_style(TypeStyle(font_style="bold")))

    def test_missing_weight_and_style(self):
        self.assertFalse(is_bold_style(TypeStyle()))


class TestParseBoldRanges(unittest.TestCase):

    def test_trailing_word(self):
        """Hello World 中的 World 为加粗"""
        overrides = [None] * 6 + ["b"] * 5
        ranges = parse_bold_ranges("Hello World", overrides, {"b": BOLD})

        self.assertEqual(len(ranges), 1)
        self.assertEqual(ranges[0].start, 6)
        self.assertEqual(ranges[0].end, 10)
        self.assertEqual(ranges[0].text, "World")
        self.assertEqual(ranges[0].font_weight, 700)
        self.assertEqual(ranges[0].to_dict(), {"start": 6, "end": 10, "text": "World", "fontWeight": 700})

    def test_multiple_runs_are_separated(self):
        overrides = [1, 1, 0, 2, 1, 1]
        table = {"1": BOLD, "2": REGULAR}
        ranges = parse_bold_ranges("ab cde", overrides, table)

        self.assertEqual([(r.start, r.end, r.text) for r in ranges], [(0, 1, "ab"), (4, 5, "de")])

    def test_adjacent_bold_styles_merge_into_one_run(self):
        table = {"1": BOLD, "2": TypeStyle(font_style="Medium")}
        ranges = parse_bold_ranges("abcd", [1, 1, 2, 2], table)

        self.assertEqual(len(ranges), 1)
        self.assertEqual((ranges[0].start, ranges[0].end), (0, 3))
        # style of the first character of the run
        self.assertEqual(ranges[0].font_weight, 700)

    def test_override_array_shorter_than_text(self):
        ranges = parse_bold_ranges("bold text", [1, 1, 1, 1], {"1": BOLD})

        self.assertEqual(len(ranges), 1)
        self.assertEqual(ranges[0].text, "bold")

    def test_text_shorter_than_override_array(self):
        ranges = parse_bold_ranges("ab", [1, 1, 1, 1, 1], {"1": BOLD})

        self.assertEqual((ranges[0].start, ranges[0].end, ranges[0].text), (0, 1, "ab"))

    def test_indices_refer_to_untrimmed_text(self):
        ranges = parse_bold_ranges("  hi", [0, 0, 1, 1], {"1": BOLD})

        self.assertEqual((ranges[0].start, ranges[0].end, ranges[0].text), (2, 3, "hi"))

    def test_unknown_key_closes_run(self):
        ranges = parse_bold_ranges("abc", [1, 9, 1], {"1": BOLD})

        self.assertEqual([(r.start, r.end) for r in ranges], [(0, 0), (2, 2)])

    def test_empty_inputs_give_empty_list(self):
        self.assertEqual(parse_bold_ranges("", [1], {"1": BOLD}), [])
        self.assertEqual(parse_bold_ranges("abc", [], {"1": BOLD}), [])
        self.assertEqual(parse_bold_ranges("abc", [1, 1, 1], {}), [])

    def test_ranges_are_ordered_and_not_adjacent(self):
        overrides = [1, 0, 1, 1, 0, 0, 1]
        ranges = parse_bold_ranges("abcdefg", overrides, {"1": BOLD})

        for previous, current in zip(ranges, ranges[1:]):
            self.assertLess(previous.end + 1, current.start)


if __name__ == '__main__':
    unittest.main()
