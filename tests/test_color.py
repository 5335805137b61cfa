"""
单元测试：rgb_to_hex
"""
import unittest
import os
import sys

# 添加项目根目录到路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from figma_core.color import rgb_to_hex
from figma_core.models import Color


class TestRgbToHex(unittest.TestCase):

    def test_primary_colors(self):
        self.assertEqual(rgb_to_hex(Color(r=1, g=0, b=0)), "#ff0000")
        self.assertEqual(rgb_to_hex(Color(r=0, g=1, b=0)), "#00ff00")
        self.assertEqual(rgb_to_hex(Color(r=0, g=0, b=1)), "#0000ff")

    def test_black_and_white(self):
        self.assertEqual(rgb_to_hex(Color(r=0, g=0, b=0)), "#000000")
        self.assertEqual(rgb_to_hex(Color(r=1, g=1, b=1)), "#ffffff")

    def test_half_rounds_up(self):
        # 0.3 * 255 = 76.5 -> 77 (0x4d)
        self.assertEqual(rgb_to_hex(Color(r=0.3, g=0.3, b=0.3)), "#4d4d4d")

    def test_mapping_input_and_alpha_ignored(self):
        self.assertEqual(rgb_to_hex({"r": 0.2, "g": 0.4, "b": 0.6, "a": 0.1}), "#336699")

    def test_out_of_range_is_clamped(self):
        self.assertEqual(rgb_to_hex({"r": 1.5, "g": -0.2, "b": 0.5}), "#ff0080")


if __name__ == '__main__':
    unittest.main()
