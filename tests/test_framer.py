"""
单元测试：MessageFramer 增量分帧
"""
import json
import unittest
import os
import sys

# 添加项目根目录到路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from figma_mcp.framer import MessageFramer


class TestMessageFramer(unittest.TestCase):

    def setUp(self):
        self.framer = MessageFramer()

    def test_two_messages_in_one_chunk(self):
        frames = self.framer.feed('{"id":1}{"id":2}\n')

        self.assertEqual(frames, ['{"id":1}', '{"id":2}'])
        self.assertEqual(self.framer.pending, "")

    def test_message_split_across_chunks(self):
        """测试一条消息拆分到多个分块"""
        self.assertEqual(self.framer.feed('{"method":"in'), [])
        self.assertEqual(self.framer.feed('itialize","params":{"a"'), [])
        frames = self.framer.feed(':1}}')

        self.assertEqual(frames, ['{"method":"initialize","params":{"a":1}}'])

    def test_braces_inside_strings_are_ignored(self):
        message = '{"text":"a } b { c","n":{"x":"}"}}'

        self.assertEqual(self.framer.feed(message), [message])

    def test_escaped_quote_inside_string(self):
        message = '{"text":"say \\"}\\" here"}'

        self.assertEqual(self.framer.feed(message), [message])
        self.assertEqual(json.loads(message)["text"], 'say "}" here')

    def test_split_right_after_backslash(self):
        self.assertEqual(self.framer.feed('{"text":"a\\'), [])
        frames = self.framer.feed('"}"}')

        self.assertEqual(frames, ['{"text":"a\\"}"}'])

    def test_split_multibyte_character(self):
        """测试 UTF-8 多字节字符被拆分在两个分块中"""
        data = '{"name":"设计"}'.encode("utf-8")
        cut = data.index("设".encode("utf-8")) + 1

        self.assertEqual(self.framer.feed(data[:cut]), [])
        frames = self.framer.feed(data[cut:])

        self.assertEqual(frames, ['{"name":"设计"}'])

    def test_byte_at_a_time(self):
        data = b'{"a":[1,2,{"b":"}"}]} {"c":3}'
        frames = []
        for i in range(len(data)):
            frames.extend(self.framer.feed(data[i:i + 1]))

        self.assertEqual(frames, ['{"a":[1,2,{"b":"}"}]}', '{"c":3}'])

    def test_noise_between_messages_is_discarded(self):
        frames = self.framer.feed('garbage {"id":1} ]] {"id":2}')

        self.assertEqual(frames, ['{"id":1}', '{"id":2}'])

    def test_malformed_message_does_not_stop_stream(self):
        """测试非法 JSON 只影响当前消息"""
        messages = self.framer.decode('{"id":1,}{"id":2}')

        self.assertEqual(len(messages), 2)
        self.assertFalse(messages[0].ok)
        self.assertTrue(messages[0].error.startswith("Parse error"))
        self.assertTrue(messages[1].ok)
        self.assertEqual(messages[1].payload, {"id": 2})

    def test_close_reports_incomplete_object(self):
        self.framer.feed('{"id":1}{"id":')

        messages = self.framer.close()

        self.assertEqual(len(messages), 1)
        self.assertEqual(messages[0].raw, '{"id":')
        self.assertEqual(messages[0].error, "Unbalanced braces at end of stream")
        self.assertEqual(self.framer.pending, "")

    def test_close_with_only_whitespace(self):
        self.framer.feed('{"id":1}\n  ')

        self.assertEqual(self.framer.close(), [])

    def test_reuse_after_close(self):
        self.framer.feed('{"open":')
        self.framer.close()

        self.assertEqual(self.framer.feed('{"id":3}'), ['{"id":3}'])

    def test_pending_is_trimmed(self):
        for i in range(100):
            self.framer.feed('{"id":%d}' % i)

        self.assertEqual(self.framer.pending, "")


if __name__ == '__main__':
    unittest.main()
