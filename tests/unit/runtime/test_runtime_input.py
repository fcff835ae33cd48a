"""Tests for key decoding."""

from __future__ import annotations

import os
import unittest

from lazyreel.runtime.input import decode_key_byte, read_key


class DecodeKeyByteTests(unittest.TestCase):
    def test_named_keys(self) -> None:
        self.assertEqual(decode_key_byte(b"\r"), "ENTER")
        self.assertEqual(decode_key_byte(b"\n"), "ENTER")
        self.assertEqual(decode_key_byte(b" "), "SPACE")
        self.assertEqual(decode_key_byte(b"\x03"), "CTRL_C")
        self.assertEqual(decode_key_byte(b"\x7f"), "BACKSPACE")

    def test_plain_characters_and_escape(self) -> None:
        self.assertEqual(decode_key_byte(b"n"), "n")
        self.assertEqual(decode_key_byte(b"+"), "+")
        self.assertIsNone(decode_key_byte(b"\x1b"))


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.read_fd, self.write_fd = os.pipe()
        self.addCleanup(os.close, self.read_fd)
        self.addCleanup(os.close, self.write_fd)

    def test_arrow_sequences(self) -> None:
        os.write(self.write_fd, b"\x1b[C\x1b[A")
        self.assertEqual(read_key(self.read_fd, timeout_ms=100), "RIGHT")
        self.assertEqual(read_key(self.read_fd, timeout_ms=100), "UP")

    def test_timeout_returns_empty(self) -> None:
        self.assertEqual(read_key(self.read_fd, timeout_ms=10), "")

    def test_lone_escape(self) -> None:
        os.write(self.write_fd, b"\x1b")
        self.assertEqual(read_key(self.read_fd, timeout_ms=100), "ESC")


if __name__ == "__main__":
    unittest.main()
