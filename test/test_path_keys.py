"""
Tests for mapping filesystem paths to S3 keys.
"""

import os
import sys
import unittest

# Add the parent directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from filesystem.base import InvalidPathError
from filesystem.s3 import to_key

SAMPLE_PATHS = [
    "",
    "/",
    "file.txt",
    "/file.txt",
    "dir/file.txt/",
    "a//b///c",
    "./a/./b",
    "a/b/../c",
    "a\\b\\c.txt",
    "a/b/c/../../d",
    "dir/",
    "...",
    "a/..",
]


class TestToKey(unittest.TestCase):
    """Test path normalization."""

    def test_strips_slashes(self):
        self.assertEqual(to_key("/file.txt"), "file.txt")
        self.assertEqual(to_key("dir/sub/"), "dir/sub")
        self.assertEqual(to_key("//dir//sub//"), "dir/sub")

    def test_backslashes_become_slashes(self):
        self.assertEqual(to_key("a\\b\\c.txt"), "a/b/c.txt")
        self.assertEqual(to_key("\\a\\b\\"), "a/b")

    def test_dot_and_empty_segments_dropped(self):
        self.assertEqual(to_key("./a/./b"), "a/b")
        self.assertEqual(to_key("a//b///c"), "a/b/c")

    def test_parent_segments_pop(self):
        self.assertEqual(to_key("a/b/../c"), "a/c")
        self.assertEqual(to_key("a/b/c/../../d"), "a/d")
        self.assertEqual(to_key("a/.."), "")

    def test_root(self):
        self.assertEqual(to_key(""), "")
        self.assertEqual(to_key("/"), "")
        self.assertEqual(to_key("."), "")

    def test_traversal_above_root_fails(self):
        with self.assertRaises(InvalidPathError) as ctx:
            to_key("../x")
        self.assertIn("above bucket root", str(ctx.exception))

        with self.assertRaises(InvalidPathError):
            to_key("a/../../x")

    def test_traversal_error_is_value_error(self):
        with self.assertRaises(ValueError):
            to_key("..")

    def test_non_string_fails(self):
        for value in (None, 42, b"a/b", ["a"]):
            with self.assertRaises(TypeError):
                to_key(value)

    def test_three_dots_is_a_name(self):
        self.assertEqual(to_key("..."), "...")

    def test_idempotent(self):
        for path in SAMPLE_PATHS:
            key = to_key(path)
            self.assertEqual(to_key(key), key, path)

    def test_normalized_keys_have_no_empty_or_dot_segments(self):
        for path in SAMPLE_PATHS:
            key = to_key(path)
            self.assertFalse(key.startswith("/"), path)
            self.assertFalse(key.endswith("/"), path)
            if key:
                for segment in key.split("/"):
                    self.assertNotIn(segment, ("", ".", ".."), path)


if __name__ == '__main__':
    unittest.main()
