"""Tests for word tokenization helpers.

Run with:
    python -m pytest unit_tests/test_word_parsing.py -v
"""
from __future__ import annotations
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import unittest

from word_parsing import is_acronym, is_numeral, parse_words, parse_words_case


class TestParseWords(unittest.TestCase):
    def test_lowercases_and_keeps_apostrophes(self):
        self.assertEqual(parse_words("The dog's bone, isn't it?"), ["the", "dog's", "bone", "isn't", "it"])

    def test_underscore_splits(self):
        self.assertEqual(parse_words("snake_case"), ["snake", "case"])

    def test_empty(self):
        self.assertEqual(parse_words(""), [])


class TestParseWordsCase(unittest.TestCase):
    def test_lowercased_by_default(self):
        self.assertEqual(parse_words_case("Where IS the NASA"), ["where", "is", "the", "nasa"])

    def test_preserve_case(self):
        self.assertEqual(parse_words_case("Where IS the NASA", preserve_case=True),
                         ["Where", "IS", "the", "NASA"])

    def test_contractions_stay_whole(self):
        self.assertEqual(parse_words_case("don't stop"), ["don't", "stop"])


class TestNonWords(unittest.TestCase):
    def test_is_acronym(self):
        self.assertTrue(is_acronym("NASA"))
        self.assertTrue(is_acronym("UK2"))
        self.assertFalse(is_acronym("Nasa"))
        self.assertFalse(is_acronym("A"))

    def test_is_numeral(self):
        self.assertTrue(is_numeral("2024"))
        self.assertTrue(is_numeral("-3"))
        self.assertFalse(is_numeral("0"))
        self.assertFalse(is_numeral("twelve"))


if __name__ == "__main__":
    unittest.main()
