"""Tests for the SpellCorrector facade: dictionary loading and text fixing.

Run with:
    python -m pytest unit_tests/test_spell_corrector.py -v
"""
from __future__ import annotations
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import shutil
import tempfile
import unittest

from spell_corrector import SpellCorrector
from suggest_item import SegmentationOptions, SuggestItem, Verbosity


class _TempFilesMixin:
    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def _write(self, name: str, content: str) -> str:
        path = os.path.join(self.tmp_dir, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path


class TestLoadDictionary(_TempFilesMixin, unittest.TestCase):
    def test_skips_malformed_lines(self):
        path = self._write("dict.txt", "hello 10\nworld 20\nbad\noops notanumber\n\n")
        corrector = SpellCorrector()
        self.assertTrue(corrector.load_dictionary(path))
        self.assertEqual(corrector.words, {"hello": 10, "world": 20})
        self.assertEqual(corrector.max_length, 5)

    def test_missing_file(self):
        corrector = SpellCorrector()
        self.assertFalse(corrector.load_dictionary(os.path.join(self.tmp_dir, "missing.txt")))
        self.assertEqual(corrector.word_count, 0)

    def test_custom_columns_and_separator(self):
        path = self._write("dict.tsv", "10\thello\n20\tworld\n")
        corrector = SpellCorrector()
        self.assertTrue(corrector.load_dictionary(path, term_index=1, count_index=0, separator="\t"))
        self.assertEqual(corrector.words, {"hello": 10, "world": 20})

    def test_repeated_terms_accumulate(self):
        corrector = SpellCorrector()
        self.assertEqual(corrector.load_dictionary_stream(["hello 10", "hello 5"]), 2)
        self.assertEqual(corrector.words["hello"], 15)

    def test_count_threshold(self):
        corrector = SpellCorrector(count_threshold=10)
        corrector.load_dictionary_stream(["hello 4", "world 20"])
        self.assertEqual(corrector.words, {"world": 20})
        self.assertEqual(corrector.below_threshold_words, {"hello": 4})


class TestLoadBigramDictionary(_TempFilesMixin, unittest.TestCase):
    def test_whitespace_separated(self):
        path = self._write("bigrams.txt", "in the 500\nbad line\nof the x\na b 7\n")
        corrector = SpellCorrector()
        self.assertTrue(corrector.load_bigram_dictionary(path))
        self.assertEqual(corrector.bigrams, {"in the": 500, "a b": 7})
        self.assertEqual(corrector.index.bigram_count_min, 7)

    def test_explicit_separator(self):
        corrector = SpellCorrector()
        loaded = corrector.load_bigram_dictionary_stream(["in the\t500", "broken"], count_index=1,
                                                         separator="\t")
        self.assertEqual(loaded, 1)
        self.assertEqual(corrector.bigrams, {"in the": 500})

    def test_missing_file(self):
        corrector = SpellCorrector()
        self.assertFalse(corrector.load_bigram_dictionary(os.path.join(self.tmp_dir, "missing.txt")))


class TestCreateDictionary(_TempFilesMixin, unittest.TestCase):
    def test_counts_corpus_words(self):
        path = self._write("corpus.txt", "The cat. The dog's bone!\nthe end\n")
        corrector = SpellCorrector()
        self.assertTrue(corrector.create_dictionary(path))
        self.assertEqual(corrector.words, {"the": 3, "cat": 1, "dog's": 1, "bone": 1, "end": 1})

    def test_missing_corpus(self):
        corrector = SpellCorrector()
        self.assertFalse(corrector.create_dictionary(os.path.join(self.tmp_dir, "missing.txt")))


class TestQueries(unittest.TestCase):
    def setUp(self):
        self.corrector = SpellCorrector.from_words(
            ["store", "hours", "your", "are", "you", "hiring", "what", "hello", "world"]
        )

    def test_from_words(self):
        self.assertEqual(self.corrector.word_count, 9)
        self.assertEqual(self.corrector.words["hello"], 1)
        self.assertGreater(self.corrector.entry_count, self.corrector.word_count)

    def test_create_dictionary_entry_alias(self):
        self.assertTrue(self.corrector.create_dictionary_entry("shop", 3))
        self.assertEqual(self.corrector.lookup("shop", Verbosity.TOP), [SuggestItem("shop", 0, 3)])

    def test_lookup(self):
        self.assertEqual(self.corrector.lookup("stoer", Verbosity.TOP, 2), [SuggestItem("store", 1, 1)])

    def test_lookup_compound(self):
        self.assertEqual(self.corrector.lookup_compound("hello wrld")[0].term, "hello world")

    def test_word_segmentation(self):
        result = self.corrector.word_segmentation("helloworld", SegmentationOptions())
        self.assertEqual(result.corrected_string, "hello world")

    def test_fix_string(self):
        self.assertEqual(
            self.corrector.fix_string("Wat ar your stoer hurs? Are yu hireing?"),
            "What are your store hours? Are you hiring?",
        )

    def test_fix_string_keeps_upper_case(self):
        self.assertEqual(self.corrector.fix_string("WRLD, 42 times"), "WORLD, 42 times")

    def test_fix_string_leaves_unknown_words(self):
        self.assertEqual(self.corrector.fix_string("zzzzzz qqq"), "zzzzzz qqq")
        self.assertEqual(self.corrector.fix_string(""), "")


class TestEnglishDictionary(unittest.TestCase):
    def test_common_misspelling(self):
        corrector = SpellCorrector.from_english_dictionary(max_words=1000)
        self.assertGreater(corrector.word_count, 500)
        self.assertEqual(corrector.lookup("hte", Verbosity.TOP)[0].term, "the")


if __name__ == "__main__":
    unittest.main()
