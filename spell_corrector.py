from __future__ import annotations

import os
import re
import sys
from typing import Iterable

from wordfreq import iter_wordlist, top_n_list, word_frequency

from dictionary_index import DictionaryIndex
from lookup import lookup
from lookup_compound import N, lookup_compound
from suggest_item import (
    Composition,
    CompoundOptions,
    LookupOptions,
    SegmentationOptions,
    SuggestItem,
    Verbosity,
)
from utils import dbg_print, iter_file_lines, split_term_count_line
from word_segmentation import word_segmentation
from word_parsing import parse_words

_ALPHA_RUN_RE = re.compile(r"[^\W\d_]+|[\W\d_]+")


class SpellCorrector:
    """Symmetric-delete spelling corrector over a frequency dictionary.

    - :meth:`lookup` corrects a single word.
    - :meth:`lookup_compound` corrects a phrase, merging and splitting words.
    - :meth:`word_segmentation` inserts missing spaces and corrects the words.
    - :meth:`fix_string` corrects the words of free text in place, keeping
      punctuation, whitespace and casing.

    Build the dictionary first (:meth:`insert`, :meth:`load_dictionary`,
    :meth:`create_dictionary`, or :meth:`from_english_dictionary`); after that
    the corrector is only read, so it can be shared between threads.
    """

    def __init__(self, max_dictionary_edit_distance: int = 2, prefix_length: int = 7,
                 count_threshold: int = 1):
        self._index = DictionaryIndex(max_dictionary_edit_distance, prefix_length, count_threshold)

    @classmethod
    def from_words(cls, dictionary: Iterable[str], **kwargs) -> "SpellCorrector":
        """Build a corrector from a plain word list, counting each occurrence once."""
        corrector = cls(**kwargs)
        for word in dictionary:
            corrector.insert(word.lower(), 1)
        return corrector

    @classmethod
    @dbg_print
    def from_english_dictionary(
        cls,
        *,
        min_length: int = 2,
        max_words: int | None = None,
        max_dictionary_edit_distance: int = 2,
        prefix_length: int = 7,
    ) -> "SpellCorrector":
        """Build a :class:`SpellCorrector` using the ``wordfreq`` English word list.

        Counts are the wordfreq frequencies scaled by the corpus size ``N``, so
        they are comparable with counts from a regular frequency dictionary.

        Parameters
        ----------
        min_length:
            Ignore words shorter than this, to cut noise (default: 2).
        max_words:
            If set, only the ``max_words`` most frequent words from wordfreq
            are kept. This can improve performance.
        """
        words = top_n_list("en", max_words) if max_words is not None else iter_wordlist("en")
        corrector = cls(max_dictionary_edit_distance, prefix_length)
        for word in words:
            if len(word) < min_length:
                continue
            count = max(1, int(word_frequency(word, "en") * N))
            corrector.insert(word, count)
        print(f"[spell_corrector] English dictionary loaded: {corrector.word_count} words", file=sys.stderr)
        return corrector

    # --- dictionary state -------------------------------------------------

    @property
    def index(self) -> DictionaryIndex:
        return self._index

    @property
    def max_dictionary_edit_distance(self) -> int:
        return self._index.max_dictionary_edit_distance

    @property
    def prefix_length(self) -> int:
        return self._index.prefix_length

    @property
    def count_threshold(self) -> int:
        return self._index.count_threshold

    @property
    def max_length(self) -> int:
        """Length of the longest word in the dictionary."""
        return self._index.max_length

    @property
    def words(self) -> dict[str, int]:
        return self._index.words

    @property
    def below_threshold_words(self) -> dict[str, int]:
        return self._index.below_threshold_words

    @property
    def deletes(self) -> dict[str, list[str]]:
        return self._index.deletes

    @property
    def bigrams(self) -> dict[str, int]:
        return self._index.bigrams

    @property
    def word_count(self) -> int:
        return self._index.word_count

    @property
    def entry_count(self) -> int:
        return self._index.entry_count

    # --- building ---------------------------------------------------------

    def insert(self, term: str, count: int) -> bool:
        """Add *count* occurrences of *term*; True if it became a new dictionary word."""
        return self._index.insert(term, count)

    create_dictionary_entry = insert

    def load_dictionary_stream(self, lines: Iterable[str], term_index: int = 0, count_index: int = 1,
                               separator: str | None = " ") -> int:
        """Insert `term count` lines; malformed lines are skipped.

        Returns the number of lines that were inserted.
        """
        loaded = 0
        for line in lines:
            entry = split_term_count_line(line, term_index, count_index, separator)
            if entry is None:
                continue
            self.insert(*entry)
            loaded += 1
        return loaded

    @dbg_print
    def load_dictionary(self, path: str, term_index: int = 0, count_index: int = 1,
                        separator: str | None = " ", encoding: str = "utf-8") -> bool:
        """Load a frequency dictionary file with one `term count` pair per line.

        Returns False if the file does not exist.
        """
        if not os.path.exists(path):
            print(f"[spell_corrector] Dictionary file not found: {path}", file=sys.stderr)
            return False
        loaded = self.load_dictionary_stream(iter_file_lines(path, encoding), term_index, count_index,
                                             separator)
        print(f"[spell_corrector] Loaded {loaded} entries from {path} "
              f"({self.word_count} words, {self.entry_count} deletes)", file=sys.stderr)
        return True

    def load_bigram_dictionary_stream(self, lines: Iterable[str], term_index: int = 0,
                                      count_index: int = 2, separator: str | None = None) -> int:
        """Insert bigram lines such as "in the 2345"; malformed lines are skipped.

        When splitting on whitespace (``separator=None``) the bigram is the
        fields at *term_index* and *term_index* + 1; with an explicit separator
        it is the single field at *term_index*.
        """
        min_parts = 3 if separator is None else 2
        loaded = 0
        for line in lines:
            parts = line.strip().split(separator)
            if len(parts) < min_parts or count_index >= len(parts):
                continue
            try:
                count = int(parts[count_index])
            except ValueError:
                continue
            if separator is None:
                if term_index + 1 >= len(parts):
                    continue
                key = f"{parts[term_index]} {parts[term_index + 1]}"
            else:
                key = parts[term_index]
            self._index.add_bigram(key, count)
            loaded += 1
        return loaded

    @dbg_print
    def load_bigram_dictionary(self, path: str, term_index: int = 0, count_index: int = 2,
                               separator: str | None = None, encoding: str = "utf-8") -> bool:
        """Load a bigram frequency file. Returns False if the file does not exist."""
        if not os.path.exists(path):
            print(f"[spell_corrector] Bigram file not found: {path}", file=sys.stderr)
            return False
        loaded = self.load_bigram_dictionary_stream(iter_file_lines(path, encoding), term_index,
                                                    count_index, separator)
        print(f"[spell_corrector] Loaded {loaded} bigrams from {path}", file=sys.stderr)
        return True

    def create_dictionary_from_lines(self, lines: Iterable[str]) -> None:
        """Count every word of the given corpus lines into the dictionary."""
        for line in lines:
            for key in parse_words(line):
                self.insert(key, 1)

    @dbg_print
    def create_dictionary(self, corpus: str, encoding: str = "utf-8") -> bool:
        """Build the dictionary from a plain-text corpus file.

        Returns False if the file does not exist.
        """
        if not os.path.exists(corpus):
            print(f"[spell_corrector] Corpus file not found: {corpus}", file=sys.stderr)
            return False
        self.create_dictionary_from_lines(iter_file_lines(corpus, encoding))
        return True

    # --- queries ----------------------------------------------------------

    def lookup(self, phrase: str, verbosity: Verbosity, max_edit_distance: int | None = None,
               options: LookupOptions | None = None) -> list[SuggestItem]:
        return lookup(self._index, phrase, verbosity, max_edit_distance, options)

    def lookup_compound(self, phrase: str, max_edit_distance: int | None = None,
                        options: CompoundOptions | None = None) -> list[SuggestItem]:
        return lookup_compound(self._index, phrase, max_edit_distance, options)

    def word_segmentation(self, phrase: str, options: SegmentationOptions | None = None) -> Composition:
        return word_segmentation(self._index, phrase, options)

    def fix_string(self, text: str, max_edit_distance: int | None = None) -> str:
        """Return *text* with misspelled dictionary words corrected.

        Words that are not close to any dictionary entry are left unchanged.
        Punctuation, digits and whitespace are kept where they are, and each
        corrected word keeps the casing of the original (lower, UPPER, Title).
        """
        corrected_tokens: list[str] = []
        for token in self._tokenize(text):
            if token.isalpha():
                corrected_tokens.append(self._correct_word_preserve_case(token, max_edit_distance))
            else:
                corrected_tokens.append(token)
        return "".join(corrected_tokens)

    # --- internal helpers -----------------------------------------------

    @staticmethod
    def _tokenize(text: str) -> list[str]:
        """Split *text* into alphabetic tokens and separator tokens.

        We can't just call ``split()`` because we must preserve spaces and
        punctuation in their original positions.
        """
        if not text:
            return []
        return _ALPHA_RUN_RE.findall(text)

    def _correct_word_preserve_case(self, word: str, max_edit_distance: int | None) -> str:
        lower = word.lower()
        if lower in self._index:
            return word

        suggestions = self.lookup(lower, Verbosity.TOP, max_edit_distance)
        if not suggestions:
            return word

        return self._apply_case(word, suggestions[0].term)

    @staticmethod
    def _apply_case(original: str, corrected_lower: str) -> str:
        if original.isupper():
            return corrected_lower.upper()
        if original[0].isupper() and original[1:].islower():
            return corrected_lower.capitalize()
        return corrected_lower


if __name__ == "__main__":
    corrector = SpellCorrector.from_english_dictionary(min_length=1, max_words=50000)

    s = "Wat ar your stoer hurs? Are yu hireing?"
    print(corrector.fix_string(s))
    print(corrector.lookup_compound("whereis th elove hehad dated forImuch of thepast")[0])
    print(corrector.word_segmentation("thequickbrownfoxjumpsoverthelazydog").corrected_string)
