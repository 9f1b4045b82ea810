from __future__ import annotations

import sys
from collections import deque

# Counts never grow past this value.
MAX_COUNT = sys.maxsize


def saturating_add(count: int, increment: int) -> int:
    """Add two non-negative counts, clamping at MAX_COUNT."""
    if MAX_COUNT - count > increment:
        return count + increment
    return MAX_COUNT


class DictionaryIndex:
    """Frequency dictionary plus the symmetric-delete index used for lookups.

    Every admitted term maps each of its delete variants (the term with up to
    ``max_dictionary_edit_distance`` characters removed, computed on its first
    ``prefix_length`` characters) back to itself. A misspelling then finds its
    candidates by generating its own deletes and probing this index, instead of
    generating every insert, replace and transpose.

    Terms seen fewer than ``count_threshold`` times are parked until their
    accumulated count reaches the threshold.
    """

    def __init__(self, max_dictionary_edit_distance: int = 2, prefix_length: int = 7,
                 count_threshold: int = 1):
        if max_dictionary_edit_distance < 0:
            raise ValueError("max_dictionary_edit_distance cannot be negative")
        if prefix_length < 1:
            raise ValueError("prefix_length cannot be less than 1")
        if prefix_length <= max_dictionary_edit_distance:
            raise ValueError("prefix_length must be greater than max_dictionary_edit_distance")
        if count_threshold < 0:
            raise ValueError("count_threshold cannot be negative")

        self.max_dictionary_edit_distance = max_dictionary_edit_distance
        self.prefix_length = prefix_length
        self.count_threshold = count_threshold

        self._words: dict[str, int] = {}
        self._below_threshold_words: dict[str, int] = {}
        self._deletes: dict[str, list[str]] = {}
        self._bigrams: dict[str, int] = {}
        self.bigram_count_min = MAX_COUNT
        self.max_length = 0

    # --- read access -----------------------------------------------------

    @property
    def words(self) -> dict[str, int]:
        return self._words

    @property
    def below_threshold_words(self) -> dict[str, int]:
        return self._below_threshold_words

    @property
    def deletes(self) -> dict[str, list[str]]:
        return self._deletes

    @property
    def bigrams(self) -> dict[str, int]:
        return self._bigrams

    @property
    def word_count(self) -> int:
        """Number of searchable terms."""
        return len(self._words)

    @property
    def entry_count(self) -> int:
        """Number of delete variants in the index."""
        return len(self._deletes)

    def __contains__(self, term: str) -> bool:
        return term in self._words

    def __len__(self) -> int:
        return len(self._words)

    # --- build -----------------------------------------------------------

    def insert(self, key: str, count: int) -> bool:
        """Add *count* occurrences of *key*.

        Returns True only when the call admits a new term into the searchable
        dictionary (and so indexes its deletes); count updates of known terms
        and below-threshold terms return False.
        """
        if count <= 0:
            # a closed dictionary ignores non-positive counts
            if self.count_threshold > 0:
                return False
            count = 0

        if self.count_threshold > 1 and key in self._below_threshold_words:
            count = saturating_add(self._below_threshold_words[key], count)
            if count >= self.count_threshold:
                del self._below_threshold_words[key]
            else:
                self._below_threshold_words[key] = count
                return False
        elif key in self._words:
            self._words[key] = saturating_add(self._words[key], count)
            return False
        elif count < self.count_threshold:
            self._below_threshold_words[key] = count
            return False

        self._words[key] = count
        if len(key) > self.max_length:
            self.max_length = len(key)

        for delete in self.edits_prefix(key):
            self._deletes.setdefault(delete, []).append(key)
        return True

    def add_bigram(self, key: str, count: int) -> None:
        """Record the count of a two-word phrase such as "in the"."""
        if count <= 0:
            return
        if key in self._bigrams:
            count = saturating_add(self._bigrams[key], count)
        self._bigrams[key] = count
        if count < self.bigram_count_min:
            self.bigram_count_min = count

    def edits_prefix(self, key: str) -> set[str]:
        """All delete variants of *key*'s prefix, including the prefix itself.

        The empty string is included for terms short enough to be deleted away
        entirely within the edit distance.
        """
        variants = set()
        if len(key) <= self.max_dictionary_edit_distance:
            variants.add("")
        if len(key) > self.prefix_length:
            key = key[: self.prefix_length]
        variants.add(key)
        return self.edits(key, variants)

    def edits(self, word: str, delete_words: set[str]) -> set[str]:
        """Add every variant of *word* with 1 to ``max_dictionary_edit_distance``
        characters removed to *delete_words*, breadth first."""
        if self.max_dictionary_edit_distance == 0:
            return delete_words
        frontier = deque([(word, 0)])
        while frontier:
            current, depth = frontier.popleft()
            depth += 1
            if len(current) <= 1:
                continue
            for i in range(len(current)):
                delete = current[:i] + current[i + 1:]
                if delete in delete_words:
                    continue
                delete_words.add(delete)
                if depth < self.max_dictionary_edit_distance:
                    frontier.append((delete, depth))
        return delete_words
