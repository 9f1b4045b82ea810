"""Value types shared by the lookup, compound and segmentation operations."""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Union


class Verbosity(IntEnum):
    """How many suggestions a lookup returns."""

    TOP = 0  # the single closest, most frequent suggestion
    CLOSEST = 1  # every suggestion at the smallest distance found
    ALL = 2  # every suggestion within the maximum edit distance


@dataclass(frozen=True)
class SuggestItem:
    """A spelling suggestion: the term, its distance from the input and its
    frequency count.

    Items sort by ascending distance, then by descending count, so the best
    suggestion is always first in ``sorted(items)``.
    """

    term: str = ""
    distance: int = 0
    count: int = 0

    def _sort_key(self):
        return self.distance, -self.count

    def __lt__(self, other: "SuggestItem") -> bool:
        return self._sort_key() < other._sort_key()

    def __le__(self, other: "SuggestItem") -> bool:
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: "SuggestItem") -> bool:
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: "SuggestItem") -> bool:
        return self._sort_key() >= other._sort_key()

    def __str__(self) -> str:
        return f"{self.term}, {self.distance}, {self.count}"

    def to_dict(self) -> dict:
        return {"term": self.term, "distance": self.distance, "count": self.count}


def is_better_suggestion(candidate: SuggestItem, current: SuggestItem) -> bool:
    """True when *candidate* should replace *current* as the single best item:
    strictly closer, or (at most as close and) more frequent."""
    return candidate.distance < current.distance or candidate.count > current.count


TokenPattern = Union[str, re.Pattern, None]


def compile_token_pattern(pattern: TokenPattern) -> re.Pattern | None:
    if pattern is None or isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)


@dataclass(frozen=True)
class LookupOptions:
    """Options for a single-term lookup.

    include_unknown:
        Return the input itself (distance ``max_edit_distance + 1``, count 0)
        when nothing is found.
    ignore_token:
        Regex; a matching input is returned unchanged as if it were a known word.
    transfer_casing:
        Search on the lowercased input and give every suggestion the casing of
        the input.
    """

    include_unknown: bool = False
    ignore_token: TokenPattern = None
    transfer_casing: bool = False


@dataclass(frozen=True)
class CompoundOptions:
    """Options for multi-word (compound) correction.

    ignore_non_words:
        Pass numbers and all-caps acronyms through uncorrected.
    transfer_casing:
        Correct the lowercased phrase and re-apply the original casing.
    """

    ignore_non_words: bool = False
    transfer_casing: bool = False


@dataclass(frozen=True)
class SegmentationOptions:
    """Options for word segmentation.

    ``None`` defaults to the dictionary's maximum edit distance and its longest
    word, respectively.
    """

    max_edit_distance: int | None = None
    max_segmentation_word_length: int | None = None
    ignore_token: TokenPattern = None


@dataclass(frozen=True)
class Composition:
    """Result of word segmentation.

    segmented_string:
        The input with spaces inserted at the chosen word boundaries.
    corrected_string:
        The segmentation with each word spelling-corrected.
    distance_sum:
        Edit distance between the input and ``corrected_string``, counting
        inserted and removed spaces.
    log_prob_sum:
        Sum of the log10 word probabilities of the corrected words.
    """

    segmented_string: str = ""
    corrected_string: str = ""
    distance_sum: int = 0
    log_prob_sum: float = 0.0

    def to_dict(self) -> dict:
        return {
            "segmented_string": self.segmented_string,
            "corrected_string": self.corrected_string,
            "distance_sum": self.distance_sum,
            "log_prob_sum": self.log_prob_sum,
        }
