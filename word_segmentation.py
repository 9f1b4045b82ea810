from __future__ import annotations

import math
import re

from dictionary_index import DictionaryIndex
from lookup import lookup
from lookup_compound import N
from suggest_item import Composition, LookupOptions, SegmentationOptions, Verbosity

_WHITESPACE_RE = re.compile(r"\s+")


def _log_probability(count: int) -> float:
    if count <= 0:
        return -math.inf
    return math.log10(count / N)


def word_segmentation(index: DictionaryIndex, phrase: str,
                      options: SegmentationOptions | None = None) -> Composition:
    """Insert missing spaces into *phrase* and correct the resulting words.

    Every window of up to ``max_segmentation_word_length`` characters is
    corrected with a TOP lookup. The best segmentation ending at each position
    is kept in a circular buffer holding only the last
    ``max_segmentation_word_length`` positions. A segmentation is better when
    it needs fewer edits, or as many edits with a higher word probability.

    Existing spaces may be kept or dropped (dropping one costs an edit), so
    "thequick brownfox" segments as well as "thequickbrownfox".

    A kept space belongs to the window of the word after it, so windows must
    be one character longer than the longest word for already-spaced text to
    come back unchanged with zero distance. Pass
    ``max_segmentation_word_length=index.max_length + 1`` for that; with the
    default, such input can pick up doubled spaces and a nonzero distance.
    """
    options = options or SegmentationOptions()
    max_edit_distance = options.max_edit_distance
    if max_edit_distance is None:
        max_edit_distance = index.max_dictionary_edit_distance
    max_segmentation_word_length = options.max_segmentation_word_length
    if max_segmentation_word_length is None:
        max_segmentation_word_length = index.max_length
    lookup_options = LookupOptions(ignore_token=options.ignore_token)

    array_size = min(max_segmentation_word_length, len(phrase))
    if array_size <= 0:
        return Composition()
    compositions = [Composition()] * array_size
    circular_index = -1

    # outer loop (column): all possible part start positions
    for j in range(len(phrase)):
        # inner loop (row): all possible part lengths (from start position):
        # part can't be bigger than longest word in dictionary (other than
        # long unknown word)
        imax = min(len(phrase) - j, max_segmentation_word_length)
        for i in range(1, imax + 1):
            # get top spelling correction/ed for part
            part = phrase[j:j + i]
            separator_len = 0
            top_ed = 0
            if part[0].isspace():
                # remove space for levenshtein calculation
                part = part[1:]
            else:
                # add ed+1: space did not exist, had to be inserted
                separator_len = 1

            # remove space from part, add number of removed spaces to top_ed
            top_ed += len(part)
            part = _WHITESPACE_RE.sub("", part)
            top_ed -= len(part)

            results = lookup(index, part, Verbosity.TOP, max_edit_distance, lookup_options)
            if results:
                top_result = results[0].term
                top_ed += results[0].distance
                top_log_prob = _log_probability(results[0].count)
            else:
                top_result = part
                # default, if word not found; otherwise long input text would
                # win as long unknown word (with ed=edmax+1), although there
                # should many spaces inserted
                top_ed += len(part)
                # log10(10 / (N * 10**len(part))), without overflowing on long parts
                top_log_prob = math.log10(10.0 / N) - len(part)

            destination_index = (i + circular_index) % array_size

            # set values in first loop
            if j == 0:
                compositions[destination_index] = Composition(part, top_result, top_ed, top_log_prob)
                continue

            current = compositions[circular_index]
            destination = compositions[destination_index]
            if (
                i == max_segmentation_word_length
                # replace values if better log_prob_sum, if same edit distance OR one
                # space difference
                or (
                    (
                        current.distance_sum + top_ed == destination.distance_sum
                        or current.distance_sum + separator_len + top_ed == destination.distance_sum
                    )
                    and destination.log_prob_sum < current.log_prob_sum + top_log_prob
                )
                # replace values if smaller edit distance
                or current.distance_sum + separator_len + top_ed < destination.distance_sum
            ):
                compositions[destination_index] = Composition(
                    f"{current.segmented_string} {part}",
                    f"{current.corrected_string} {top_result}",
                    current.distance_sum + separator_len + top_ed,
                    current.log_prob_sum + top_log_prob,
                )

        circular_index += 1
        if circular_index == array_size:
            circular_index = 0

    return compositions[circular_index]
