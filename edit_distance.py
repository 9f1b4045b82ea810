from __future__ import annotations

import math
import sys

# Returned when the true distance is larger than the caller's bound.
NOT_FOUND = -1


def null_distance_results(string1: str | None, string2: str | None, max_distance: int) -> int:
    """Distance when at least one of the strings is None.

    None behaves like the empty string: the distance is the length of the other
    string, as long as it fits inside *max_distance*.
    """
    if string1 is None:
        if string2 is None:
            return 0
        return len(string2) if len(string2) <= max_distance else NOT_FOUND
    return len(string1) if len(string1) <= max_distance else NOT_FOUND


def prefix_suffix_prep(string1: str, string2: str) -> tuple[int, int, int]:
    """Strip the common prefix and suffix of two strings.

    ``string1`` must be the shorter one. Returns ``(len1, len2, start)``: the
    lengths of the parts that still differ and the offset where they begin.
    """
    len1 = len(string1)
    len2 = len(string2)
    # suffix common to both strings can be ignored
    while len1 != 0 and string1[len1 - 1] == string2[len2 - 1]:
        len1 -= 1
        len2 -= 1
    # prefix common to both strings can be ignored
    start = 0
    while start != len1 and string1[start] == string2[start]:
        start += 1
    if start != 0:
        len1 -= start
        len2 -= start
    return len1, len2, start


class EditDistance:
    """Bounded Damerau-Levenshtein distance (optimal string alignment).

    Insertions, deletions, substitutions and swaps of two adjacent characters
    all cost 1. Each call allocates its own cost rows, so one instance can be
    shared freely, including between threads.
    """

    def compare(self, string1: str | None, string2: str | None, max_distance: int) -> int:
        """Return the distance between two strings, or NOT_FOUND (-1) when it
        is larger than *max_distance*."""
        return self.distance(string1, string2, max_distance)

    def distance(self, string1: str | None, string2: str | None, max_distance: int) -> int:
        if string1 is None or string2 is None:
            return null_distance_results(string1, string2, max_distance)
        if max_distance <= 0:
            return 0 if string1 == string2 else NOT_FOUND
        max_distance = int(min(math.ceil(max_distance), sys.maxsize))

        # the shorter string goes first
        if len(string1) > len(string2):
            string1, string2 = string2, string1
        if len(string2) - len(string1) > max_distance:
            return NOT_FOUND

        len1, len2, start = prefix_suffix_prep(string1, string2)
        if len1 == 0:
            return len2 if len2 <= max_distance else NOT_FOUND

        if max_distance < len2:
            return self._distance_max(string1, string2, len1, len2, start, max_distance)
        return self._distance(string1, string2, len1, len2, start)

    @staticmethod
    def _distance(string1: str, string2: str, len1: int, len2: int, start: int) -> int:
        """Full row sweep, used when the bound cannot prune anything."""
        char1_costs = list(range(1, len2 + 1))
        prev_char1_costs = [0] * len2
        char1 = " "
        current_cost = 0
        for i in range(len1):
            prev_char1 = char1
            char1 = string1[start + i]
            char2 = " "
            left_char_cost = above_char_cost = i
            next_trans_cost = 0
            for j in range(len2):
                this_trans_cost = next_trans_cost
                next_trans_cost = prev_char1_costs[j]
                # cost of diagonal (substitution)
                current_cost = left_char_cost
                prev_char1_costs[j] = left_char_cost
                # left now equals current cost (which will be diagonal at next iteration)
                left_char_cost = char1_costs[j]
                prev_char2 = char2
                char2 = string2[start + j]
                if char1 != char2:
                    if above_char_cost < current_cost:
                        current_cost = above_char_cost
                    if left_char_cost < current_cost:
                        current_cost = left_char_cost
                    current_cost += 1
                    if (
                        i != 0
                        and j != 0
                        and char1 == prev_char2
                        and prev_char1 == char2
                        and this_trans_cost + 1 < current_cost
                    ):
                        # transposition
                        current_cost = this_trans_cost + 1
                char1_costs[j] = above_char_cost = current_cost
        return current_cost

    @staticmethod
    def _distance_max(string1: str, string2: str, len1: int, len2: int, start: int,
                      max_distance: int) -> int:
        """Banded sweep: only cells within *max_distance* of the diagonal are
        computed, and the sweep stops once a row cannot stay within bound."""
        char1_costs = [j + 1 if j < max_distance else max_distance + 1 for j in range(len2)]
        prev_char1_costs = [0] * len2
        len_diff = len2 - len1
        j_start_offset = max_distance - len_diff
        j_start = 0
        j_end = max_distance
        char1 = " "
        current_cost = 0
        for i in range(len1):
            prev_char1 = char1
            char1 = string1[start + i]
            char2 = " "
            left_char_cost = above_char_cost = i
            next_trans_cost = 0
            # no need to look beyond window of lower right diagonal - max_distance cells
            # and the upper left diagonal + max_distance cells
            if i > j_start_offset:
                j_start += 1
            if j_end < len2:
                j_end += 1
            for j in range(j_start, j_end):
                this_trans_cost = next_trans_cost
                next_trans_cost = prev_char1_costs[j]
                current_cost = left_char_cost
                prev_char1_costs[j] = left_char_cost
                left_char_cost = char1_costs[j]
                prev_char2 = char2
                char2 = string2[start + j]
                if char1 != char2:
                    if above_char_cost < current_cost:
                        current_cost = above_char_cost
                    if left_char_cost < current_cost:
                        current_cost = left_char_cost
                    current_cost += 1
                    if (
                        i != 0
                        and j != 0
                        and char1 == prev_char2
                        and prev_char1 == char2
                        and this_trans_cost + 1 < current_cost
                    ):
                        current_cost = this_trans_cost + 1
                char1_costs[j] = above_char_cost = current_cost
            if char1_costs[i + len_diff] > max_distance:
                return NOT_FOUND
        return current_cost if current_cost <= max_distance else NOT_FOUND
