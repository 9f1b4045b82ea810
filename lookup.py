from __future__ import annotations

import re

from casing import transfer_casing_for_similar_text
from dictionary_index import DictionaryIndex
from edit_distance import EditDistance
from suggest_item import (
    LookupOptions,
    SuggestItem,
    Verbosity,
    compile_token_pattern,
    is_better_suggestion,
)

_DISTANCE_COMPARER = EditDistance()


def lookup(index: DictionaryIndex, phrase: str, verbosity: Verbosity,
           max_edit_distance: int | None = None,
           options: LookupOptions | None = None) -> list[SuggestItem]:
    """Find dictionary terms within *max_edit_distance* of *phrase*.

    Parameters
    ----------
    index:
        The dictionary to search.
    phrase:
        The word to correct.
    verbosity:
        TOP returns the best suggestion, CLOSEST every suggestion at the
        smallest distance, ALL every suggestion within the bound.
    max_edit_distance:
        Largest distance considered; defaults to the index's
        ``max_dictionary_edit_distance``.
    options:
        See :class:`LookupOptions`.

    Returns
    -------
    list[SuggestItem]
        Suggestions ordered by distance, then by descending count. Empty when
        nothing is close enough, unless ``include_unknown`` is set.
    """
    options = options or LookupOptions()
    if max_edit_distance is None:
        max_edit_distance = index.max_dictionary_edit_distance

    original_phrase = phrase
    if options.transfer_casing:
        phrase = phrase.lower()

    suggestions = _search(index, phrase, verbosity, max_edit_distance,
                          compile_token_pattern(options.ignore_token))

    if options.transfer_casing:
        suggestions = [
            SuggestItem(transfer_casing_for_similar_text(original_phrase, s.term), s.distance, s.count)
            for s in suggestions
        ]
    if options.include_unknown and not suggestions:
        suggestions = [SuggestItem(phrase, max_edit_distance + 1, 0)]
    return suggestions


def _search(index: DictionaryIndex, phrase: str, verbosity: Verbosity, max_edit_distance: int,
            ignore_token: re.Pattern | None) -> list[SuggestItem]:
    phrase_len = len(phrase)
    prefix_length = index.prefix_length

    # phrase is too long to be within reach of any dictionary term
    if phrase_len - max_edit_distance > index.max_length:
        return []

    suggestions: tuple[SuggestItem, ...] = ()

    # quick look for exact match
    if phrase in index.words:
        suggestions += (SuggestItem(phrase, 0, index.words[phrase]),)
        if verbosity != Verbosity.ALL:
            return list(suggestions)

    if ignore_token is not None and ignore_token.search(phrase):
        suggestions += (SuggestItem(phrase, 0, 1),)
        if verbosity != Verbosity.ALL:
            return list(suggestions)

    # only exact matches are possible
    if max_edit_distance == 0:
        return list(suggestions)

    considered_deletes = set()
    considered_suggestions = {phrase}
    # shrinks to the best distance found so far for TOP and CLOSEST
    max_edit_distance_2 = max_edit_distance

    phrase_prefix_len = min(phrase_len, prefix_length)
    candidates = [phrase[:phrase_prefix_len]]
    candidate_pointer = 0

    while candidate_pointer < len(candidates):
        candidate = candidates[candidate_pointer]
        candidate_pointer += 1
        candidate_len = len(candidate)
        len_diff = phrase_prefix_len - candidate_len

        # candidates are generated shortest-deletes-first, so every following
        # candidate is at least this far away
        if len_diff > max_edit_distance_2:
            if verbosity == Verbosity.ALL:
                continue
            break

        for suggestion in index.deletes.get(candidate, ()):
            if suggestion == phrase:
                continue
            suggestion_len = len(suggestion)
            if (
                abs(suggestion_len - phrase_len) > max_edit_distance_2
                # delete variants are never longer than the term they came from
                or suggestion_len < candidate_len
                # same length and different text is a hash collision
                or (suggestion_len == candidate_len and suggestion != candidate)
            ):
                continue
            suggestion_prefix_len = min(suggestion_len, prefix_length)
            if (
                suggestion_prefix_len > phrase_prefix_len
                and suggestion_prefix_len - candidate_len > max_edit_distance_2
            ):
                continue

            if candidate_len == 0:
                # every character of both strings would have to change
                distance = max(phrase_len, suggestion_len)
                if distance > max_edit_distance_2 or suggestion in considered_suggestions:
                    continue
                considered_suggestions.add(suggestion)
            elif suggestion_len == 1:
                distance = phrase_len if suggestion[0] not in phrase else phrase_len - 1
                if distance > max_edit_distance_2 or suggestion in considered_suggestions:
                    continue
                considered_suggestions.add(suggestion)
            else:
                # the prefixes matched; reject on the suffixes before paying for
                # a full distance computation
                if prefix_length - max_edit_distance == candidate_len and _suffixes_differ(
                    phrase, suggestion, prefix_length
                ):
                    continue
                if (
                    verbosity != Verbosity.ALL
                    and not delete_in_suggestion_prefix(candidate, candidate_len, suggestion,
                                                        suggestion_len, prefix_length)
                ) or suggestion in considered_suggestions:
                    continue
                considered_suggestions.add(suggestion)
                distance = _DISTANCE_COMPARER.compare(phrase, suggestion, max_edit_distance_2)
                if distance < 0:
                    continue

            if distance <= max_edit_distance_2:
                item = SuggestItem(suggestion, distance, index.words[suggestion])
                suggestions, max_edit_distance_2 = accept_suggestion(
                    suggestions, item, verbosity, max_edit_distance_2
                )

        # add edits: derive deletes of the candidate for the next round
        if len_diff < max_edit_distance and candidate_len <= prefix_length:
            # deletes this deep cannot beat what was already found
            if verbosity != Verbosity.ALL and len_diff >= max_edit_distance_2:
                continue
            for i in range(candidate_len):
                delete = candidate[:i] + candidate[i + 1:]
                if delete not in considered_deletes:
                    considered_deletes.add(delete)
                    candidates.append(delete)

    return sorted(suggestions)


def accept_suggestion(suggestions: tuple[SuggestItem, ...], item: SuggestItem, verbosity: Verbosity,
                      max_edit_distance_2: int) -> tuple[tuple[SuggestItem, ...], int]:
    """Fold one in-bound suggestion into the result set.

    Returns the new result tuple and the new search bound. TOP keeps a single
    item, replacing it with anything closer or more frequent; CLOSEST starts
    over whenever a strictly closer item shows up; ALL keeps everything. TOP
    and CLOSEST tighten the bound to the accepted distance.
    """
    if suggestions:
        if verbosity == Verbosity.CLOSEST:
            if item.distance < max_edit_distance_2:
                suggestions = ()
        elif verbosity == Verbosity.TOP:
            if is_better_suggestion(item, suggestions[0]):
                return (item,), item.distance
            return suggestions, max_edit_distance_2
    if verbosity != Verbosity.ALL:
        max_edit_distance_2 = item.distance
    return suggestions + (item,), max_edit_distance_2


def _suffixes_differ(phrase: str, suggestion: str, prefix_length: int) -> bool:
    """True when the parts of *phrase* and *suggestion* past the prefix cannot
    be within one adjacent transposition of each other."""
    phrase_len = len(phrase)
    suggestion_len = len(suggestion)
    min_len = min(phrase_len, suggestion_len) - prefix_length
    if min_len > 1 and phrase[phrase_len + 1 - min_len:] != suggestion[suggestion_len + 1 - min_len:]:
        return True
    return (
        min_len > 0
        and phrase[phrase_len - min_len] != suggestion[suggestion_len - min_len]
        and (
            phrase[phrase_len - min_len - 1] != suggestion[suggestion_len - min_len]
            or phrase[phrase_len - min_len] != suggestion[suggestion_len - min_len - 1]
        )
    )


def delete_in_suggestion_prefix(delete: str, delete_len: int, suggestion: str, suggestion_len: int,
                                prefix_length: int) -> bool:
    """Check whether all characters of *delete* appear, in order, in the
    prefix of *suggestion*."""
    if delete_len == 0:
        return True
    if prefix_length < suggestion_len:
        suggestion_len = prefix_length
    j = 0
    for i in range(delete_len):
        del_char = delete[i]
        while j < suggestion_len and del_char != suggestion[j]:
            j += 1
        if j == suggestion_len:
            return False
    return True
