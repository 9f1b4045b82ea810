from __future__ import annotations

import math
import sys

from casing import transfer_casing_for_similar_text
from dictionary_index import DictionaryIndex
from edit_distance import EditDistance
from lookup import lookup
from suggest_item import CompoundOptions, SuggestItem, Verbosity
from word_parsing import is_acronym, is_numeral, parse_words_case

# Number of words in the corpus the reference frequencies were counted on.
N = 1024908267229

_DISTANCE_COMPARER = EditDistance()


def unknown_word_count(term: str) -> float:
    """Pseudo-count for a word that has no dictionary entry: the longer the
    word, the less likely it is a real unseen word."""
    return 10 / 10 ** len(term)


def _unknown_suggestion(term: str, max_edit_distance: int) -> SuggestItem:
    return SuggestItem(term, max_edit_distance + 1, math.floor(unknown_word_count(term)))


def lookup_compound(index: DictionaryIndex, phrase: str, max_edit_distance: int | None = None,
                    options: CompoundOptions | None = None) -> list[SuggestItem]:
    """Correct a whole phrase, allowing words to be merged and split.

    Each token is corrected on its own, merged with the previous token when
    that is cheaper (e.g. "in form" -> "inform"), or split in two when that is
    cheaper (e.g. "inthe" -> "in the"). Only one merge or split is applied per
    token.

    Returns a one-element list holding the corrected phrase. Its count is the
    joint probability of the chosen words scaled by ``N``, and its distance is
    the full edit distance from the input phrase.
    """
    options = options or CompoundOptions()
    if max_edit_distance is None:
        max_edit_distance = index.max_dictionary_edit_distance

    # case-preserving tokens, for acronym detection; lowercasing each token
    # keeps both lists aligned even when lower() changes a token's length
    term_list_2 = parse_words_case(phrase, preserve_case=True)
    term_list_1 = [term.lower() for term in term_list_2]

    suggestion_parts: list[SuggestItem] = []
    last_combi = False

    for i, term in enumerate(term_list_1):
        if options.ignore_non_words:
            if is_numeral(term):
                suggestion_parts.append(SuggestItem(term, 0, 0))
                continue
            if is_acronym(term_list_2[i]):
                suggestion_parts.append(SuggestItem(term_list_2[i], 0, 0))
                continue

        suggestions = lookup(index, term, Verbosity.TOP, max_edit_distance)

        # combi check, always before split
        if i > 0 and not last_combi:
            combi = _merge_with_previous(index, term_list_1[i - 1] + term, suggestion_parts[-1],
                                         suggestions, term, max_edit_distance)
            if combi is not None:
                suggestion_parts[-1] = combi
                last_combi = True
                continue

        last_combi = False

        # always split terms without suggestion / never split terms with
        # suggestion distance 0 / never split single char terms
        if suggestions and (suggestions[0].distance == 0 or len(term) == 1):
            suggestion_parts.append(suggestions[0])
        elif len(term) > 1:
            best = _best_split(index, term, suggestions, max_edit_distance)
            suggestion_parts.append(best if best is not None
                                    else _unknown_suggestion(term, max_edit_distance))
        else:
            suggestion_parts.append(_unknown_suggestion(term, max_edit_distance))

    count = N
    for part in suggestion_parts:
        count *= part.count / N
    term = " ".join(part.term for part in suggestion_parts)
    if options.transfer_casing:
        term = transfer_casing_for_similar_text(phrase, term)
    distance = _DISTANCE_COMPARER.compare(phrase, term, sys.maxsize)
    return [SuggestItem(term, distance, math.floor(count))]


def _merge_with_previous(index: DictionaryIndex, combined: str, best_1: SuggestItem,
                         suggestions: list[SuggestItem], term: str,
                         max_edit_distance: int) -> SuggestItem | None:
    """Return the merged correction of the previous and current token when it
    beats correcting them separately, else None."""
    suggestions_combi = lookup(index, combined, Verbosity.TOP, max_edit_distance)
    if not suggestions_combi:
        return None

    if suggestions:
        best_2 = suggestions[0]
    else:
        # unknown word; estimated edit distance and word probability
        best_2 = SuggestItem(term, max_edit_distance + 1, unknown_word_count(term))

    # the removed space costs one edit
    distance_1 = best_1.distance + best_2.distance
    combi = suggestions_combi[0]
    if distance_1 >= 0 and (
        combi.distance + 1 < distance_1
        or (combi.distance + 1 == distance_1 and combi.count > best_1.count / N * best_2.count)
    ):
        return SuggestItem(combi.term, combi.distance + 1, combi.count)
    return None


def _best_split(index: DictionaryIndex, term: str, suggestions: list[SuggestItem],
                max_edit_distance: int) -> SuggestItem | None:
    """Try every split point of *term* and return the best two-word
    correction, or the whole-word suggestion when no split beats it."""
    split_best = suggestions[0] if suggestions else None

    for j in range(1, len(term)):
        part_1 = term[:j]
        part_2 = term[j:]
        suggestions_1 = lookup(index, part_1, Verbosity.TOP, max_edit_distance)
        if not suggestions_1:
            continue
        suggestions_2 = lookup(index, part_2, Verbosity.TOP, max_edit_distance)
        if not suggestions_2:
            continue

        top_1 = suggestions_1[0]
        top_2 = suggestions_2[0]
        split_term = f"{top_1.term} {top_2.term}"
        # select best suggestion for split pair
        split_distance = _DISTANCE_COMPARER.compare(term, split_term, max_edit_distance)
        if split_distance < 0:
            split_distance = max_edit_distance + 1

        if split_best is not None:
            if split_distance > split_best.distance:
                continue
            if split_distance < split_best.distance:
                split_best = None

        split_count = _split_count(index, term, split_term, top_1, top_2, suggestions)
        if split_best is None or split_count > split_best.count:
            split_best = SuggestItem(split_term, split_distance, split_count)

    return split_best


def _split_count(index: DictionaryIndex, term: str, split_term: str, top_1: SuggestItem,
                 top_2: SuggestItem, suggestions: list[SuggestItem]) -> int:
    """Frequency score of a split candidate."""
    if split_term not in index.bigrams:
        # naive Bayes probability of the two words, scaled back up by N
        return math.floor(min(index.bigram_count_min, top_1.count / N * top_2.count))

    count = index.bigrams[split_term]
    rejoined = top_1.term + top_2.term
    if suggestions:
        best_whole = suggestions[0]
        if rejoined == term:
            # the split keeps every input character, e.g. "inthe" -> "in the"
            count = max(count, best_whole.count + 2)
        elif best_whole.term in (top_1.term, top_2.term):
            # one half is the whole-word correction, e.g. "nnot" -> "n not"
            count = max(count, best_whole.count + 1)
    elif rejoined == term:
        count = max(count, max(top_1.count, top_2.count) + 2)
    return count
