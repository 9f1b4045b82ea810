import re

# runs of letters/digits and apostrophes, e.g. "don't", "o’clock"
_CORPUS_WORD_RE = re.compile(r"(([^\W_]|['’])+)")

# a word, optionally followed by an apostrophe and more letters
_PHRASE_WORD_RE = re.compile(r"([^\W_]+['’]*[^\W_]*)")

_ACRONYM_RE = re.compile(r"\b[A-Z0-9]{2,}\b")


def parse_words(text: str) -> list[str]:
    """Lowercased word tokens of a line of corpus text."""
    return [match.group(0) for match in _CORPUS_WORD_RE.finditer(text.lower())]


def parse_words_case(phrase: str, preserve_case: bool = False) -> list[str]:
    """Word tokens of a phrase to be corrected; lowercased unless
    *preserve_case* is set."""
    if not preserve_case:
        phrase = phrase.lower()
    return _PHRASE_WORD_RE.findall(phrase)


def is_acronym(word: str) -> bool:
    """True for all-caps / digit tokens of at least two characters, e.g.
    "ABC", "UK2"."""
    return _ACRONYM_RE.search(word) is not None


def is_numeral(word: str) -> bool:
    """True when the token is a non-zero integer, e.g. "42". A literal zero is
    treated as a word."""
    try:
        return int(word) != 0
    except ValueError:
        return False
