import os
from dotenv import load_dotenv
from spell_corrector import SpellCorrector
from utils import dbg_print

load_dotenv()

_DEFAULT_MAX_EDIT_DISTANCE = 2
_DEFAULT_PREFIX_LENGTH = 7
_DEFAULT_COUNT_THRESHOLD = 1
_DEFAULT_ENGLISH_MAX_WORDS = 50000

_SPELL_CORRECTOR = None


def _get_int_env(name: str, default: int | None) -> int | None:
    """Read an integer environment variable, falling back to *default* when unset or empty."""
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{value}'")


def get_max_dictionary_edit_distance() -> int:
    return _get_int_env("SPELL_MAX_EDIT_DISTANCE", _DEFAULT_MAX_EDIT_DISTANCE)


def get_prefix_length() -> int:
    return _get_int_env("SPELL_PREFIX_LENGTH", _DEFAULT_PREFIX_LENGTH)


def get_count_threshold() -> int:
    return _get_int_env("SPELL_COUNT_THRESHOLD", _DEFAULT_COUNT_THRESHOLD)


def get_english_max_words() -> int:
    return _get_int_env("SPELL_ENGLISH_MAX_WORDS", _DEFAULT_ENGLISH_MAX_WORDS)


def get_max_segmentation_word_length() -> int | None:
    """None means "use the longest dictionary word"."""
    return _get_int_env("SPELL_MAX_SEGMENTATION_WORD_LENGTH", None)


def get_dictionary_file() -> str | None:
    return os.getenv("SPELL_DICTIONARY_FILE") or None


def get_dictionary_separator() -> str:
    # an explicit "\t" in .env arrives as the two characters backslash and t
    separator = os.getenv("SPELL_DICTIONARY_SEPARATOR", " ")
    return "\t" if separator == "\\t" else separator


def get_bigram_dictionary_file() -> str | None:
    return os.getenv("SPELL_BIGRAM_FILE") or None


@dbg_print
def build_spell_corrector() -> SpellCorrector:
    """Build a corrector from the configured dictionary files.

    Without SPELL_DICTIONARY_FILE the wordfreq English word list is used.
    """
    dictionary_file = get_dictionary_file()
    if dictionary_file is None:
        return SpellCorrector.from_english_dictionary(
            min_length=1,
            max_words=get_english_max_words(),
            max_dictionary_edit_distance=get_max_dictionary_edit_distance(),
            prefix_length=get_prefix_length(),
        )

    corrector = SpellCorrector(
        get_max_dictionary_edit_distance(),
        get_prefix_length(),
        get_count_threshold(),
    )
    corrector.load_dictionary(dictionary_file, separator=get_dictionary_separator())

    bigram_file = get_bigram_dictionary_file()
    if bigram_file is not None:
        corrector.load_bigram_dictionary(bigram_file)
    return corrector


def set_spell_corrector(corrector: SpellCorrector = None):
    """Set the shared corrector used by the server. With no argument, build one from the environment.

    Args:
        corrector: An already built SpellCorrector, e.g. from a test.
    """
    global _SPELL_CORRECTOR

    if corrector is None:
        corrector = build_spell_corrector()

    _SPELL_CORRECTOR = corrector


def get_spell_corrector() -> SpellCorrector:
    global _SPELL_CORRECTOR
    if _SPELL_CORRECTOR is None:
        set_spell_corrector()
    return _SPELL_CORRECTOR
