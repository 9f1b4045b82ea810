import os
from functools import wraps
from typing import Iterator
from dotenv import load_dotenv

load_dotenv()


def iter_file_lines(file: str, encoding: str = "utf-8") -> Iterator[str]:
    """
    Yields the lines of a text file one at a time, without the trailing newline.
    Used for large corpus and dictionary files that should not be read into memory at once.
    """
    with open(file, "r", encoding=encoding) as f:
        for line in f:
            yield line.rstrip("\r\n")


def split_term_count_line(line: str, term_index: int, count_index: int, separator: str | None = " "):
    """
    Split a `term count` dictionary line and return (term, count).

    Returns None for malformed lines: fewer than two fields, an index out of range,
    or a count that is not an integer.

    Args:
        line (str): One line of a frequency dictionary.
        term_index (int): Column holding the term.
        count_index (int): Column holding the count.
        separator (str | None): Column separator; None splits on any whitespace.
    """
    parts = line.strip().split(separator)
    if len(parts) < 2:
        return None
    if term_index >= len(parts) or count_index >= len(parts):
        return None
    try:
        count = int(parts[count_index])
    except ValueError:
        return None
    return parts[term_index], count


def is_debug_enabled() -> bool:
    return os.getenv("DEBUG") == "1" or os.getenv("DEBUG", "").lower() == "true"


def dbg_print(func):
    """
    A decorator that prints the name of the function being called for debugging purposes.

    Args:
        func:

    Returns:

    """
    if not is_debug_enabled():
        # No-op: return original function
        return func

    @wraps(func)
    def wrapper(*args, **kwargs):
        print(f"[DEBUG] Calling: {func.__name__}")
        return func(*args, **kwargs)

    return wrapper
