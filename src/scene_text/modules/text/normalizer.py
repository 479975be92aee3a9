"""
Text Normalizer
Cleans raw OCR output and assembles the final result string
"""

import string
from typing import Iterable, List

ALLOWED_CHARS = frozenset(string.ascii_letters + string.digits + " ,.!?")


def filter_text(raw: str) -> str:
    """Remove unwanted characters and redundant whitespace.

    Pass 1 keeps letters, digits, space and ``,.!?``. A newline is kept
    only when it is neither the first nor the last character and neither
    neighbour is a newline, so blank-line runs disappear entirely. Dropping
    a character between two newlines must not make them adjacent, so a
    newline is also dropped when it would follow another kept newline, and
    the result never starts or ends with one.

    Pass 2 drops a space that is the first or last character of the pass-1
    string or that follows another space.

    Args:
        raw: Text returned by the OCR engine for one region

    Returns:
        Filtered text, possibly empty
    """
    length = len(raw)
    kept = []
    for idx, ch in enumerate(raw):
        if ch in ALLOWED_CHARS:
            kept.append(ch)
        elif ch == "\n":
            isolated = idx != 0 and idx != length - 1 and raw[idx - 1] != "\n" and raw[idx + 1] != "\n"
            if isolated and kept and kept[-1] != "\n":
                kept.append(ch)

    length = len(kept)
    result = []
    for idx, ch in enumerate(kept):
        if ch == " ":
            if idx != 0 and idx != length - 1 and kept[idx - 1] != " ":
                result.append(ch)
        else:
            result.append(ch)

    # spaces dropped by pass 2 can leave a newline at either end
    return "".join(result).strip("\n")


def join_fragments(fragments: Iterable[str]) -> str:
    """Concatenate non-empty fragments, each followed by one space."""
    return "".join(f"{fragment} " for fragment in fragments if fragment)


def dedupe_words(text: str) -> str:
    """Keep the first occurrence of every space-delimited word.

    Matching is exact and case-sensitive; empty tokens produced by
    repeated spaces are ignored.

    >>> dedupe_words("cat dog cat bird dog")
    'cat dog bird'
    """
    seen = set()
    words: List[str] = []
    for token in text.split(" "):
        if not token or token in seen:
            continue
        seen.add(token)
        words.append(token)
    return " ".join(words)
