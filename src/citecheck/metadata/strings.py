# ABOUTME: String metrics for citation matching: normalized Levenshtein similarity,
# ABOUTME: LaTeX accent decoding, and lenient first-letter name comparison.

import math
import re
import unicodedata

from rapidfuzz.distance import Levenshtein

_PUNCT_RE = re.compile(r"[^\w\s]")
_SPACE_RE = re.compile(r"\s+")
_YEAR_IN_TEXT_RE = re.compile(r"\b(?:19|20)\d{2}\b")

# \'e  \'{e}  {\'e}  \"u  \^o  \`a  \~n  \=a  \.z
_SYMBOL_ACCENT_RE = re.compile(r"\\[\'\"`^~=.]\s*(?:\{\s*([A-Za-z])\s*\}|([A-Za-z]))")
# \c{c}  \v{s}  \u{g}  \H{o}  \k{a}  \r{a}  \d{o}  \b{o}, and the unbraced \c c form
_LETTER_ACCENT_RE = re.compile(r"\\[cvuHkrdb](?:\s*\{\s*([A-Za-z])\s*\}|\s+([A-Za-z]))")
# Dotless i/j and ligatures written as commands: \i  \ss  \o  \ae  \l
_SPECIAL_LETTER_RE = re.compile(r"\\(ss|ae|AE|oe|OE|aa|AA|o|O|l|L|i|j)(?![A-Za-z])(?:\{\})?")
_BRACE_RE = re.compile(r"[{}]")


def normalize(text: str) -> str:
    """Lowercase, drop punctuation, and collapse whitespace."""
    text = _PUNCT_RE.sub("", text.lower())
    return _SPACE_RE.sub(" ", text).strip()


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def similarity(a: str, b: str) -> int:
    """Normalized Levenshtein similarity on a 0-100 scale.

    Both strings are normalized first; identical normalized forms score 100.
    Either input being empty scores 0.
    """
    if not a or not b:
        return 0
    clean_a = normalize(a)
    clean_b = normalize(b)
    if clean_a == clean_b:
        return 100

    max_len = max(len(clean_a), len(clean_b))
    distance = Levenshtein.distance(clean_a, clean_b)
    return max(0, _round_half_up((1 - distance / max_len) * 100))


def best_window_similarity(haystack: str, needle: str) -> int:
    """Best similarity between needle and any same-sized word window of haystack.

    A pasted citation holds the title among authors, venue, and year, so the
    whole-string similarity undersells a title with a small typo. Windows of
    the needle's word count (plus or minus one word) are tried.
    """
    hay_words = normalize(haystack).split()
    needle_norm = normalize(needle)
    width = len(needle_norm.split())
    if not hay_words or width == 0:
        return 0

    best = similarity(haystack, needle)
    for size in {max(1, width - 1), width, width + 1}:
        if size > len(hay_words):
            continue
        for start in range(len(hay_words) - size + 1):
            window = " ".join(hay_words[start : start + size])
            best = max(best, similarity(window, needle_norm))
            if best == 100:
                return best
    return best


def decode_latex_accents(text: str) -> str:
    """Strip escaped-accent markup down to the bare letter.

    "M{\\\"u}ller" becomes "Muller" and "Ho\\v{s}ek" becomes "Hosek", so names
    typed in BibTeX compare equal to the plain-text form a provider returns.
    """
    if not text:
        return ""
    text = _SYMBOL_ACCENT_RE.sub(lambda m: m.group(1) or m.group(2), text)
    text = _LETTER_ACCENT_RE.sub(lambda m: m.group(1) or m.group(2), text)
    text = _SPECIAL_LETTER_RE.sub(lambda m: m.group(1), text)
    return _BRACE_RE.sub("", text)


def fold_accents(text: str) -> str:
    """Remove combining diacritics from Unicode text ("Müller" -> "Muller")."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_name(name: str) -> str:
    """Normalize a personal name for comparison across formatting conventions."""
    return normalize(fold_accents(decode_latex_accents(name)))


def _first_letter(name: str) -> str | None:
    for ch in fold_accents(decode_latex_accents(name)):
        if ch.isalpha():
            return ch.casefold()
    return None


def first_letter_matches(name1: str, name2: str) -> bool:
    """Case-insensitive comparison of the first alphabetic character of two names.

    Lets an initial ("J.") match a full given name ("John").
    """
    first1 = _first_letter(name1)
    first2 = _first_letter(name2)
    return first1 is not None and first1 == first2


def extract_years(text: str) -> list[int]:
    """Four-digit years (1900-2099) mentioned in free text, in order."""
    return [int(y) for y in _YEAR_IN_TEXT_RE.findall(text)]


def contains_normalized(haystack: str, needle: str) -> bool:
    """Whether the normalized needle is a non-empty substring of the normalized haystack."""
    clean_needle = normalize(needle)
    return bool(clean_needle) and clean_needle in normalize(haystack)
