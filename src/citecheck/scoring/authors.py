# ABOUTME: Author-name matching helpers: splitting cited author strings, family-name
# ABOUTME: matching across formatting conventions, and extra/fabricated author detection.

import re
from collections.abc import Sequence

from citecheck.metadata.parsers import parse_person_name
from citecheck.metadata.strings import (
    decode_latex_accents,
    first_letter_matches,
    normalize_name,
)
from citecheck.metadata.types import Author

_AUTHOR_SPLIT_RE = re.compile(r"\s+and\s+|\s*;\s*|\s*&\s*", re.IGNORECASE)
_TRUNCATION_RE = re.compile(r"\bet\s+al\b|\bothers\b", re.IGNORECASE)


def is_truncated(author_text: str) -> bool:
    """Whether an author list ends in 'et al.' or BibTeX's 'and others'."""
    return bool(_TRUNCATION_RE.search(author_text))


def _is_initials(token: str) -> bool:
    letters = token.replace(".", "").replace("-", "")
    if not letters.isalpha():
        return False
    return "." in token or (len(letters) <= 2 and letters.isupper())


def parse_cited_name(name: str) -> Author:
    """Parse one cited name, handling 'Family, Given', 'Given Family' and 'Family G.'."""
    name = " ".join(decode_latex_accents(name).split()).strip(" ,.")
    if "," in name:
        return parse_person_name(name)
    parts = name.split(" ")
    if len(parts) > 1 and _is_initials(parts[-1]) and not _is_initials(parts[0]):
        return Author(family=parts[0], given=" ".join(parts[1:]))
    return parse_person_name(name)


def split_author_list(author_text: str) -> list[Author]:
    """Split a free-form author string into names.

    BibTeX 'and', semicolons and ampersands always separate names. A single
    comma-separated run is split on commas only when every part looks like a
    full 'Given Family' name, so 'Smith, John' stays one person.
    """
    pieces = [p.strip() for p in _AUTHOR_SPLIT_RE.split(author_text) if p.strip()]
    if len(pieces) == 1 and "," in pieces[0]:
        parts = [p.strip() for p in pieces[0].split(",") if p.strip()]
        if len(parts) > 1 and all(
            len(p.split()) >= 2 and not _is_initials(p.split()[-1]) for p in parts
        ):
            pieces = parts

    names = []
    for piece in pieces:
        if _TRUNCATION_RE.fullmatch(piece.strip(" .")):
            continue
        author = parse_cited_name(piece)
        if author.family:
            names.append(author)
    return names


def family_matches(token: str, family: str) -> bool:
    """Substring match in either direction between normalized name forms.

    Short names (two letters, e.g. 'Li') must match exactly so they do not
    hide inside longer words.
    """
    token = normalize_name(token)
    family = normalize_name(family)
    if not token or not family:
        return False
    if token == family:
        return True
    if min(len(token), len(family)) < 3:
        return False
    return token in family or family in token


def name_matches(name: Author, candidates: Sequence[Author]) -> bool:
    """Whether a cited name corresponds to any author of the record.

    Any full word of the cited name may match a record family name (which
    tolerates swapped name order). Failing that, a record author whose family
    and given names share first letters with the cited ones also counts, for
    transliteration differences such as Mueller / Müller.
    """
    words = [w for w in normalize_name(f"{name.given or ''} {name.family}").split() if len(w) >= 2]
    for author in candidates:
        if any(family_matches(word, author.family) for word in words):
            return True
        if (
            name.given
            and author.given
            and first_letter_matches(name.family, author.family)
            and first_letter_matches(name.given, author.given)
        ):
            return True
    return False


def find_extra_authors(author_text: str, candidates: Sequence[Author]) -> list[str]:
    """Cited names that correspond to nobody in the record's author list."""
    if not candidates:
        return []
    return [n.family for n in split_author_list(author_text) if not name_matches(n, candidates)]


def given_name_matches(token: str, author: Author) -> bool:
    """Lenient given-name match: full name, prefix, or initial with the same first letter."""
    if not author.given:
        return False
    token_norm = normalize_name(token)
    for part in normalize_name(author.given).split():
        if part == token_norm:
            return True
        if len(part) == 1 and first_letter_matches(part, token_norm):
            return True
        if len(part) >= 3 and (part.startswith(token_norm) or token_norm.startswith(part)):
            return True
    return False


def author_overlap(first: Sequence[Author], second: Sequence[Author]) -> float:
    """Share (0-1) of the shorter list's family names that appear in the other list."""
    if not first or not second:
        return 0.0
    shorter, longer = (first, second) if len(first) <= len(second) else (second, first)
    hits = sum(
        1 for a in shorter if any(family_matches(a.family, b.family) for b in longer)
    )
    return hits / len(shorter)
