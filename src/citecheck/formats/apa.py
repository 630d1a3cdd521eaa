# ABOUTME: APA-style citation text for a verified Candidate.
# ABOUTME: "Family, I., & Family, I. (Year). Title. Journal. https://doi.org/..."

from citecheck.metadata.types import Author, Candidate


def _initials(given: str) -> str:
    return " ".join(f"{part[0]}." for part in given.replace(".", " ").split() if part)


def format_author(author: Author) -> str:
    """'Smith, J. P.' from family 'Smith' and given 'John Paul'."""
    if not author.given:
        return author.family
    initials = _initials(author.given)
    return f"{author.family}, {initials}" if initials else author.family


def format_author_list(authors: tuple[Author, ...] | list[Author]) -> str:
    """Join authors APA-style, with '&' before the last one."""
    names = [format_author(a) for a in authors if a.family]
    if not names:
        return ""
    if len(names) == 1:
        return names[0]
    return ", ".join(names[:-1]) + ", & " + names[-1]


def _sentence(text: str) -> str:
    text = text.strip()
    return text if text.endswith((".", "?", "!")) else f"{text}."


def format_apa(candidate: Candidate) -> str:
    """Format a candidate as an APA reference string."""
    year = candidate.year or "n.d."
    title = candidate.title or "Untitled"
    authors = format_author_list(candidate.authors)

    if authors:
        citation = f"{_sentence(authors)} ({year}). {_sentence(title)}"
    else:
        citation = f"{_sentence(title)} ({year})."
    if candidate.journal:
        citation += f" {_sentence(candidate.journal)}"
    if candidate.link:
        citation += f" {candidate.link}"
    return citation
