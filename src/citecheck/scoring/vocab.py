# ABOUTME: Static word lists used by the scorers: preprint venues, citation stop words,
# ABOUTME: and generic venue words. Immutable module-level data loaded once at import.

# Case-insensitive substrings identifying a preprint server as the venue.
PREPRINT_VENUES: tuple[str, ...] = (
    "arxiv",
    "biorxiv",
    "medrxiv",
    "chemrxiv",
    "psyarxiv",
    "socarxiv",
    "edarxiv",
    "eartharxiv",
    "engrxiv",
    "techrxiv",
    "ssrn",
    "research square",
    "researchsquare",
    "preprints.org",
    "osf preprints",
    "authorea",
    "preprint",
)

# Capitalized words common in citations that are not author names.
STOP_WORDS = frozenset(
    {
        "the", "and", "for", "with", "from", "into", "over", "under", "about",
        "are", "was", "were", "this", "that", "these", "those", "its", "our",
        "their", "how", "why", "what", "when", "where", "who", "which", "not",
        "all", "via", "using", "toward", "towards", "between", "within", "among",
        "journal", "proceedings", "proc", "conference", "international", "annual",
        "symposium", "workshop", "transactions", "letters", "review", "reviews",
        "bulletin", "annals", "advances", "science", "sciences", "research",
        "society", "association", "institute", "university", "press", "publishing",
        "publishers", "editor", "editors", "eds", "edition", "vol", "volume",
        "issue", "pages", "chapter", "retrieved", "available", "online", "accessed",
        "preprint", "arxiv", "doi", "http", "https", "www", "org", "com", "pdf",
        "january", "february", "march", "april", "may", "june", "july", "august",
        "september", "october", "november", "december",
        "jan", "feb", "mar", "apr", "jun", "jul", "aug", "sep", "sept", "oct",
        "nov", "dec", "spring", "summer", "fall", "autumn", "winter",
        "ieee", "acm", "springer", "elsevier", "wiley", "nature", "cell",
        "thesis", "dissertation", "report", "technical", "book", "books",
    }
)

# Venue words too common to show that a citation names the right journal.
GENERIC_VENUE_WORDS = frozenset(
    {
        "journal", "proceedings", "conference", "international", "annual",
        "transactions", "letters", "review", "reviews", "research", "science",
        "sciences", "society", "american", "european", "national", "studies",
        "bulletin", "annals", "advances", "quarterly", "workshop", "symposium",
    }
)


def is_preprint_venue(venue: str | None) -> bool:
    """Whether a venue name belongs to a preprint server."""
    if not venue:
        return False
    lowered = venue.lower()
    return any(name in lowered for name in PREPRINT_VENUES)
