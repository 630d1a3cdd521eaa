# ABOUTME: Canned OpenAlex /works response fixtures for testing.
# ABOUTME: Provides realistic JSON dicts matching the OpenAlex response shape.

DEEP_LEARNING_WORK = {
    "id": "https://openalex.org/W1919524542",
    "doi": "https://doi.org/10.1038/nature14539",
    "title": "Deep learning",
    "display_name": "Deep learning",
    "publication_year": 2015,
    "authorships": [
        {"author": {"id": "https://openalex.org/A1", "display_name": "Yann LeCun"}},
        {"author": {"id": "https://openalex.org/A2", "display_name": "Yoshua Bengio"}},
        {"author": {"id": "https://openalex.org/A3", "display_name": "Geoffrey E. Hinton"}},
    ],
    "primary_location": {"source": {"display_name": "Nature", "type": "journal"}},
}

SEARCH_RESPONSE = {"meta": {"count": 1}, "results": [DEEP_LEARNING_WORK]}

SEARCH_RESPONSE_EMPTY = {"meta": {"count": 0}, "results": []}

NO_SOURCE_WORK = {
    "id": "https://openalex.org/W99",
    "doi": None,
    "title": None,
    "display_name": "Widget folklore",
    "publication_year": None,
    "authorships": [{"author": {"display_name": None}}],
    "primary_location": None,
}
