# ABOUTME: Canned Semantic Scholar Graph API paper/search response fixtures for testing.
# ABOUTME: Provides realistic JSON dicts matching the Semantic Scholar response shape.

DEEP_LEARNING_PAPER = {
    "paperId": "a4cd2f2d6b3fd7d7d1bfa6d6b5b1d8e6c1a9f3e2",
    "externalIds": {"DOI": "10.1038/nature14539", "MAG": "2919115771"},
    "url": "https://www.semanticscholar.org/paper/a4cd2f2d6b3fd7d7d1bfa6d6b5b1d8e6c1a9f3e2",
    "title": "Deep Learning",
    "venue": "Nature",
    "year": 2015,
    "journal": {"name": "Nature", "volume": "521"},
    "authors": [
        {"authorId": "1688882", "name": "Yann LeCun"},
        {"authorId": "1751762", "name": "Yoshua Bengio"},
        {"authorId": "1695689", "name": "Geoffrey E. Hinton"},
    ],
}

SEARCH_RESPONSE = {"total": 1, "offset": 0, "data": [DEEP_LEARNING_PAPER]}

SEARCH_RESPONSE_EMPTY = {"total": 0, "offset": 0, "data": []}

SCALING_LAWS_PREPRINT = {
    "paperId": "0f2c9b1e",
    "externalIds": {"ArXiv": "2305.01234"},
    "url": None,
    "title": "Scaling Laws for Widget Assembly",
    "venue": "",
    "journal": {"name": "arXiv.org"},
    "year": 2023,
    "authors": [{"authorId": "42", "name": "Jane Doe"}],
}

SCALING_LAWS_RESPONSE = {"total": 1, "data": [SCALING_LAWS_PREPRINT]}

ROBUST_PARSING_PAPER = {
    "paperId": "9b8e7d",
    "externalIds": {"DOI": "https://doi.org/10.5555/acl.2022.101"},
    "url": "https://www.semanticscholar.org/paper/9b8e7d",
    "title": "Neural Widgets for Robust Parsing",
    "venue": "Computational Linguistics",
    "year": 2022,
    "authors": [
        {"authorId": "1", "name": "John Smith"},
        {"authorId": "2", "name": "Jane Doe"},
        {"authorId": "3", "name": "Alice Brown"},
    ],
}

ROBUST_PARSING_RESPONSE = {"total": 1, "data": [ROBUST_PARSING_PAPER]}
