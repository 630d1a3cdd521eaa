# ABOUTME: Metadata package: bibliographic records, string metrics, and source adapters.
# ABOUTME: Exports the Candidate/ExpectedMetadata types and the three provider adapters.

from citecheck.metadata.crossref import CrossRefAdapter
from citecheck.metadata.openalex import OpenAlexAdapter
from citecheck.metadata.provider import SourceAdapter
from citecheck.metadata.semantic_scholar import SemanticScholarAdapter
from citecheck.metadata.types import Author, Candidate, ExpectedMetadata

__all__ = [
    "Author",
    "Candidate",
    "CrossRefAdapter",
    "ExpectedMetadata",
    "OpenAlexAdapter",
    "SemanticScholarAdapter",
    "SourceAdapter",
]
