# ABOUTME: Shared pytest fixtures for citecheck tests.
# ABOUTME: Provides sample candidates and bibliography files (BibTeX and plain text).

from pathlib import Path

import pytest

from citecheck.metadata.types import Author, Candidate

SAMPLE_BIB = r"""
@article{lecun2015deep,
  title = {Deep learning},
  author = {LeCun, Yann and Bengio, Yoshua and Hinton, Geoffrey},
  journal = {Nature},
  year = {2015},
  doi = {10.1038/nature14539}
}

@inproceedings{smith2022neural,
  title = {Neural Widgets for Robust Parsing},
  author = {Smith, John and Doe, Jane},
  booktitle = {Computational Linguistics},
  year = 2022
}
"""

SAMPLE_REFERENCES = r"""\begin{thebibliography}{9}
LeCun, Y., Bengio, Y., \& Hinton, G. (2015). Deep learning. Nature, 521, 436-444.

\vspace{2mm}
short line
Doe, J. (2023). Scaling laws for widget assembly. arXiv preprint.
\end{thebibliography}
"""


@pytest.fixture
def deep_learning_candidate() -> Candidate:
    """The CrossRef record for LeCun et al. 2015."""
    return Candidate(
        title="Deep learning",
        source="crossref",
        authors=(
            Author("LeCun", "Yann"),
            Author("Bengio", "Yoshua"),
            Author("Hinton", "Geoffrey"),
        ),
        year=2015,
        journal="Nature",
        identifier="10.1038/nature14539",
        url="http://dx.doi.org/10.1038/nature14539",
        doi="10.1038/nature14539",
    )


@pytest.fixture
def sample_bib(tmp_path: Path) -> Path:
    """A two-entry .bib file."""
    path = tmp_path / "refs.bib"
    path.write_text(SAMPLE_BIB, encoding="utf-8")
    return path


@pytest.fixture
def sample_references(tmp_path: Path) -> Path:
    """A pasted LaTeX bibliography with layout commands and a too-short line."""
    path = tmp_path / "refs.txt"
    path.write_text(SAMPLE_REFERENCES, encoding="utf-8")
    return path
