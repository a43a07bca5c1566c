"""
Pytest fixtures and configuration for backend tests.

Provides reusable fixtures for testing API endpoints, sources, the
retrieval pipeline and utilities. No test touches the network: sources
are faked or their HTTP layer is mocked.
"""
import asyncio
import os
import sys
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from philsearch.schemas.papers import PaperRecord, SearchResult, SourceTag  # noqa: E402
from philsearch.services.sources.base import BaseSource  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def set_test_environment():
    """Set environment variables for testing."""
    os.environ.pop("OPENAI_API_KEY", None)
    os.environ.pop("CORE_API_KEY", None)
    yield


class FakeSource(BaseSource):
    """In-memory source that records the calls it receives."""

    name = "Fake"

    def __init__(
        self,
        papers: Optional[List[PaperRecord]] = None,
        tag: SourceTag = SourceTag.SEMANTIC_SCHOLAR,
        error: Optional[Exception] = None,
        delay: float = 0.0,
        timeout: float = 5.0,
        name: str = "Fake",
        accepts_subfield: bool = True,
    ):
        super().__init__(timeout=timeout)
        self.papers = papers or []
        self.tag = tag
        self.error = error
        self.delay = delay
        self.name = name
        self.accepts_subfield = accepts_subfield
        self.calls = []

    async def _fetch(self, query, limit, subfield):
        self.calls.append({"query": query, "limit": limit, "subfield": subfield})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return SearchResult(papers=self.papers[:limit], total=len(self.papers), source=self.tag)


@pytest.fixture
def make_paper():
    """Factory for PaperRecord instances."""
    def _make(title: str, source: SourceTag = SourceTag.SEMANTIC_SCHOLAR, **kwargs) -> PaperRecord:
        defaults = {
            "authors": "Jane Doe",
            "url": f"https://example.org/{abs(hash(title))}",
        }
        defaults.update(kwargs)
        return PaperRecord(title=title, source=source, **defaults)
    return _make


@pytest.fixture
def make_source():
    """Factory for FakeSource instances."""
    return FakeSource


@pytest.fixture
def sample_papers(make_paper):
    """Distinct philosophy papers from one source."""
    return [
        make_paper("The Analysis of Knowledge", year=1963, citation_count=420),
        make_paper("Is Justified True Belief Knowledge?", year=1963, citation_count=5000),
        make_paper("Epistemic Closure Principles", year=2005),
        make_paper("Testimony and Trust in Social Epistemology", year=2012),
        make_paper("Skepticism and the Veil of Perception", year=1999),
    ]


@pytest.fixture
def semantic_scholar_payload():
    """Graph API search response with one unusable record."""
    return {
        "total": 1234,
        "offset": 0,
        "data": [
            {
                "paperId": "abc123",
                "title": "Is Justified True Belief Knowledge?",
                "abstract": "Short paper on the analysis of knowledge.",
                "year": 1963,
                "citationCount": 5000,
                "fieldsOfStudy": ["Philosophy"],
                "authors": [{"authorId": "1", "name": "Edmund Gettier"}],
                "publicationVenue": {"name": "Analysis"},
                "url": "https://www.semanticscholar.org/paper/abc123",
            },
            {
                "paperId": "def456",
                "title": "Knowledge and Its Limits",
                "year": 2000,
                "authors": [
                    {"authorId": "2", "name": "A One"},
                    {"authorId": "3", "name": "B Two"},
                    {"authorId": "4", "name": "C Three"},
                    {"authorId": "5", "name": "D Four"},
                ],
            },
            {
                "paperId": "nope",
                "title": "Paper Without Authors",
                "authors": [],
            },
        ],
    }


@pytest.fixture
def crossref_payload():
    """CrossRef /works response."""
    return {
        "status": "ok",
        "message": {
            "total-results": 87,
            "items": [
                {
                    "DOI": "10.1093/analys/23.6.121",
                    "title": ["Is Justified True Belief Knowledge?"],
                    "author": [{"given": "Edmund", "family": "Gettier"}],
                    "published": {"date-parts": [[1963, 6]]},
                    "abstract": "<jats:p>A short <jats:italic>paper</jats:italic>.</jats:p>",
                    "type": "journal-article",
                    "container-title": ["Analysis"],
                    "is-referenced-by-count": 2100,
                },
                {
                    "title": "Virtue Epistemology",
                    "author": [{"name": "Epistemology Working Group"}],
                    "created": {"date-parts": [[2019, 1, 2]]},
                },
            ],
        },
    }


@pytest.fixture
def test_client():
    """Create a test client for API testing."""
    # Import here to avoid circular imports
    from philsearch.main import app

    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
