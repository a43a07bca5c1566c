"""
Semantic Scholar data source.

Academic Graph API for 200M+ research papers.
- Free without a key: 100 requests per 5 minutes
- With an API key (x-api-key header): 1 request/second

Documentation: https://api.semanticscholar.org/api-docs
"""
from typing import Any, Dict, Optional

from philsearch.core.logging import get_logger
from philsearch.schemas.papers import PaperRecord, SearchResult, SourceTag
from philsearch.schemas.subfields import Subfield

from .base import BaseSource, as_list, format_authors

logger = get_logger(__name__)

SEMANTIC_SCHOLAR_API_BASE = "https://api.semanticscholar.org/graph/v1"
SEARCH_ENDPOINT = f"{SEMANTIC_SCHOLAR_API_BASE}/paper/search"
DEFAULT_FIELDS = "paperId,title,authors,abstract,year,citationCount,fieldsOfStudy,publicationVenue,url"
PAPER_URL = "https://www.semanticscholar.org/paper/{paper_id}"


class SemanticScholarSource(BaseSource):
    """Primary source. Works without a key; a key only raises rate limits."""

    tag = SourceTag.SEMANTIC_SCHOLAR
    name = "Semantic Scholar"

    def _headers(self) -> Dict[str, str]:
        headers = super()._headers()
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    async def _fetch(self, query: str, limit: int, subfield: Optional[Subfield]) -> SearchResult:
        enhanced_query = self.build_query(query, subfield)
        logger.info(f"Searching Semantic Scholar: {enhanced_query[:80]}...")

        data = await self._get_json(SEARCH_ENDPOINT, params={
            "query": enhanced_query,
            "fields": DEFAULT_FIELDS,
            "limit": limit,
        })

        papers = [
            normalize_semantic_scholar_paper(paper)
            for paper in as_list(data.get("data"))
            if paper.get("title") and paper.get("authors")
        ][:limit]

        return SearchResult(
            papers=papers,
            total=data.get("total") or len(papers),
            source=self.tag,
        )


def normalize_semantic_scholar_paper(paper: Dict[str, Any]) -> PaperRecord:
    """Convert a Graph API paper object into a PaperRecord."""
    paper_id = paper.get("paperId")
    venue = paper.get("publicationVenue") or {}

    return PaperRecord(
        title=paper.get("title"),
        authors=format_authors(paper.get("authors") or []),
        abstract=paper.get("abstract"),
        url=paper.get("url") or (PAPER_URL.format(paper_id=paper_id) if paper_id else None),
        year=paper.get("year"),
        categories=paper.get("fieldsOfStudy"),
        source=SourceTag.SEMANTIC_SCHOLAR,
        citation_count=paper.get("citationCount"),
        venue=venue.get("name"),
        external_id=paper_id,
    )
