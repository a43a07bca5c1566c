"""
OpenAlex data source.

OpenAlex provides access to 250M+ scholarly works.
- 100,000 calls per day
- 10 requests per second
- No API key required (mailto puts requests in the polite pool)

Not enabled by default; add "openalex" to ENABLED_SOURCES to use it.
"""
from typing import Any, Dict, Optional

from philsearch.core.logging import get_logger
from philsearch.schemas.papers import PaperRecord, SearchResult, SourceTag
from philsearch.schemas.subfields import Subfield

from .base import BaseSource, as_list, format_authors

logger = get_logger(__name__)

OPENALEX_WORKS_URL = "https://api.openalex.org/works"
SELECT_FIELDS = "id,doi,title,display_name,abstract_inverted_index,publication_year,cited_by_count,primary_location,authorships"


class OpenAlexSource(BaseSource):
    """Open scholarly graph search, usable without credentials."""

    tag = SourceTag.OPENALEX
    name = "OpenAlex"

    async def _fetch(self, query: str, limit: int, subfield: Optional[Subfield]) -> SearchResult:
        search_query = self.build_query(query, subfield)
        logger.info(f"Searching OpenAlex: {search_query[:80]}...")

        params = {
            "search": search_query,
            "per_page": limit,
            "select": SELECT_FIELDS,
            "mailto": self.contact_email,
        }
        if self.api_key:
            params["api_key"] = self.api_key

        data = await self._get_json(OPENALEX_WORKS_URL, params=params)

        papers = [normalize_openalex_work(work) for work in as_list(data.get("results"))][:limit]
        meta = data.get("meta") or {}

        return SearchResult(
            papers=papers,
            total=meta.get("count") or len(papers),
            source=self.tag,
        )


def normalize_openalex_work(work: Dict[str, Any]) -> PaperRecord:
    """Convert an OpenAlex work into a PaperRecord."""
    authors = [
        (authorship.get("author") or {}).get("display_name")
        for authorship in work.get("authorships") or []
    ]
    authors = [name for name in authors if name]

    primary_location = work.get("primary_location") or {}
    source = primary_location.get("source") or {}

    return PaperRecord(
        title=work.get("title") or work.get("display_name"),
        authors=format_authors(authors),
        abstract=reconstruct_abstract(work.get("abstract_inverted_index")) or None,
        url=work.get("doi") or work.get("id"),
        year=work.get("publication_year"),
        source=SourceTag.OPENALEX,
        citation_count=work.get("cited_by_count"),
        venue=source.get("display_name"),
        external_id=work.get("id"),
    )


def reconstruct_abstract(inverted_index: Optional[Dict[str, Any]]) -> str:
    """Reconstruct abstract text from OpenAlex inverted index format."""
    if not inverted_index:
        return ""

    words_with_positions = []
    for word, positions in inverted_index.items():
        for pos in positions:
            words_with_positions.append((pos, word))

    words_with_positions.sort(key=lambda x: x[0])
    return " ".join(word for _, word in words_with_positions)
