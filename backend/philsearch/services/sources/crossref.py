"""
CrossRef data source.

CrossRef provides DOI metadata for 140M+ works.
- No API key required (use polite pool with mailto)
- Secondary/fallback source: always usable, and on failure it returns a
  single generic pointer to PhilPapers instead of nothing

Documentation: https://api.crossref.org/swagger-ui/index.html
"""
import re
from typing import Any, Dict, Optional

from philsearch.core.exceptions import SourceError
from philsearch.core.logging import get_logger
from philsearch.schemas.papers import PaperRecord, SearchResult, SourceTag
from philsearch.schemas.subfields import Subfield

from .base import BaseSource, as_list, format_authors

logger = get_logger(__name__)

CROSSREF_WORKS_URL = "https://api.crossref.org/works"
SELECT_FIELDS = "DOI,title,author,published,created,abstract,type,container-title,is-referenced-by-count"

FALLBACK_PAPER = PaperRecord(
    title="Philosophy Research on PhilPapers.org",
    authors="Various Philosophers",
    url="https://philpapers.org",
    source=SourceTag.CROSSREF,
)


class CrossRefSource(BaseSource):
    """DOI registry search, usable without credentials."""

    tag = SourceTag.CROSSREF
    name = "CrossRef"

    def fallback_result(self) -> SearchResult:
        return SearchResult(papers=[FALLBACK_PAPER], total=0, source=self.tag)

    async def _fetch(self, query: str, limit: int, subfield: Optional[Subfield]) -> SearchResult:
        philosophy_query = self.build_query(query, subfield)
        logger.info(f"Searching CrossRef: {philosophy_query[:80]}...")

        data = await self._get_json(CROSSREF_WORKS_URL, params={
            "query": philosophy_query,
            "rows": limit,
            "select": SELECT_FIELDS,
            "sort": "relevance",
            "mailto": self.contact_email,
        })

        message = data.get("message") or {}
        papers = [normalize_crossref_work(item) for item in as_list(message.get("items"))[:limit]]

        if not papers:
            raise SourceError(self.name, "No papers found")

        return SearchResult(
            papers=papers,
            total=message.get("total-results") or len(papers),
            source=self.tag,
        )


def normalize_crossref_work(item: Dict[str, Any]) -> PaperRecord:
    """Convert a CrossRef work item into a PaperRecord."""
    title = item.get("title")
    if isinstance(title, list):
        title = title[0] if title else None

    container = item.get("container-title") or []
    doi = item.get("DOI")

    return PaperRecord(
        title=title,
        authors=format_authors(item.get("author") or []),
        abstract=_clean_abstract(item.get("abstract")),
        url=f"https://doi.org/{doi}" if doi else None,
        year=_year(item, "published") or _year(item, "created"),
        categories=[item["type"]] if item.get("type") else [],
        source=SourceTag.CROSSREF,
        citation_count=item.get("is-referenced-by-count"),
        venue=container[0] if container else None,
        external_id=doi,
    )


def _year(item: Dict[str, Any], field: str) -> Optional[int]:
    date_parts = (item.get(field) or {}).get("date-parts") or [[]]
    first = date_parts[0] if date_parts else []
    return first[0] if first and first[0] else None


def _clean_abstract(abstract: Optional[str]) -> Optional[str]:
    # CrossRef abstracts are JATS XML fragments
    if not abstract:
        return None
    return re.sub(r"\s+", " ", re.sub(r"<[^>]+>", " ", abstract)).strip()
