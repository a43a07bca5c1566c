"""
CORE data source.

CORE aggregates open access research outputs from 14,000+ repositories.
- API key required (Authorization: Bearer <key>)
- Skipped entirely when no key is configured

Documentation: https://api.core.ac.uk/docs/v3
"""
from typing import Any, Dict, Optional

from philsearch.core.exceptions import SourceCredentialsError
from philsearch.core.logging import get_logger
from philsearch.schemas.papers import PaperRecord, SearchResult, SourceTag
from philsearch.schemas.subfields import Subfield
from philsearch.tools.text_processing import extract_query_terms

from .base import BaseSource, as_list, build_scoped_query, format_authors

logger = get_logger(__name__)

CORE_SEARCH_URL = "https://api.core.ac.uk/v3/search/works"
CORE_WORK_URL = "https://core.ac.uk/works/{work_id}"


class CoreSource(BaseSource):
    """Open access aggregator; needs credentials."""

    tag = SourceTag.CORE
    name = "CORE"
    requires_credentials = True
    # CORE's query language treats every term as required, so no subfield terms
    accepts_subfield = False

    def build_query(self, query: str, subfield: Optional[Subfield] = None) -> str:
        # Content words of the question only
        return build_scoped_query(extract_query_terms(query) or query, None, self.scope_terms)

    def _headers(self) -> Dict[str, str]:
        if not self.api_key:
            raise SourceCredentialsError(self.name)
        headers = super()._headers()
        headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _fetch(self, query: str, limit: int, subfield: Optional[Subfield]) -> SearchResult:
        core_query = self.build_query(query, subfield)
        logger.info(f"Searching CORE: {core_query[:80]}...")

        data = await self._get_json(CORE_SEARCH_URL, params={"q": core_query, "limit": limit})

        papers = [
            normalize_core_work(work)
            for work in as_list(data.get("results"))
            if work.get("title")
        ][:limit]

        return SearchResult(
            papers=papers,
            total=data.get("totalHits") or len(papers),
            source=self.tag,
        )


def normalize_core_work(work: Dict[str, Any]) -> PaperRecord:
    """Convert a CORE v3 work into a PaperRecord."""
    work_id = work.get("id")
    doi = work.get("doi")

    url = work.get("downloadUrl")
    if not url and doi:
        url = f"https://doi.org/{doi}"
    if not url and work_id:
        url = CORE_WORK_URL.format(work_id=work_id)

    journals = work.get("journals") or []
    venue = journals[0].get("title") if journals and isinstance(journals[0], dict) else None

    return PaperRecord(
        title=work.get("title"),
        authors=format_authors(work.get("authors") or []),
        abstract=work.get("abstract"),
        url=url,
        year=work.get("yearPublished"),
        categories=None,
        source=SourceTag.CORE,
        citation_count=work.get("citationCount"),
        venue=venue,
        external_id=str(work_id) if work_id else doi,
    )
