"""
Base types and interfaces for data sources.

Every academic API client inherits from BaseSource and implements
_fetch(). The public search() wraps it so that no failure ever
crosses the adapter boundary: timeouts, HTTP errors, rate limits
and malformed payloads are logged and turned into the adapter's
fallback result.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Sequence

import httpx

from philsearch.core.config import settings
from philsearch.core.exceptions import (
    SourceError,
    SourceHTTPError,
    SourceParseError,
    SourceRateLimitError,
)
from philsearch.core.logging import get_logger
from philsearch.schemas.papers import UNKNOWN_AUTHOR, SearchResult, SourceTag
from philsearch.schemas.subfields import Subfield
from philsearch.services.classification import get_subfield_search_terms

logger = get_logger(__name__)

MAX_DISPLAY_AUTHORS = 3
MAX_RESULTS_PER_REQUEST = 100


def format_authors(authors: Optional[Sequence[Any]]) -> str:
    """
    Collapse an author list into one display string.

    Accepts plain strings, {"name": ...} objects (Semantic Scholar,
    CORE, OpenAlex) or {"given": ..., "family": ...} objects (CrossRef).
    The first three names are kept; " et al." is appended when there
    were more.
    """
    if not authors:
        return UNKNOWN_AUTHOR

    names = [_author_name(author) for author in authors[:MAX_DISPLAY_AUTHORS]]
    display = ", ".join(names)

    if len(authors) > MAX_DISPLAY_AUTHORS:
        return display + " et al."
    return display


def _author_name(author: Any) -> str:
    if isinstance(author, str):
        return author.strip() or "Unknown"
    if isinstance(author, dict):
        given = author.get("given")
        family = author.get("family")
        if given and family:
            return f"{given} {family}"
        return author.get("name") or author.get("display_name") or family or "Unknown"
    return str(author)


def build_scoped_query(
    query: str,
    subfield: Optional[Subfield] = None,
    scope_terms: Iterable[str] = ("philosophy",),
) -> str:
    """Append domain scope terms and the subfield's search terms to a query."""
    parts = [query.strip(), *scope_terms, *get_subfield_search_terms(subfield)]
    return " ".join(part for part in parts if part)


def default_headers(contact_email: str) -> Dict[str, str]:
    """Identifying client header plus JSON-only Accept."""
    return {
        "User-Agent": f"PhilSearch/1.0 (mailto:{contact_email}; philosophy Q&A)",
        "Accept": "application/json",
    }


class BaseSource(ABC):
    """
    Abstract base class for all data sources.

    Subclasses set `tag`, `name` and, when the API cannot be used
    without a key, `requires_credentials = True`. Registry code skips
    credentialed sources that have no key, and search() on such a
    source returns an empty result without touching the network.

    Example:
        class NewSource(BaseSource):
            tag = SourceTag.OPENALEX
            name = "NewSource"

            async def _fetch(self, query, limit, subfield):
                data = await self._get_json(URL, params={...})
                return SearchResult(papers=[...], total=..., source=self.tag)
    """

    tag: SourceTag
    name: str = "Source"
    requires_credentials: bool = False
    accepts_subfield: bool = True
    scope_terms: Sequence[str] = ("philosophy",)

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        contact_email: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.timeout = timeout if timeout is not None else settings.SOURCE_TIMEOUT_SECONDS
        self.contact_email = contact_email or settings.API_CONTACT_EMAIL
        self._transport = transport

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)

    def build_query(self, query: str, subfield: Optional[Subfield] = None) -> str:
        return build_scoped_query(query, subfield if self.accepts_subfield else None, self.scope_terms)

    def fallback_result(self) -> SearchResult:
        """Result returned when the source fails. Empty unless overridden."""
        return SearchResult.empty(self.tag)

    async def search(
        self,
        query: str,
        limit: int = 5,
        subfield: Optional[Subfield] = None,
    ) -> SearchResult:
        """
        Search this source for papers matching the query.

        Never raises. Any failure is logged and replaced by
        fallback_result().

        Args:
            query: The user's question or search string
            limit: Maximum number of results to return (capped at 100)
            subfield: Detected philosophy subfield used to scope the query

        Returns:
            SearchResult tagged with this source
        """
        if self.requires_credentials and not self.has_credentials:
            logger.info(f"{self.name}: no API credentials configured, skipping")
            return SearchResult.empty(self.tag)

        limit = max(1, min(limit, MAX_RESULTS_PER_REQUEST))

        try:
            result = await self._fetch(query, limit, subfield)
        except httpx.TimeoutException:
            logger.warning(f"{self.name} timeout after {self.timeout}s")
            return self.fallback_result()
        except SourceError as e:
            logger.warning(str(e))
            return self.fallback_result()
        except httpx.HTTPError as e:
            logger.warning(f"{self.name} request failed: {e}")
            return self.fallback_result()
        except (ValueError, KeyError, TypeError, AttributeError, IndexError) as e:
            logger.error(f"{self.name} returned malformed data: {e}")
            return self.fallback_result()
        except Exception as e:
            logger.error(f"{self.name} error: {e}")
            return self.fallback_result()

        logger.info(f"{self.name}: Returned {len(result.papers)} papers")
        return result

    @abstractmethod
    async def _fetch(
        self,
        query: str,
        limit: int,
        subfield: Optional[Subfield],
    ) -> SearchResult:
        """Query the API and normalize its payload. May raise."""
        pass

    def _headers(self) -> Dict[str, str]:
        return default_headers(self.contact_email)

    async def _get_json(
        self,
        url: str,
        params: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """
        GET a JSON object, raising SourceError subclasses on failure.

        A fresh client is opened per call; sources hold no connections
        between requests.
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(url, params=params, headers=headers or self._headers())

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise SourceRateLimitError(
                self.name,
                int(retry_after) if retry_after and retry_after.isdigit() else None
            )

        if response.status_code != 200:
            raise SourceHTTPError(self.name, response.status_code, response.reason_phrase or None)

        try:
            data = response.json()
        except ValueError as e:
            raise SourceParseError(self.name, str(e))

        if not isinstance(data, dict):
            raise SourceParseError(self.name, f"expected a JSON object, got {type(data).__name__}")

        return data


def as_list(value: Any) -> List[Any]:
    """Treat a missing or null payload field as an empty list."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"expected a list, got {type(value).__name__}")
    return value
