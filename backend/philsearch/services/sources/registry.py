"""
Source registry.

Maps configured source tags to adapter classes and builds the adapter
list for a request. Order of ENABLED_SOURCES is merge priority order.
"""
from typing import Dict, List, Mapping, Optional, Type

from philsearch.core.config import Settings, settings as default_settings
from philsearch.core.logging import get_logger
from philsearch.schemas.papers import SourceTag

from .base import BaseSource
from .core import CoreSource
from .crossref import CrossRefSource
from .openalex import OpenAlexSource
from .semantic_scholar import SemanticScholarSource

logger = get_logger(__name__)

SOURCE_CLASSES: Dict[str, Type[BaseSource]] = {
    SourceTag.SEMANTIC_SCHOLAR.value: SemanticScholarSource,
    SourceTag.CROSSREF.value: CrossRefSource,
    SourceTag.CORE.value: CoreSource,
    SourceTag.OPENALEX.value: OpenAlexSource,
}


def _configured_key(config: Settings, tag: str) -> Optional[str]:
    if tag == SourceTag.SEMANTIC_SCHOLAR.value:
        return config.SEMANTIC_SCHOLAR_API_KEY
    if tag == SourceTag.CORE.value:
        return config.CORE_API_KEY
    return None


def build_sources(
    config: Optional[Settings] = None,
    credentials: Optional[Mapping[str, str]] = None,
) -> List[BaseSource]:
    """
    Instantiate the enabled sources in priority order.

    Args:
        config: Settings to read enabled sources, keys and timeout from
        credentials: Per-call API keys keyed by source tag; these take
            precedence over configured keys

    Returns:
        Adapters ready to search. Sources that need credentials and have
        none are left out.
    """
    config = config or default_settings
    credentials = credentials or {}
    sources: List[BaseSource] = []
    seen = set()

    for tag in config.ENABLED_SOURCES:
        if tag in seen:
            continue
        seen.add(tag)

        source_class = SOURCE_CLASSES.get(tag)
        if source_class is None:
            logger.warning(f"Unknown source '{tag}' in configuration, ignoring")
            continue

        source = source_class(
            api_key=credentials.get(tag) or _configured_key(config, tag),
            timeout=config.SOURCE_TIMEOUT_SECONDS,
            contact_email=config.API_CONTACT_EMAIL,
        )

        if source.requires_credentials and not source.has_credentials:
            logger.info(f"{source.name}: credentials missing, source skipped")
            continue

        sources.append(source)

    return sources
