"""
Main retrieval pipeline.

Orchestrates multi-source retrieval for one question:
1. Subfield detection
2. Parallel source fetching (settle-all, per-source timeout)
3. Deduplication and merge in source priority order
"""
import asyncio
import time
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from philsearch.core.config import settings
from philsearch.core.exceptions import SourceTimeoutError
from philsearch.core.logging import get_logger
from philsearch.schemas.events import ProgressStep
from philsearch.schemas.papers import PaperRecord, SearchResult, SourceStats, SourceTag
from philsearch.schemas.subfields import Subfield
from philsearch.services.classification import detect_subfield, extract_search_terms
from philsearch.services.sources import BaseSource, build_sources

from .merge import merge_results
from .types import OVERFETCH_FACTOR, ProgressCallback, _noop_callback

logger = get_logger(__name__)


async def _timed_search(
    source: BaseSource,
    query: str,
    limit: int,
    subfield: Optional[Subfield],
) -> Tuple[SearchResult, float]:
    """Run one source search under its own timeout and measure it."""
    start_time = time.perf_counter()
    try:
        result = await asyncio.wait_for(
            source.search(query, limit, subfield if source.accepts_subfield else None),
            timeout=source.timeout,
        )
    except asyncio.TimeoutError:
        raise SourceTimeoutError(source.name, source.timeout)
    return result, (time.perf_counter() - start_time) * 1000


async def _fetch_all_sources_async(
    sources: Sequence[BaseSource],
    query: str,
    limit: int,
    subfield: Optional[Subfield],
) -> Tuple[List[List[PaperRecord]], Dict[str, SourceStats]]:
    """
    Fetch papers from all sources in parallel using asyncio.

    Every source settles independently and never affects the others.
    A source that runs out of time contributes its fallback result,
    the same as when its own HTTP client times out. Any other failure
    leaves an empty list in its slot.

    Returns per-source paper lists in source order, plus stats.
    """
    tasks = [_timed_search(source, query, limit, subfield) for source in sources]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    paper_lists: List[List[PaperRecord]] = []
    stats: Dict[str, SourceStats] = {}

    for source, result in zip(sources, results):
        if isinstance(result, SourceTimeoutError):
            fallback = list(source.fallback_result().papers)
            logger.warning(f"{result}, using fallback ({len(fallback)} papers)")
            paper_lists.append(fallback)
            stats[source.tag.value] = SourceStats(count=len(fallback), elapsed_ms=None)
        elif isinstance(result, BaseException):
            logger.warning(f"{source.name} failed: {result!r}")
            paper_lists.append([])
            stats[source.tag.value] = SourceStats(count=0, elapsed_ms=None)
        else:
            search_result, elapsed_ms = result
            logger.info(f"{source.name}: {len(search_result.papers)} papers in {elapsed_ms:.0f}ms")
            paper_lists.append(list(search_result.papers))
            stats[source.tag.value] = SourceStats(count=len(search_result.papers), elapsed_ms=elapsed_ms)

    return paper_lists, stats


async def search_multi_source(
    query: str,
    limit: int = 5,
    sources: Optional[Sequence[BaseSource]] = None,
    on_progress: ProgressCallback = _noop_callback,
    threshold: Optional[float] = None,
) -> SearchResult:
    """
    Search every source in parallel and merge the results.

    Pipeline steps:
    1. Detect the philosophy subfield once
    2. Ask each source for limit * 2 papers concurrently
    3. If no source returned anything, return an empty result
    4. Otherwise merge in source priority order, keeping `limit` papers

    Args:
        query: The user's question
        limit: Maximum number of papers to return
        sources: Adapters in priority order (default: built from settings)
        on_progress: Callback function for progress updates
        threshold: Title similarity above which papers are duplicates
            (default: settings.duplicate_title_threshold)

    Returns:
        SearchResult whose `total` is the raw candidate count summed
        over all sources, before deduplication
    """
    if sources is None:
        sources = build_sources()
    if threshold is None:
        threshold = settings.duplicate_title_threshold

    on_progress(ProgressStep.DETECTING_SUBFIELD, "Detecting philosophy subfield...", None)
    detection = detect_subfield(query)
    subfield = detection.primary_subfield

    logger.info(
        f"Subfield detection: {subfield.value if subfield else 'none'} "
        f"(confidence: {detection.confidence:.2f}, keywords: {extract_search_terms(detection)})"
    )

    if not sources:
        logger.warning("No sources enabled!")
        return SearchResult(papers=[], total=0, source=SourceTag.MULTI_SOURCE, detected_subfield=subfield)

    on_progress(
        ProgressStep.SEARCHING_SOURCES,
        "Searching all sources in parallel...",
        ", ".join(source.name for source in sources),
    )

    start_time = time.perf_counter()
    paper_lists, stats = await _fetch_all_sources_async(
        sources, query, max(limit, 1) * OVERFETCH_FACTOR, subfield
    )
    elapsed = time.perf_counter() - start_time

    total = sum(len(papers) for papers in paper_lists)
    logger.info(f"TOTAL CANDIDATES: {total} (fetched in {elapsed:.1f}s)")

    if total == 0:
        logger.error("All sources returned no papers - returning empty results")
        return SearchResult(
            papers=[],
            total=0,
            source=SourceTag.MULTI_SOURCE,
            detected_subfield=subfield,
            source_stats=stats,
        )

    on_progress(ProgressStep.DEDUPLICATING, "Removing duplicate papers...", f"{total} total papers")
    # Pairwise title comparison is CPU bound
    merged = await asyncio.to_thread(merge_results, paper_lists, limit, threshold)

    on_progress(ProgressStep.COMPLETE, "Retrieval complete", f"{len(merged)} papers")
    logger.info(f"Multi-source search complete: {len(merged)} papers")

    return SearchResult(
        papers=merged,
        total=total,
        source=SourceTag.MULTI_SOURCE,
        detected_subfield=subfield,
        source_stats=stats,
    )


async def retrieve(
    question: str,
    limit: int = 5,
    credentials: Optional[Mapping[str, str]] = None,
    on_progress: ProgressCallback = _noop_callback,
) -> SearchResult:
    """
    Entry point used by request handlers.

    Builds the configured sources (per-call `credentials`, keyed by
    source tag, override configured API keys) and runs the multi-source
    search. Never raises; an unexpected failure yields an empty result.
    """
    try:
        sources = build_sources(credentials=credentials)
        return await search_multi_source(question, limit, sources=sources, on_progress=on_progress)
    except Exception as e:
        logger.error(f"Retrieval failed: {e}")
        return SearchResult.empty()


def run_retrieval(
    question: str,
    limit: int = 5,
    credentials: Optional[Mapping[str, str]] = None,
) -> SearchResult:
    """
    Sync wrapper around retrieve().

    Uses asyncio.run(), so call it only from code that is not already
    running an event loop (scripts, worker threads).
    """
    return asyncio.run(retrieve(question, limit, credentials))
