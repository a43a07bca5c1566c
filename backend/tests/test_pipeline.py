"""Tests for services/retrieval/pipeline.py - Multi-source orchestration."""
import asyncio
from unittest.mock import patch

import httpx
import pytest

from philsearch.schemas.events import ProgressStep
from philsearch.schemas.papers import SourceTag
from philsearch.schemas.subfields import Subfield
from philsearch.services.retrieval import retrieve, run_retrieval, search_multi_source
from philsearch.services.sources.crossref import FALLBACK_PAPER, CrossRefSource

QUESTION = "What is knowledge and justification?"


@pytest.fixture
def crossref_papers(make_paper):
    return [
        make_paper("Is justified true belief knowledge", source=SourceTag.CROSSREF),
        make_paper("Virtue Epistemology", source=SourceTag.CROSSREF),
    ]


class TestSearchMultiSource:
    """Test the parallel search and merge."""

    @pytest.mark.asyncio
    async def test_all_sources_empty(self, make_source):
        sources = [
            make_source(tag=SourceTag.SEMANTIC_SCHOLAR),
            make_source(tag=SourceTag.CROSSREF),
        ]

        result = await search_multi_source(QUESTION, 5, sources=sources)

        assert result.papers == []
        assert result.total == 0
        assert result.source == SourceTag.MULTI_SOURCE

    @pytest.mark.asyncio
    async def test_no_sources(self):
        result = await search_multi_source(QUESTION, 5, sources=[])

        assert result.papers == []
        assert result.total == 0
        assert result.detected_subfield == Subfield.EPISTEMOLOGY

    @pytest.mark.asyncio
    async def test_merges_in_priority_order(self, make_source, sample_papers, crossref_papers):
        sources = [
            make_source(sample_papers, tag=SourceTag.SEMANTIC_SCHOLAR),
            make_source(crossref_papers, tag=SourceTag.CROSSREF),
        ]

        result = await search_multi_source(QUESTION, 10, sources=sources)

        titles = [p.title for p in result.papers]
        # the CrossRef copy of the Gettier paper is dropped in favour of Semantic Scholar's
        assert titles == [p.title for p in sample_papers] + ["Virtue Epistemology"]
        assert result.papers[1].source == SourceTag.SEMANTIC_SCHOLAR

    @pytest.mark.asyncio
    async def test_total_is_raw_candidate_count(self, make_source, sample_papers, crossref_papers):
        sources = [
            make_source(sample_papers, tag=SourceTag.SEMANTIC_SCHOLAR),
            make_source(crossref_papers, tag=SourceTag.CROSSREF),
        ]

        result = await search_multi_source(QUESTION, 3, sources=sources)

        assert len(result.papers) == 3
        assert result.total == 7

    @pytest.mark.asyncio
    async def test_each_source_asked_for_twice_the_limit(self, make_source):
        first = make_source(tag=SourceTag.SEMANTIC_SCHOLAR)
        second = make_source(tag=SourceTag.CROSSREF)

        await search_multi_source(QUESTION, 4, sources=[first, second])

        assert first.calls[0]["limit"] == 8
        assert second.calls[0]["limit"] == 8

    @pytest.mark.asyncio
    async def test_failing_source_does_not_block_others(self, make_source, crossref_papers):
        sources = [
            make_source(tag=SourceTag.SEMANTIC_SCHOLAR, error=RuntimeError("down")),
            make_source(crossref_papers, tag=SourceTag.CROSSREF),
        ]

        result = await search_multi_source(QUESTION, 5, sources=sources)

        assert [p.title for p in result.papers] == [p.title for p in crossref_papers]
        assert result.total == 2

    @pytest.mark.asyncio
    async def test_search_exception_outside_adapter_boundary(self, make_source, crossref_papers):
        """A source whose search() itself raises contributes an empty list."""
        broken = make_source(tag=SourceTag.SEMANTIC_SCHOLAR)
        working = make_source(crossref_papers, tag=SourceTag.CROSSREF)

        with patch.object(broken, "search", side_effect=RuntimeError("boom")):
            result = await search_multi_source(QUESTION, 5, sources=[broken, working])

        assert len(result.papers) == 2
        assert result.source_stats["semantic-scholar"].count == 0
        assert result.source_stats["semantic-scholar"].elapsed_ms is None

    @pytest.mark.asyncio
    async def test_slow_source_times_out(self, make_source, sample_papers, crossref_papers):
        slow = make_source(sample_papers, tag=SourceTag.SEMANTIC_SCHOLAR, delay=1.0, timeout=0.05)
        fast = make_source(crossref_papers, tag=SourceTag.CROSSREF)

        result = await search_multi_source(QUESTION, 5, sources=[slow, fast])

        assert [p.source for p in result.papers] == [SourceTag.CROSSREF, SourceTag.CROSSREF]
        assert result.source_stats["semantic-scholar"].elapsed_ms is None
        assert result.source_stats["crossref"].count == 2

    @pytest.mark.asyncio
    async def test_slow_crossref_returns_fallback(self):
        """Running out of time gives the same fallback as a failed request."""
        async def slow_handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(1.0)
            return httpx.Response(200, json={})

        slow = CrossRefSource(timeout=0.1, transport=httpx.MockTransport(slow_handler))
        unavailable = CrossRefSource(transport=httpx.MockTransport(lambda request: httpx.Response(503, json={})))

        timed_out = await search_multi_source(QUESTION, 5, sources=[slow])
        failed = await search_multi_source(QUESTION, 5, sources=[unavailable])

        assert timed_out.papers == [FALLBACK_PAPER]
        assert failed.papers == [FALLBACK_PAPER]
        assert timed_out.source_stats["crossref"].count == 1
        assert timed_out.source_stats["crossref"].elapsed_ms is None

    @pytest.mark.asyncio
    async def test_threshold_argument_controls_deduplication(self, make_source, make_paper):
        s2 = make_source([make_paper("The Nature of Truth")], tag=SourceTag.SEMANTIC_SCHOLAR)
        crossref = make_source([make_paper("The Nature of Truths", source=SourceTag.CROSSREF)], tag=SourceTag.CROSSREF)

        default = await search_multi_source(QUESTION, 5, sources=[s2, crossref])
        strict = await search_multi_source(QUESTION, 5, sources=[s2, crossref], threshold=0.99)

        assert len(default.papers) == 1
        assert [p.title for p in strict.papers] == ["The Nature of Truth", "The Nature of Truths"]

    @pytest.mark.asyncio
    async def test_subfield_passed_only_to_accepting_sources(self, make_source):
        accepting = make_source(tag=SourceTag.SEMANTIC_SCHOLAR)
        ignoring = make_source(tag=SourceTag.CORE, accepts_subfield=False)

        result = await search_multi_source(QUESTION, 5, sources=[accepting, ignoring])

        assert result.detected_subfield == Subfield.EPISTEMOLOGY
        assert accepting.calls[0]["subfield"] == Subfield.EPISTEMOLOGY
        assert ignoring.calls[0]["subfield"] is None

    @pytest.mark.asyncio
    async def test_query_passed_unchanged(self, make_source):
        source = make_source()

        await search_multi_source(QUESTION, 5, sources=[source])

        assert source.calls[0]["query"] == QUESTION

    @pytest.mark.asyncio
    async def test_no_subfield_detected(self, make_source, sample_papers):
        source = make_source(sample_papers)

        result = await search_multi_source("asdf qwerty", 5, sources=[source])

        assert result.detected_subfield is None
        assert source.calls[0]["subfield"] is None
        assert len(result.papers) == 5

    @pytest.mark.asyncio
    async def test_progress_steps_reported(self, make_source, sample_papers):
        steps = []

        def on_progress(step, message, detail):
            steps.append(step)

        await search_multi_source(QUESTION, 5, sources=[make_source(sample_papers)], on_progress=on_progress)

        assert steps == [
            ProgressStep.DETECTING_SUBFIELD,
            ProgressStep.SEARCHING_SOURCES,
            ProgressStep.DEDUPLICATING,
            ProgressStep.COMPLETE,
        ]

    @pytest.mark.asyncio
    async def test_source_stats(self, make_source, sample_papers):
        result = await search_multi_source(QUESTION, 5, sources=[make_source(sample_papers)])

        stats = result.source_stats["semantic-scholar"]
        assert stats.count == 5
        assert stats.elapsed_ms is not None


class TestRetrieve:
    """Test the request-level entry points."""

    @pytest.mark.asyncio
    async def test_retrieve_uses_registry(self, make_source, sample_papers):
        fake = make_source(sample_papers)

        with patch("philsearch.services.retrieval.pipeline.build_sources", return_value=[fake]) as mock_build:
            result = await retrieve(QUESTION, 3, credentials={"core": "key"})

        mock_build.assert_called_once_with(credentials={"core": "key"})
        assert len(result.papers) == 3

    @pytest.mark.asyncio
    async def test_retrieve_never_raises(self):
        with patch("philsearch.services.retrieval.pipeline.build_sources", side_effect=RuntimeError("config broken")):
            result = await retrieve(QUESTION)

        assert result.papers == []
        assert result.total == 0

    def test_run_retrieval_sync(self, make_source, sample_papers):
        fake = make_source(sample_papers)

        with patch("philsearch.services.retrieval.pipeline.build_sources", return_value=[fake]):
            result = run_retrieval(QUESTION, 2)

        assert len(result.papers) == 2
        assert result.total == 5
